import logging
import smtplib
from pathlib import Path

from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from fastapi import Request
from jinja2 import Environment, FileSystemLoader, select_autoescape

from cuentas.core.config import settings
from cuentas.core.errors import InfrastructureError
from cuentas.core.logger import logger
from cuentas.services.smtp_service import smtp_connect
from cuentas.utils.request_context import get_app_url


EMAILS_DIR = Path(__file__).resolve().parent.parent / "templates" / "emails"

env = Environment(
    loader=FileSystemLoader(str(EMAILS_DIR)),
    autoescape=select_autoescape(["html"]),
)

ASUNTOS = {
    "registro": "Confirma tu Cuenta",
    "olvide_password": "Restablece tu Contraseña",
}


def resolver_backend() -> str:
    if settings.EMAIL_BACKEND:
        return settings.EMAIL_BACKEND
    return "consola" if settings.ENV == "development" else "smtp"


class EmailDispatcher:
    """
    Envía los correos transaccionales de la cuenta.

    Cada plantilla tiene versión html y txt en templates/emails y recibe
    {nombre, email, token} más la URL base de la aplicación.
    """

    def __init__(self, base_url: str, backend: str | None = None):
        self.base_url = base_url.rstrip("/")
        self.backend = backend or resolver_backend()

    def send(self, plantilla: str, datos: dict):
        if plantilla not in ASUNTOS:
            raise ValueError(f"Plantilla de email desconocida: {plantilla}")

        contexto = {**datos, "app_url": self.base_url}
        subject = ASUNTOS[plantilla]
        html_body = env.get_template(f"{plantilla}.html").render(**contexto)
        text_body = env.get_template(f"{plantilla}.txt").render(**contexto)

        if self.backend == "consola":
            # los enlaces llevan tokens vivos: fuera de development solo en DEBUG
            nivel = logging.INFO if settings.ENV == "development" else logging.DEBUG
            logger.log(nivel, f"[EMAIL] {plantilla} → {datos['email']}\n{text_body}")
            return

        send_email(datos["email"], subject, html_body, text_body)
        logger.info(f"[EMAIL] {plantilla} enviado a {datos['email']}")

    # =========================
    # ATAJOS
    # =========================
    def email_registro(self, nombre: str, email: str, token: str):
        self.send("registro", {"nombre": nombre, "email": email, "token": token})

    def email_olvide_password(self, nombre: str, email: str, token: str):
        self.send("olvide_password", {"nombre": nombre, "email": email, "token": token})


# =========================
# ENVÍO SIMPLE
# =========================
def send_email(
    to_email: str,
    subject: str,
    html_body: str,
    text_body: str | None = None,
):
    msg = MIMEMultipart("alternative")
    sender = settings.EMAIL_FROM

    msg["From"] = sender
    msg["To"] = to_email
    msg["Subject"] = subject

    if text_body:
        msg.attach(MIMEText(text_body, "plain", "utf-8"))

    msg.attach(MIMEText(html_body, "html", "utf-8"))

    try:
        server = smtp_connect(settings)
        try:
            server.sendmail(sender, [to_email], msg.as_string())
        finally:
            server.quit()
    except (smtplib.SMTPException, OSError, RuntimeError) as e:
        raise InfrastructureError(f"Error enviando email: {e}", origen="smtp") from e


def get_email_dispatcher(request: Request) -> EmailDispatcher:
    return EmailDispatcher(base_url=get_app_url(request))
