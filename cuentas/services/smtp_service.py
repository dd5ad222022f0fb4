import smtplib
import ssl

from cuentas.core.config import settings


TIMEOUT = 30


def smtp_connect(config=settings):
    user = config.SMTP_USER
    password = config.SMTP_PASSWORD

    if not config.SMTP_HOST:
        raise RuntimeError("SMTP no está configurado")

    # =========================
    # SSL DIRECTO (PUERTO 465)
    # =========================
    if config.SMTP_SSL:
        context = ssl.create_default_context()
        server = smtplib.SMTP_SSL(
            config.SMTP_HOST,
            config.SMTP_PORT,
            context=context,
            timeout=TIMEOUT
        )

        if user:
            server.login(user, password)

        return server

    # =========================
    # STARTTLS
    # =========================
    server = smtplib.SMTP(
        config.SMTP_HOST,
        config.SMTP_PORT,
        timeout=TIMEOUT
    )

    server.ehlo()

    if config.EMAIL_TLS:
        context = ssl.create_default_context()
        server.starttls(context=context)
        server.ehlo()

    if user:
        server.login(user, password)

    return server
