from typing import Optional
from fastapi import Request

from cuentas.core.config import settings


def get_ip(request: Request) -> Optional[str]:
    # x-forwarded-for solo detrás de un proxy de confianza
    if settings.TRUST_PROXY_HEADERS:
        xff = request.headers.get("x-forwarded-for")
        if xff:
            return xff.split(",")[0].strip()
    return request.client.host if request.client else None


def get_app_url(request: Request) -> str:
    """
    URL base para los enlaces de los emails.
    Las cabeceras x-forwarded-* las controla el cliente: solo se usan
    con TRUST_PROXY_HEADERS activado.
    """
    if settings.APP_URL:
        return settings.APP_URL.rstrip("/")

    if settings.TRUST_PROXY_HEADERS:
        forwarded_proto = request.headers.get("x-forwarded-proto")
        forwarded_host = request.headers.get("x-forwarded-host")
        if forwarded_proto and forwarded_host:
            return f"{forwarded_proto}://{forwarded_host}"

    return str(request.base_url).rstrip("/")
