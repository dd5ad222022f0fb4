import secrets

from fastapi import HTTPException, Request
from starlette.middleware.base import BaseHTTPMiddleware

from cuentas.core.logger import logger


CSRF_SESSION_KEY = "csrf_token"
CSRF_FORM_FIELD = "_csrf"
CSRF_HEADER = "x-csrf-token"

METODOS_PROTEGIDOS = ("POST", "PUT", "PATCH", "DELETE")


class CSRFMiddleware(BaseHTTPMiddleware):
    """
    Garantiza que cada sesión tenga un token CSRF; las vistas lo leen
    de la sesión con el global csrf_token(request).
    Requiere SessionMiddleware por fuera.
    """

    async def dispatch(self, request: Request, call_next):
        token = request.session.get(CSRF_SESSION_KEY)
        if not token:
            token = secrets.token_urlsafe(32)
            request.session[CSRF_SESSION_KEY] = token
        return await call_next(request)


async def verificar_csrf(request: Request):
    if request.method not in METODOS_PROTEGIDOS:
        return

    form = await request.form()
    enviado = form.get(CSRF_FORM_FIELD) or request.headers.get(CSRF_HEADER)
    esperado = request.session.get(CSRF_SESSION_KEY)

    if not enviado or not esperado or not secrets.compare_digest(str(enviado), esperado):
        logger.warning(f"[CSRF] Token inválido en {request.url.path}")
        raise HTTPException(403, "Token CSRF inválido")
