from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from cuentas.core.config import settings
from cuentas.core.logger import logger
from cuentas.core.security import decode_token


class SesionMiddleware(BaseHTTPMiddleware):
    """
    Lee la cookie de sesión (JWT) y deja {id, nombre} en
    request.state.usuario, o None si no hay sesión válida.
    """

    async def dispatch(self, request: Request, call_next):
        request.state.usuario = None

        token = request.cookies.get(settings.SESSION_COOKIE)
        if token:
            payload = decode_token(token)
            if payload and payload.get("sub"):
                request.state.usuario = {
                    "id": int(payload["sub"]),
                    "nombre": payload.get("nombre"),
                }
            else:
                logger.debug("[SESION] Cookie inválida o expirada")

        return await call_next(request)
