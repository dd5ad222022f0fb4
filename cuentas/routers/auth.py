from fastapi import APIRouter, Request, Form, Depends
from fastapi.responses import RedirectResponse

from cuentas.core.config import settings
from cuentas.core.logger import logger
from cuentas.core.security import verify_password, create_access_token, ACCESS_TOKEN_EXPIRE_MINUTES
from cuentas.core.templates import templates
from cuentas.middleware.csrf import verificar_csrf
from cuentas.repositories.usuario_repository import UsuarioRepository, get_usuario_repository
from cuentas.utils.request_context import get_ip
from cuentas.utils.validacion import error, normalizar_email, validar_login

router = APIRouter(prefix="/auth", tags=["Auth"], dependencies=[Depends(verificar_csrf)])


def _login_error(request: Request, errores: list[dict], email: str, status_code: int):
    return templates.TemplateResponse(
        request,
        "auth/login.html",
        {
            "pagina": "Iniciar Sesión",
            "errores": errores,
            "usuario": {"email": email},
        },
        status_code=status_code,
    )


@router.get("/login")
def login_form(request: Request):
    response = templates.TemplateResponse(
        request,
        "auth/login.html",
        {"pagina": "Iniciar Sesión", "errores": []}
    )
    response.delete_cookie(settings.SESSION_COOKIE)
    return response


@router.post("/login")
def login(
    request: Request,
    email: str = Form(""),
    contrasena: str = Form(""),
    repo: UsuarioRepository = Depends(get_usuario_repository),
):
    errores = validar_login(email, contrasena)
    if errores:
        return _login_error(request, errores, email, status_code=400)

    email = normalizar_email(email)

    # ========================
    # COMPROBACIONES EN ORDEN
    # ========================
    usuario = repo.find_by_email(email)

    if not usuario:
        logger.info(f"Login fallido (no existe) ip={get_ip(request)}")
        return _login_error(
            request, [error("email", "El Usuario no existe")], email, status_code=401
        )

    if not usuario.confirmado:
        logger.info(f"Login fallido (sin confirmar) id={usuario.id} ip={get_ip(request)}")
        return _login_error(
            request, [error("email", "La Cuenta no ha sido confirmada")], email, status_code=401
        )

    if not verify_password(contrasena, usuario.contrasena):
        logger.info(f"Login fallido (contraseña) id={usuario.id} ip={get_ip(request)}")
        return _login_error(
            request, [error("contrasena", "La Contraseña es incorrecta")], email, status_code=401
        )

    # ========================
    # SESIÓN (JWT EN COOKIE)
    # ========================
    token = create_access_token(usuario.id, {"nombre": usuario.nombre})

    response = RedirectResponse("/", status_code=303)
    response.set_cookie(
        settings.SESSION_COOKIE,
        token,
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )

    logger.info(f"Login correcto id={usuario.id}")
    return response


@router.post("/cerrar-sesion")
def logout(request: Request):
    response = RedirectResponse("/auth/login", status_code=303)
    response.delete_cookie(settings.SESSION_COOKIE)
    return response
