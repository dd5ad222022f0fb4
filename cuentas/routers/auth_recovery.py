from fastapi import APIRouter, Request, Depends, Form

from cuentas.core.logger import logger
from cuentas.core.security import generar_id, get_password_hash
from cuentas.core.templates import templates
from cuentas.middleware.csrf import verificar_csrf
from cuentas.repositories.usuario_repository import UsuarioRepository, get_usuario_repository
from cuentas.services.email_service import EmailDispatcher, get_email_dispatcher
from cuentas.utils.validacion import error, normalizar_email, validar_email, validar_nueva_contrasena

router = APIRouter(prefix="/auth", tags=["Recuperación"], dependencies=[Depends(verificar_csrf)])


def _token_invalido(request: Request):
    return templates.TemplateResponse(
        request,
        "auth/confirmar.html",
        {
            "pagina": "Restablece tu Contraseña",
            "mensaje": "Hubo un error al validar tu información, intenta de nuevo",
            "error": True,
        },
        status_code=400,
    )


# =========================
# FORMULARIO
# =========================
@router.get("/olvide-password")
def forgot_password_form(request: Request):
    return templates.TemplateResponse(
        request,
        "auth/olvide_password.html",
        {"pagina": "Recupera tu Contraseña", "errores": []},
    )


# =========================
# RECUPERACIÓN POR EMAIL
# =========================
@router.post("/olvide-password")
def forgot_password_email(
    request: Request,
    email: str = Form(""),
    repo: UsuarioRepository = Depends(get_usuario_repository),
    emails: EmailDispatcher = Depends(get_email_dispatcher),
):
    errores = validar_email(email)
    if errores:
        return templates.TemplateResponse(
            request,
            "auth/olvide_password.html",
            {"pagina": "Recupera tu Acceso", "errores": errores},
            status_code=400,
        )

    usuario = repo.find_by_email(normalizar_email(email))

    if not usuario:
        return templates.TemplateResponse(
            request,
            "auth/olvide_password.html",
            {
                "pagina": "Recupera tu Acceso",
                "errores": [error("email", "El email no pertenece a ningún usuario")],
            },
            status_code=404,
        )

    # Un token nuevo invalida cualquier enlace pendiente
    usuario.token = generar_id()
    repo.update(usuario)

    emails.email_olvide_password(nombre=usuario.nombre, email=usuario.email, token=usuario.token)
    logger.info(f"Reset de contraseña solicitado id={usuario.id}")

    return templates.TemplateResponse(
        request,
        "mensaje.html",
        {
            "pagina": "Restablece tu Contraseña",
            "mensaje": "Hemos enviado un email con las instrucciones",
        },
    )


# =========================
# FORMULARIO RESET TOKEN
# =========================
@router.get("/olvide-password/{token}")
def reset_password_form(
    request: Request,
    token: str,
    repo: UsuarioRepository = Depends(get_usuario_repository),
):
    if not repo.find_by_token(token):
        return _token_invalido(request)

    return templates.TemplateResponse(
        request,
        "auth/reset_password.html",
        {"pagina": "Restablece tu Contraseña", "token": token, "errores": []},
    )


# =========================
# CONFIRMAR RESET TOKEN
# =========================
@router.post("/olvide-password/{token}")
def reset_password(
    request: Request,
    token: str,
    contrasena: str = Form(""),
    contrasena_repetida: str = Form("", alias="contrasenaRepetida"),
    repo: UsuarioRepository = Depends(get_usuario_repository),
):
    errores = validar_nueva_contrasena(contrasena, contrasena_repetida)
    if errores:
        return templates.TemplateResponse(
            request,
            "auth/reset_password.html",
            {
                "pagina": "Restablece tu Contraseña",
                "token": token,
                "errores": errores,
            },
            status_code=400,
        )

    usuario = repo.find_by_token(token)
    if not usuario:
        return _token_invalido(request)

    usuario.contrasena = get_password_hash(contrasena)
    usuario.token = None

    if not repo.update(usuario, token_esperado=token):
        return _token_invalido(request)

    logger.info(f"Contraseña restablecida id={usuario.id}")

    return templates.TemplateResponse(
        request,
        "auth/confirmar.html",
        {
            "pagina": "Contraseña Restablecida",
            "mensaje": "La Contraseña se guardó correctamente",
            "error": False,
        },
    )
