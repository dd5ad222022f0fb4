from fastapi import APIRouter, Request, Form, Depends

from cuentas.core.logger import logger
from cuentas.core.security import generar_id
from cuentas.core.templates import templates
from cuentas.middleware.csrf import verificar_csrf
from cuentas.models.usuario import UsuarioCrear
from cuentas.repositories.usuario_repository import (
    EmailDuplicadoError,
    UsuarioRepository,
    get_usuario_repository,
)
from cuentas.services.email_service import EmailDispatcher, get_email_dispatcher
from cuentas.utils.validacion import error, normalizar_email, validar_registro

router = APIRouter(prefix="/auth", tags=["Registro"], dependencies=[Depends(verificar_csrf)])


def _email_duplicado(request: Request, nombre: str, email: str):
    return templates.TemplateResponse(
        request,
        "auth/registro.html",
        {
            "pagina": "Crear Cuenta",
            "errores": [error("email", "El Email ya está registrado")],
            "usuario": {"nombre": nombre, "email": email},
        },
        status_code=400,
    )


@router.get("/registro")
def registro_form(request: Request):
    return templates.TemplateResponse(
        request,
        "auth/registro.html",
        {"pagina": "Crear Cuenta", "errores": []}
    )


@router.post("/registro")
def registro_submit(
    request: Request,
    nombre: str = Form(""),
    email: str = Form(""),
    telefono: str = Form(""),
    contrasena: str = Form(""),
    repetir_contrasena: str = Form(""),
    repo: UsuarioRepository = Depends(get_usuario_repository),
    emails: EmailDispatcher = Depends(get_email_dispatcher),
):
    # =============================
    # VALIDAR CAMPOS
    # =============================
    errores = validar_registro(nombre, email, telefono, contrasena, repetir_contrasena)

    if errores:
        return templates.TemplateResponse(
            request,
            "auth/registro.html",
            {
                "pagina": "Crear Cuenta",
                "errores": errores,
                "usuario": {"nombre": nombre, "email": email, "telefono": telefono},
            },
            status_code=400,
        )

    email = normalizar_email(email)

    # =============================
    # VALIDAR EMAIL DUPLICADO
    # =============================
    if repo.find_by_email(email):
        return _email_duplicado(request, nombre, email)

    # =============================
    # CREAR USUARIO
    # =============================
    # El alta solo se confirma si el email de confirmación sale
    try:
        usuario = repo.create(
            UsuarioCrear(
                nombre=nombre.strip(),
                email=email,
                telefono=telefono,
                contrasena=contrasena,
                token=generar_id(),
            ),
            commit=False,
        )
    except EmailDuplicadoError:
        return _email_duplicado(request, nombre, email)

    try:
        emails.email_registro(nombre=usuario.nombre, email=usuario.email, token=usuario.token)
    except Exception:
        repo.rollback()
        raise

    repo.commit()
    logger.info(f"Registro pendiente de confirmación id={usuario.id}")

    return templates.TemplateResponse(
        request,
        "mensaje.html",
        {
            "pagina": "Cuenta Creada Correctamente",
            "mensaje": "Te hemos enviado un Email de Confirmación, haz click en el enlace del Email",
        },
    )


@router.get("/confirmar/{token}")
def confirmar(
    request: Request,
    token: str,
    repo: UsuarioRepository = Depends(get_usuario_repository),
):
    usuario = repo.find_by_token(token)

    if usuario:
        usuario.token = None
        usuario.confirmado = True

        if repo.update(usuario, token_esperado=token):
            logger.info(f"Cuenta confirmada id={usuario.id}")
            return templates.TemplateResponse(
                request,
                "auth/confirmar.html",
                {
                    "pagina": "Cuenta Confirmada",
                    "mensaje": "La cuenta se confirmó correctamente",
                    "error": False,
                },
            )

    return templates.TemplateResponse(
        request,
        "auth/confirmar.html",
        {
            "pagina": "Error al confirmar la cuenta",
            "mensaje": "Hubo un error al confirmar la cuenta. Intente de nuevo",
            "error": True,
        },
        status_code=400,
    )
