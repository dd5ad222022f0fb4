from fastapi import Request

from cuentas.core.logger import logger


class InfrastructureError(Exception):
    """
    Fallo de un colaborador externo (base de datos, servidor de correo).
    Se traduce en una respuesta 500 en lugar de romper la petición.
    """

    def __init__(self, mensaje: str, origen: str | None = None):
        super().__init__(mensaje)
        self.mensaje = mensaje
        self.origen = origen


async def infrastructure_error_handler(request: Request, exc: InfrastructureError):
    from cuentas.core.templates import templates

    logger.error(f"[INFRA] {exc.origen or 'desconocido'}: {exc.mensaje}")

    return templates.TemplateResponse(
        request,
        "500.html",
        {
            "pagina": "Error del servidor",
            "mensaje": "Ha ocurrido un error inesperado. Intenta de nuevo más tarde",
        },
        status_code=500,
    )
