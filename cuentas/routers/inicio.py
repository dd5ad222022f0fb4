from typing import Optional

from fastapi import APIRouter, Request, Depends
from fastapi.responses import RedirectResponse

from cuentas.core.templates import templates
from cuentas.deps.auth import get_current_user
from cuentas.models.usuario import Usuario

router = APIRouter()


@router.get("/")
def inicio(request: Request, usuario: Optional[Usuario] = Depends(get_current_user)):
    if not usuario:
        return RedirectResponse("/auth/login", status_code=303)

    return templates.TemplateResponse(
        request,
        "inicio.html",
        {"pagina": "Inicio", "usuario": usuario},
    )
