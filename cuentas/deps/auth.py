from typing import Optional

from fastapi import Depends, Request

from cuentas.models.usuario import Usuario
from cuentas.repositories.usuario_repository import UsuarioRepository, get_usuario_repository


def get_current_user(
    request: Request,
    repo: UsuarioRepository = Depends(get_usuario_repository),
) -> Optional[Usuario]:
    sesion = getattr(request.state, "usuario", None)
    if not sesion:
        return None

    usuario = repo.find_by_id(sesion["id"])

    if not usuario or not usuario.confirmado:
        return None

    return usuario
