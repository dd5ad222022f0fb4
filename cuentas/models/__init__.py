from .usuario import Usuario, UsuarioCrear

__all__ = [
    "Usuario",
    "UsuarioCrear",
]
