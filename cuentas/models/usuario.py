from sqlmodel import SQLModel, Field
from sqlalchemy import DateTime
from typing import Optional
from datetime import datetime, timezone


class UsuarioBase(SQLModel):
    nombre: str
    email: str = Field(index=True, unique=True)
    telefono: str = Field(max_length=8)


class Usuario(UsuarioBase, table=True):
    __tablename__ = "usuarios"

    id: Optional[int] = Field(default=None, primary_key=True)

    contrasena: str                      # siempre hash, nunca texto plano
    token: Optional[str] = Field(default=None, index=True)
    confirmado: bool = False

    creado: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )


class UsuarioCrear(UsuarioBase):
    """Datos de alta. La contraseña llega en claro y se hashea al persistir."""
    contrasena: str
    token: Optional[str] = None
