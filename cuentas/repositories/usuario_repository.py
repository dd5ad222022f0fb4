# cuentas/repositories/usuario_repository.py

from __future__ import annotations
from typing import Optional

from fastapi import Depends
from sqlalchemy import update as sa_update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from cuentas.core.errors import InfrastructureError
from cuentas.core.logger import logger
from cuentas.core.security import get_password_hash
from cuentas.db.session import get_session
from cuentas.models.usuario import Usuario, UsuarioCrear


class EmailDuplicadoError(Exception):
    pass


class UsuarioRepository:
    """
    Acceso a la tabla de usuarios.
    Los errores de base de datos se elevan como InfrastructureError.
    """

    def __init__(self, session: Session):
        self.session = session

    # =========================
    # LECTURAS
    # =========================
    def find_by_id(self, usuario_id: int) -> Optional[Usuario]:
        try:
            return self.session.get(Usuario, usuario_id)
        except SQLAlchemyError as e:
            raise InfrastructureError(str(e), origen="db") from e

    def find_by_email(self, email: str) -> Optional[Usuario]:
        try:
            return self.session.exec(
                select(Usuario).where(Usuario.email == email)
            ).first()
        except SQLAlchemyError as e:
            raise InfrastructureError(str(e), origen="db") from e

    def find_by_token(self, token: str) -> Optional[Usuario]:
        if not token:
            return None
        try:
            return self.session.exec(
                select(Usuario).where(Usuario.token == token)
            ).first()
        except SQLAlchemyError as e:
            raise InfrastructureError(str(e), origen="db") from e

    # =========================
    # ESCRITURAS
    # =========================
    def create(self, datos: UsuarioCrear, commit: bool = True) -> Usuario:
        """
        Da de alta al usuario con la contraseña hasheada.
        Con commit=False solo hace flush: el llamador confirma con commit()
        o descarta con rollback().
        """
        usuario = Usuario(
            nombre=datos.nombre,
            email=datos.email,
            telefono=datos.telefono,
            contrasena=get_password_hash(datos.contrasena),
            token=datos.token,
            confirmado=False,
        )
        self.session.add(usuario)

        try:
            if commit:
                self.session.commit()
                self.session.refresh(usuario)
            else:
                self.session.flush()
        except IntegrityError as e:
            self.session.rollback()
            raise EmailDuplicadoError(datos.email) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise InfrastructureError(str(e), origen="db") from e

        logger.info(f"Usuario creado id={usuario.id}")
        return usuario

    def commit(self):
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise InfrastructureError(str(e), origen="db") from e

    def rollback(self):
        self.session.rollback()

    def update(self, usuario: Usuario, token_esperado: str | None = None) -> bool:
        """
        Persiste los cambios del usuario.

        Con token_esperado la escritura solo se aplica si la fila sigue
        teniendo ese token; devuelve False si otra petición ya lo consumió.
        """
        try:
            if token_esperado is None:
                self.session.add(usuario)
                self.session.commit()
                self.session.refresh(usuario)
                return True

            valores = usuario.model_dump(exclude={"id", "creado"})

            resultado = self.session.connection().execute(
                sa_update(Usuario)
                .where(Usuario.id == usuario.id)
                .where(Usuario.token == token_esperado)
                .values(**valores)
            )

            if resultado.rowcount != 1:
                self.session.rollback()
                logger.warning(f"Token ya consumido para usuario id={usuario.id}")
                return False

            self.session.commit()
            self.session.refresh(usuario)
            return True

        except SQLAlchemyError as e:
            self.session.rollback()
            raise InfrastructureError(str(e), origen="db") from e


def get_usuario_repository(session: Session = Depends(get_session)) -> UsuarioRepository:
    return UsuarioRepository(session)
