from sqlmodel import SQLModel

from cuentas.models.usuario import Usuario  # noqa: F401  registra la tabla


def init_db():
    from cuentas.db.session import engine
    SQLModel.metadata.create_all(engine)
