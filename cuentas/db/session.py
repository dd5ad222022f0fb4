from sqlmodel import Session, create_engine
from cuentas.core.config import settings


connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}  # ← necesario en SQLite

engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    connect_args=connect_args,
)

def get_session():
    with Session(engine) as session:
        yield session
