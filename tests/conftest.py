from __future__ import annotations

import os
import re

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("EMAIL_BACKEND", "consola")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine, select

from cuentas.db.session import get_session
from cuentas.main import app
from cuentas.models.usuario import Usuario
from cuentas.services.email_service import EmailDispatcher, get_email_dispatcher


CSRF_RE = re.compile(r'name="_csrf" value="([^"]+)"')


class FakeEmailDispatcher(EmailDispatcher):
    def __init__(self):
        super().__init__(base_url="http://testserver", backend="consola")
        self.enviados: list[tuple[str, dict]] = []

    def send(self, plantilla: str, datos: dict):
        self.enviados.append((plantilla, dict(datos)))


@pytest.fixture(scope="function")
def test_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    try:
        yield engine
    finally:
        SQLModel.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def emails():
    return FakeEmailDispatcher()


@pytest.fixture(scope="function")
def client(test_engine, emails):
    def override_get_session():
        with Session(test_engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_email_dispatcher] = lambda: emails

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def session(test_engine):
    with Session(test_engine) as session:
        yield session


@pytest.fixture
def csrf(client):
    """Token CSRF de la sesión actual del cliente."""
    def _csrf(path: str = "/auth/login") -> str:
        response = client.get(path)
        match = CSRF_RE.search(response.text)
        assert match, "El formulario no incluye token CSRF"
        return match.group(1)

    return _csrf


@pytest.fixture
def buscar_usuario(test_engine):
    def _buscar(email: str) -> Usuario | None:
        with Session(test_engine) as s:
            return s.exec(select(Usuario).where(Usuario.email == email)).first()

    return _buscar


@pytest.fixture
def registrar(client, csrf):
    def _registrar(**campos):
        datos = {
            "nombre": "Ana",
            "email": "ana@x.com",
            "telefono": "12345678",
            "contrasena": "abcde",
            "repetir_contrasena": "abcde",
            **campos,
        }
        datos["_csrf"] = csrf("/auth/registro")
        return client.post("/auth/registro", data=datos)

    return _registrar
