from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from cuentas.core.config import settings
from cuentas.core.errors import InfrastructureError, infrastructure_error_handler
from cuentas.core.logger import logger
from cuentas.db.base import init_db

# =========================
# ROUTERS
# =========================
from cuentas.routers.auth import router as auth_router
from cuentas.routers.registro import router as registro_router
from cuentas.routers.auth_recovery import router as recovery_router
from cuentas.routers.inicio import router as inicio_router

# =========================
# MIDDLEWARE
# =========================
from cuentas.middleware.csrf import CSRFMiddleware
from cuentas.middleware.sesion import SesionMiddleware


BASE_DIR = Path(__file__).resolve().parent


# ============================================================
# STARTUP
# ============================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f">>> {settings.PROJECT_NAME} listo ({settings.ENV})")
    yield


# ============================================================
# APP
# ============================================================
app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")


# ============================================================
# MIDDLEWARE → el último añadido es el más externo
# ============================================================
app.add_middleware(SesionMiddleware)
app.add_middleware(CSRFMiddleware)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    session_cookie="cuentas_session",
    same_site="lax",
    https_only=settings.COOKIE_SECURE,
)


# ============================================================
# ERRORES
# ============================================================
app.add_exception_handler(InfrastructureError, infrastructure_error_handler)


# ============================================================
# ROUTERS
# ============================================================
app.include_router(inicio_router)
app.include_router(auth_router)
app.include_router(registro_router)
app.include_router(recovery_router)
