import jwt
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from passlib.context import CryptContext

from cuentas.core.config import settings


pwd_context = CryptContext(schemes=[settings.PWD_SCHEME], deprecated="auto")

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(settings.ACCESS_TOKEN_EXPIRE_MINUTES)


# ================= PASSWORD =================
def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    return pwd_context.verify(plain_password, password_hash)


# ================= TOKENS ===================
def generar_id() -> str:
    """Token opaco de un solo uso (confirmación de cuenta / reset)."""
    return secrets.token_urlsafe(32)


# ================= JWT ======================
def create_access_token(user_id: int,
                        extra_data: Optional[dict] = None,
                        expires_delta: Optional[timedelta] = None) -> str:

    data = extra_data.copy() if extra_data else {}
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    payload = {
        **data,
        "sub": str(user_id),
        "exp": expire,
    }

    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str):
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None
