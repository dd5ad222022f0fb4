from pydantic_settings import BaseSettings
import os


class Settings(BaseSettings):
    PROJECT_NAME: str = "Cuentas"

    # ========================
    # DATABASE
    # ========================
    DATABASE_URL: str = "sqlite:///./cuentas.db"

    # ========================
    # SECURITY / JWT
    # ========================
    SECRET_KEY: str = "dev-secret-key-cambia-esto"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    SESSION_COOKIE: str = "_token"
    COOKIE_SECURE: bool = False

    # ========================
    # PASSWORD
    # ========================
    PWD_SCHEME: str = "argon2"

    # ========================
    # APP MODE
    # ========================
    ENV: str = "development"
    APP_URL: str | None = None
    TRUST_PROXY_HEADERS: bool = False

    # ========================
    # EMAIL
    # ========================
    EMAIL_BACKEND: str | None = None  # smtp | consola (por defecto: consola solo en development)
    SMTP_HOST: str | None = None
    SMTP_PORT: int = 587
    SMTP_USER: str | None = None
    SMTP_PASSWORD: str | None = None
    SMTP_SSL: bool = False
    EMAIL_FROM: str = "no-reply@localhost"
    EMAIL_TLS: bool = True

    class Config:
        env_file = ".env.dev" if os.getenv("RENDER") is None else None


settings = Settings()
