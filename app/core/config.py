# app/core/config.py
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field
from cryptography.hazmat.primitives import serialization

from app.core.errors import SecretNotFoundError

load_dotenv(os.path.join(os.getcwd(), f".env.{os.getenv('ENV', 'dev')}"))
load_dotenv()


def _default_database_url() -> str:
    if os.getenv("DATABASE_URL"):
        return os.environ["DATABASE_URL"]
    data_dir = os.path.abspath(os.getenv("DATA_DIR", "./data"))
    os.makedirs(data_dir, exist_ok=True)
    return f"sqlite:///{os.path.join(data_dir, 'auth.db')}"


def _read_pem(value_env: str, path_env: str) -> Optional[str]:
    value = os.getenv(value_env)
    if value:
        # .env files usually carry the PEM on one line with escaped newlines
        return value.replace("\\n", "\n")
    path = os.getenv(path_env)
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as fh:
            return fh.read()
    return None


@lru_cache(maxsize=4)
def _derive_public_pem(private_pem: str) -> str:
    private = serialization.load_pem_private_key(private_pem.encode(), password=None)
    return private.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()


def _bool_env(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    ENV: str = Field(default_factory=lambda: os.getenv("ENV", "dev"))
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    DATABASE_URL: str = Field(default_factory=_default_database_url)

    # token signing material
    PRIVATE_KEY: Optional[str] = Field(default_factory=lambda: _read_pem("PRIVATE_KEY", "PRIVATE_KEY_PATH"))
    PUBLIC_KEY: Optional[str] = Field(default_factory=lambda: _read_pem("PUBLIC_KEY", "PUBLIC_KEY_PATH"))
    REFRESH_TOKEN_SECRET: Optional[str] = Field(default_factory=lambda: os.getenv("REFRESH_TOKEN_SECRET") or None)
    JWT_ISSUER: str = Field(default_factory=lambda: os.getenv("JWT_ISSUER", "auth-service"))
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")))
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(default_factory=lambda: int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "365")))

    # cookies
    COOKIE_DOMAIN: Optional[str] = Field(default_factory=lambda: os.getenv("COOKIE_DOMAIN") or None)
    COOKIE_SECURE: bool = Field(default_factory=lambda: _bool_env("COOKIE_SECURE"))

    # admin bootstrap
    ADMIN_EMAIL: Optional[str] = Field(default_factory=lambda: os.getenv("ADMIN_EMAIL") or None)
    ADMIN_PASSWORD: Optional[str] = Field(default_factory=lambda: os.getenv("ADMIN_PASSWORD") or None)
    ADMIN_FIRST_NAME: str = Field(default_factory=lambda: os.getenv("ADMIN_FIRST_NAME", "System"))
    ADMIN_LAST_NAME: str = Field(default_factory=lambda: os.getenv("ADMIN_LAST_NAME", "Administrator"))

    @property
    def public_key_pem(self) -> Optional[str]:
        """PEM of the RS256 verification key, derived from PRIVATE_KEY when not set."""
        if self.PUBLIC_KEY:
            return self.PUBLIC_KEY
        if not self.PRIVATE_KEY:
            return None
        return _derive_public_pem(self.PRIVATE_KEY)

    def validate_signing_material(self) -> None:
        """Raise SecretNotFoundError for the first missing signing secret."""
        if not self.PRIVATE_KEY:
            raise SecretNotFoundError("PRIVATE_KEY")
        if not self.REFRESH_TOKEN_SECRET:
            raise SecretNotFoundError("REFRESH_TOKEN_SECRET")


settings = Settings()
