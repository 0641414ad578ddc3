# app/core/security_password.py
from __future__ import annotations

from passlib.context import CryptContext

pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__time_cost=2,
    argon2__memory_cost=19456,
    argon2__parallelism=1,
)

_dummy_hash: str | None = None


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_password(plain: str, stored_hash: str) -> bool:
    # passlib raises ValueError for digests it cannot identify
    try:
        return pwd_context.verify(plain, stored_hash)
    except ValueError:
        return False


def dummy_verify(plain: str) -> None:
    """Spend one verification on a throwaway digest (login with an unknown email)."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = pwd_context.hash("dummy-password-for-timing")
    pwd_context.verify(plain, _dummy_hash)
