# app/schemas/auth.py
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.user import PublicUser, _Names, normalize_email
from app.schemas.token import TokenPair


class RegisterIn(_Names):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)

    @field_validator("email", mode="after")
    @classmethod
    def _lower(cls, v: str) -> str:
        return normalize_email(v)


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email", mode="after")
    @classmethod
    def _lower(cls, v: str) -> str:
        return normalize_email(v)


class AuthResult(BaseModel):
    user: PublicUser
    tokens: TokenPair
