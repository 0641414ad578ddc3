# app/schemas/user.py
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.core.rbac import Role
from app.schemas.tenant import TenantOut


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class _Names(BaseModel):
    first_name: str = Field(min_length=1, max_length=120)
    last_name: str = Field(min_length=1, max_length=120)

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v


class UserCreateWithHash(BaseModel):
    """What the auth flow hands to the user store: the password is already hashed."""
    first_name: str
    last_name: str
    email: str
    hashed_password: str


class AdminUserCreate(_Names):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)

    @field_validator("email", mode="after")
    @classmethod
    def _lower(cls, v: str) -> str:
        return normalize_email(v)


class ManagerUserCreate(AdminUserCreate):
    tenant_id: int = Field(ge=1)


class PublicUser(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    role: Role
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SelfUser(PublicUser):
    tenant: Optional[TenantOut] = None


class AdminUserOut(PublicUser):
    tenant_id: Optional[int] = None
