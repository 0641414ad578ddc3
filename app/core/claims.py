# app/core/claims.py
from __future__ import annotations

from typing import Optional

from app.core.rbac import Role
from app.schemas.token import AccessClaims, RefreshClaims


def build_access_claims(user_id: int, role: Role | str, tenant_id: Optional[int] = None) -> AccessClaims:
    """Only managers carry a tenant in their access claims."""
    role = Role(role)
    tenant = str(tenant_id) if tenant_id is not None and role is Role.MANAGER else None
    return AccessClaims(sub=str(user_id), role=role, tenant_id=tenant)


def build_refresh_claims(user_id: int, session_id: int) -> RefreshClaims:
    return RefreshClaims(sub=str(user_id), jti=str(session_id))


def access_claims_for(user) -> AccessClaims:
    return build_access_claims(user.id, user.role, user.tenant_id)
