# app/api/v1/auth.py
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import (
    ACCESS_COOKIE,
    REFRESH_COOKIE,
    get_auth_service,
    get_current_claims,
    get_db,
    get_live_refresh_claims,
    parse_refresh_claims,
)
from app.core.config import settings
from app.core.rbac import SELF_EXPAND_ROLES, is_allowed
from app.crud.tenant import tenant_crud
from app.schemas.auth import LoginIn, RegisterIn
from app.schemas.tenant import TenantOut
from app.schemas.token import AccessClaims, RefreshClaims, TokenPair
from app.schemas.user import PublicUser, SelfUser
from app.services.auth import AuthService

router = APIRouter()

# ---------- helpers ----------
def _set_auth_cookies(response: Response, tokens: TokenPair) -> None:
    common = dict(domain=settings.COOKIE_DOMAIN, samesite="strict", httponly=True, secure=settings.COOKIE_SECURE)
    response.set_cookie(ACCESS_COOKIE, tokens.access_token,
                        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60, **common)
    response.set_cookie(REFRESH_COOKIE, tokens.refresh_token,
                        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60, **common)

def _clear_auth_cookies(response: Response) -> None:
    for name in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(name, domain=settings.COOKIE_DOMAIN, samesite="strict",
                               httponly=True, secure=settings.COOKIE_SECURE)

# ---------- endpoints ----------
@router.post("/register", response_model=PublicUser, status_code=status.HTTP_201_CREATED)
def register(body: RegisterIn, response: Response, service: AuthService = Depends(get_auth_service)):
    result = service.register(body)
    _set_auth_cookies(response, result.tokens)
    return result.user

@router.post("/login", response_model=PublicUser)
def login(body: LoginIn, response: Response, service: AuthService = Depends(get_auth_service)):
    result = service.login(body)
    _set_auth_cookies(response, result.tokens)
    return result.user

@router.get("/self", response_model=SelfUser)
def who_am_i(
    expand: Optional[str] = Query(None, description="comma separated; supports 'tenant'"),
    claims: AccessClaims = Depends(get_current_claims),
    service: AuthService = Depends(get_auth_service),
    db: Session = Depends(get_db),
):
    fields = {f.strip() for f in (expand or "").split(",") if f.strip()}
    unknown = fields - set(SELF_EXPAND_ROLES)
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unsupported expand: {sorted(unknown)}")
    for field in fields:
        if not is_allowed(claims.role, SELF_EXPAND_ROLES[field]):
            raise HTTPException(status_code=403, detail=f"Not allowed to expand '{field}'")

    user = service.who_am_i(claims.user_id)
    out = SelfUser.model_validate(user)
    if "tenant" in fields and user.tenant_id is not None:
        tenant = tenant_crud.get(db, user.tenant_id)
        out.tenant = TenantOut.model_validate(tenant) if tenant else None
    return out

@router.post("/refresh")
def refresh(
    response: Response,
    claims: RefreshClaims = Depends(get_live_refresh_claims),
    service: AuthService = Depends(get_auth_service),
):
    tokens = service.refresh(user_id=claims.user_id, refresh_session_id=claims.session_id)
    _set_auth_cookies(response, tokens)
    return {"id": claims.user_id}

@router.post("/logout")
def logout(
    response: Response,
    claims: RefreshClaims = Depends(parse_refresh_claims),
    service: AuthService = Depends(get_auth_service),
):
    # no liveness check here: logging out an already dead session still succeeds
    service.logout(refresh_session_id=claims.session_id)
    _clear_auth_cookies(response)
    return {"ok": True}
