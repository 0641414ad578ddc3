# app/api/deps.py
from typing import Optional

from fastapi import Cookie, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.tokens import TokenIssuer, decode_access, decode_refresh
from app.db.session import get_db
from app.schemas.token import AccessClaims, RefreshClaims
from app.services.auth import AuthService

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"

def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

# ----------------------------------------------------------------------
# services
# ----------------------------------------------------------------------
def get_token_issuer(db: Session = Depends(get_db)) -> TokenIssuer:
    return TokenIssuer.from_settings(db, settings)

def get_auth_service(
    db: Session = Depends(get_db),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(db, tokens)

# ----------------------------------------------------------------------
# access token: Authorization: Bearer first, then the cookie
# ----------------------------------------------------------------------
def get_access_token(
    access_cookie: Optional[str] = Cookie(None, alias=ACCESS_COOKIE),
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> str:
    # an explicit header beats a possibly stale cookie
    if authorization:
        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise _unauthorized("Invalid Authorization header")
        return parts[1]
    if not access_cookie:
        raise _unauthorized("Missing access token")
    return access_cookie

def get_current_claims(token: str = Depends(get_access_token)) -> AccessClaims:
    """Stateless: signature, issuer and expiry only, no database lookup."""
    claims = decode_access(token, settings.public_key_pem, issuer=settings.JWT_ISSUER)
    if claims is None:
        raise _unauthorized("Invalid or expired access token")
    return claims

# ----------------------------------------------------------------------
# refresh token: cookie only
# ----------------------------------------------------------------------
def get_refresh_token(refresh_cookie: Optional[str] = Cookie(None, alias=REFRESH_COOKIE)) -> str:
    if not refresh_cookie:
        raise _unauthorized("Missing refresh token")
    return refresh_cookie

def parse_refresh_claims(token: str = Depends(get_refresh_token)) -> RefreshClaims:
    claims = decode_refresh(token, settings.REFRESH_TOKEN_SECRET, issuer=settings.JWT_ISSUER)
    if claims is None:
        raise _unauthorized("Invalid or expired refresh token")
    return claims

def get_live_refresh_claims(
    claims: RefreshClaims = Depends(parse_refresh_claims),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> RefreshClaims:
    """parse_refresh_claims plus the session-store liveness check."""
    if not tokens.is_session_active(claims.session_id, claims.user_id):
        raise _unauthorized("Refresh token revoked")
    return claims
