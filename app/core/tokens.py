# app/core/tokens.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, jwk, JWTError
from sqlalchemy.orm import Session

from app.core.claims import build_refresh_claims
from app.core.config import Settings
from app.core.errors import SecretNotFoundError
from app.crud.refresh_token import refresh_token_crud
from app.schemas.token import AccessClaims, RefreshClaims

logger = logging.getLogger(__name__)

ACCESS_ALGORITHM = "RS256"
REFRESH_ALGORITHM = "HS256"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    """Signs access/refresh tokens and owns the refresh-session rows behind them.

    Access tokens are RS256 so other services can verify them with the public
    key. Refresh tokens are HS256 with a secret only this service knows, and
    each one is bound to a ``refresh_tokens`` row whose id travels as ``jti``.
    """

    def __init__(
        self,
        db: Session,
        *,
        private_key: Optional[str],
        refresh_secret: Optional[str],
        issuer: str = "auth-service",
        access_ttl: timedelta = timedelta(hours=1),
        refresh_ttl: timedelta = timedelta(days=365),
    ):
        self.db = db
        self._private_key = private_key
        self._refresh_secret = refresh_secret
        self.issuer = issuer
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    @classmethod
    def from_settings(cls, db: Session, settings: Settings) -> "TokenIssuer":
        return cls(
            db,
            private_key=settings.PRIVATE_KEY,
            refresh_secret=settings.REFRESH_TOKEN_SECRET,
            issuer=settings.JWT_ISSUER,
            access_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_ttl=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )

    def _registered_claims(self, ttl: timedelta) -> Dict[str, Any]:
        now = _now()
        return {
            "iss": self.issuer,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
        }

    def issue_access_token(self, claims: AccessClaims) -> str:
        if not self._private_key:
            logger.error("Access token requested but PRIVATE_KEY is not configured")
            raise SecretNotFoundError("PRIVATE_KEY")
        payload = {**claims.to_payload(), **self._registered_claims(self.access_ttl)}
        return jwt.encode(payload, self._private_key, algorithm=ACCESS_ALGORITHM)

    def issue_refresh_token(self, user_id: int) -> str:
        if not self._refresh_secret:
            logger.error("Refresh token requested but REFRESH_TOKEN_SECRET is not configured")
            raise SecretNotFoundError("REFRESH_TOKEN_SECRET")
        # create-then-sign: the row must exist before its id leaves the service
        row = refresh_token_crud.create_for_user(self.db, user_id=user_id, expires_at=_now() + self.refresh_ttl)
        claims = build_refresh_claims(user_id, row.id)
        payload = {"sub": claims.sub, "jti": claims.jti, **self._registered_claims(self.refresh_ttl)}
        return jwt.encode(payload, self._refresh_secret, algorithm=REFRESH_ALGORITHM)

    def is_session_active(self, session_id: int, user_id: Optional[int] = None) -> bool:
        # missing and expired look the same to the caller
        return refresh_token_crud.get_active(self.db, session_id, user_id=user_id) is not None

    def revoke_session(self, session_id: int) -> bool:
        """True only for the caller whose delete actually removed the row."""
        return refresh_token_crud.remove(self.db, session_id) > 0


def decode_access(token: str, public_key: Optional[str], *, issuer: str) -> Optional[AccessClaims]:
    """Verified access claims, or None for any bad/expired/foreign token."""
    if not token or not public_key:
        return None
    try:
        payload = jwt.decode(token, public_key, algorithms=[ACCESS_ALGORITHM], issuer=issuer)
    except JWTError:
        return None
    if not isinstance(payload, dict) or not payload.get("role") or not str(payload.get("sub") or "").isdigit():
        return None
    try:
        return AccessClaims(sub=payload["sub"], role=payload["role"], tenant_id=payload.get("tenant_id"))
    except ValueError:
        return None


def decode_refresh(token: str, secret: Optional[str], *, issuer: str) -> Optional[RefreshClaims]:
    """Signature/expiry check only; liveness is TokenIssuer.is_session_active."""
    if not token or not secret:
        return None
    try:
        payload = jwt.decode(token, secret, algorithms=[REFRESH_ALGORITHM], issuer=issuer)
    except JWTError:
        return None
    if not isinstance(payload, dict):
        return None
    sub, jti = payload.get("sub"), payload.get("jti")
    if not sub or not jti or not str(sub).isdigit() or not str(jti).isdigit():
        return None
    return RefreshClaims(sub=str(sub), jti=str(jti))


def public_jwks(public_key: Optional[str]) -> Dict[str, Any]:
    if not public_key:
        return {"keys": []}
    key = jwk.construct(public_key, ACCESS_ALGORITHM).to_dict()
    key.update({"use": "sig", "alg": ACCESS_ALGORITHM})
    return {"keys": [key]}
