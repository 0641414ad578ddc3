# app/services/auth.py
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.core.claims import access_claims_for
from app.core.errors import InvalidCredentialsError, SessionRevokedError, UserNotFoundError
from app.core.security_password import dummy_verify, hash_password, verify_password
from app.core.tokens import TokenIssuer
from app.crud.user import user_crud
from app.models.user import User
from app.schemas.auth import AuthResult, LoginIn, RegisterIn
from app.schemas.token import TokenPair
from app.schemas.user import PublicUser, UserCreateWithHash

logger = logging.getLogger(__name__)


class AuthService:
    """register / login / self / refresh / logout over the user store and the token issuer."""

    def __init__(self, db: Session, tokens: TokenIssuer):
        self.db = db
        self.tokens = tokens

    def _issue_pair(self, user: User) -> TokenPair:
        access = self.tokens.issue_access_token(access_claims_for(user))
        refresh = self.tokens.issue_refresh_token(user.id)
        return TokenPair(access_token=access, refresh_token=refresh)

    def register(self, body: RegisterIn) -> AuthResult:
        hashed = hash_password(body.password)
        user = user_crud.create_with_hash(self.db, UserCreateWithHash(
            first_name=body.first_name,
            last_name=body.last_name,
            email=body.email,
            hashed_password=hashed,
        ))
        logger.info("User created successfully id=%s", user.id)
        return AuthResult(user=PublicUser.model_validate(user), tokens=self._issue_pair(user))

    def login(self, body: LoginIn) -> AuthResult:
        user = user_crud.get_by_email(self.db, body.email)
        if user is None:
            # same hashing cost as a wrong password
            dummy_verify(body.password)
            raise InvalidCredentialsError()
        if not verify_password(body.password, user.hashed_password):
            raise InvalidCredentialsError()
        logger.info("User logged in id=%s", user.id)
        return AuthResult(user=PublicUser.model_validate(user), tokens=self._issue_pair(user))

    def who_am_i(self, user_id: int) -> User:
        user = user_crud.get(self.db, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def refresh(self, *, user_id: int, refresh_session_id: int) -> TokenPair:
        # single use: the presented session dies whatever happens next
        if not self.tokens.revoke_session(refresh_session_id):
            # a concurrent refresh with the same token got here first
            logger.warning("Refresh session %s already revoked user=%s", refresh_session_id, user_id)
            raise SessionRevokedError(refresh_session_id)
        user = user_crud.get(self.db, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        pair = self._issue_pair(user)
        logger.info("Refresh token rotated user=%s old_session=%s", user_id, refresh_session_id)
        return pair

    def logout(self, *, refresh_session_id: int) -> None:
        try:
            self.tokens.revoke_session(refresh_session_id)
        except Exception:
            logger.exception("Failed to revoke refresh session %s during logout", refresh_session_id)
            self.db.rollback()
            return
        logger.info("Refresh session %s revoked on logout", refresh_session_id)
