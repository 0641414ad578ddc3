# app/crud/refresh_token.py
from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.refresh_token import RefreshToken


class CRUDRefreshToken(CRUDBase[RefreshToken]):
    def create_for_user(self, db: Session, *, user_id: int, expires_at: datetime) -> RefreshToken:
        # committed before the caller signs anything carrying row.id
        return self.create(db, {"user_id": user_id, "expires_at": expires_at})

    def get_active(self, db: Session, id: int, *, user_id: Optional[int] = None,
                   now: Optional[datetime] = None) -> Optional[RefreshToken]:
        now = now or datetime.now(timezone.utc)
        stmt = select(RefreshToken).where(RefreshToken.id == id, RefreshToken.expires_at > now)
        if user_id is not None:
            stmt = stmt.where(RefreshToken.user_id == user_id)
        return db.execute(stmt).scalar_one_or_none()

    def remove(self, db: Session, id: int) -> int:
        """Delete one session row; returns how many rows went (0 or 1)."""
        result = db.execute(delete(RefreshToken).where(RefreshToken.id == id))
        db.commit()
        return result.rowcount


refresh_token_crud = CRUDRefreshToken(RefreshToken)
