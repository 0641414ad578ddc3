# app/schemas/token.py
from typing import Any, Dict, Optional

from pydantic import BaseModel

from app.core.rbac import Role


class AccessClaims(BaseModel):
    sub: str  # user id
    role: Role
    tenant_id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"sub": self.sub, "role": self.role.value}
        if self.tenant_id is not None:
            payload["tenant_id"] = self.tenant_id
        return payload

    @property
    def user_id(self) -> int:
        return int(self.sub)


class RefreshClaims(BaseModel):
    sub: str  # user id
    jti: str  # refresh_tokens.id

    @property
    def user_id(self) -> int:
        return int(self.sub)

    @property
    def session_id(self) -> int:
        return int(self.jti)


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
