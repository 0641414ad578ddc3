# app/api/permissions.py
from typing import Callable, Iterable

from fastapi import Depends, HTTPException, status

from app.api.deps import get_current_claims
from app.core.rbac import Role, allow_list, is_allowed
from app.schemas.token import AccessClaims


def require_roles(allowed: Iterable[Role]) -> Callable[[AccessClaims], AccessClaims]:
    """
    Use: Depends(require_roles([Role.ADMIN, Role.MANAGER]))
    Plain membership check against the verified access claims.
    """
    allowed_set = allow_list(allowed)

    def _checker(claims: AccessClaims = Depends(get_current_claims)) -> AccessClaims:
        if not is_allowed(claims.role, allowed_set):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not enough permissions to access this route",
            )
        return claims

    return _checker
