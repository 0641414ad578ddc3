# app/core/rbac.py
from enum import Enum
from typing import AbstractSet, Iterable


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"    # bound to one tenant
    CUSTOMER = "customer"


# No hierarchy: every protected operation names its own allow-list.
ADMIN_ONLY: frozenset[Role] = frozenset({Role.ADMIN})
TENANT_STAFF: frozenset[Role] = frozenset({Role.ADMIN, Role.MANAGER})

# ?expand=<field> on /auth/self and the roles allowed to request it
SELF_EXPAND_ROLES: dict[str, frozenset[Role]] = {
    "tenant": TENANT_STAFF,
}


def allow_list(roles: Iterable[Role | str]) -> frozenset[Role]:
    return frozenset(Role(r) for r in roles)


def is_allowed(role: Role | str, allowed: AbstractSet[Role]) -> bool:
    try:
        return Role(role) in allowed
    except ValueError:
        return False
