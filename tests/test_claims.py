"""Tests for access/refresh claim builders."""

from app.core.claims import access_claims_for, build_access_claims, build_refresh_claims
from app.core.rbac import Role


class TestBuildAccessClaims:

    def test_stringifies_ids(self):
        claims = build_access_claims(7, Role.CUSTOMER)
        assert claims.sub == "7"
        assert claims.role is Role.CUSTOMER
        assert claims.tenant_id is None

    def test_manager_carries_tenant(self):
        claims = build_access_claims(3, Role.MANAGER, 12)
        assert claims.tenant_id == "12"
        assert claims.to_payload() == {"sub": "3", "role": "manager", "tenant_id": "12"}

    def test_manager_without_tenant(self):
        assert build_access_claims(3, "manager", None).tenant_id is None

    def test_non_manager_never_carries_tenant(self):
        claims = build_access_claims(1, Role.ADMIN, 12)
        assert claims.tenant_id is None
        assert "tenant_id" not in claims.to_payload()

    def test_from_user_entity(self, make_user, make_tenant):
        tenant = make_tenant()
        user = make_user(email="m@acme.io", role=Role.MANAGER, tenant_id=tenant.id)
        claims = access_claims_for(user)
        assert claims.user_id == user.id
        assert claims.tenant_id == str(tenant.id)


class TestBuildRefreshClaims:

    def test_shape(self):
        claims = build_refresh_claims(5, 42)
        assert claims.sub == "5"
        assert claims.jti == "42"
        assert claims.user_id == 5
        assert claims.session_id == 42
