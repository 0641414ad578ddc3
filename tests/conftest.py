"""
Shared test fixtures.

Environment is set before any ``app`` import so the module level Settings
picks up a generated RSA key pair, a refresh secret and an in-memory database.
"""

import os

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
TEST_PRIVATE_KEY = _key.private_bytes(
    encoding=serialization.Encoding.PEM,
    format=serialization.PrivateFormat.PKCS8,
    encryption_algorithm=serialization.NoEncryption(),
).decode()
TEST_PUBLIC_KEY = _key.public_key().public_bytes(
    encoding=serialization.Encoding.PEM,
    format=serialization.PublicFormat.SubjectPublicKeyInfo,
).decode()
TEST_REFRESH_SECRET = "test-refresh-secret-for-testing-only"

os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PRIVATE_KEY"] = TEST_PRIVATE_KEY
os.environ.pop("PUBLIC_KEY", None)
os.environ["REFRESH_TOKEN_SECRET"] = TEST_REFRESH_SECRET

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.rbac import Role  # noqa: E402
from app.core.security_password import hash_password  # noqa: E402
from app.core.tokens import TokenIssuer  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import api  # noqa: E402
from app.models import Base, Tenant, User  # noqa: E402

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def token_issuer(db) -> TokenIssuer:
    return TokenIssuer(db, private_key=TEST_PRIVATE_KEY, refresh_secret=TEST_REFRESH_SECRET)


@pytest.fixture
def client(session_factory):
    """TestClient whose requests each get their own session on the test database."""
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    api.dependency_overrides[get_db] = _get_db
    with_client = TestClient(api)
    yield with_client
    api.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Insert a user directly, bypassing the auth flow."""
    def _make(
        email: str = "user@acme.io",
        password: str = "Passw0rd!xyz",
        role: Role = Role.CUSTOMER,
        tenant_id: int | None = None,
    ) -> User:
        user = User(
            first_name="Test",
            last_name="User",
            email=email,
            hashed_password=hash_password(password),
            role=role,
            tenant_id=tenant_id,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def make_tenant(db):
    def _make(name: str = "Acme", address: str = "1 Main St") -> Tenant:
        tenant = Tenant(name=name, address=address)
        db.add(tenant)
        db.commit()
        db.refresh(tenant)
        return tenant
    return _make


def cookie_header(access: str | None = None, refresh: str | None = None) -> dict[str, str]:
    """Explicit Cookie header; takes precedence over the client's cookie jar."""
    parts = []
    if access:
        parts.append(f"{ACCESS_COOKIE}={access}")
    if refresh:
        parts.append(f"{REFRESH_COOKIE}={refresh}")
    return {"Cookie": "; ".join(parts)}
