from unittest.mock import MagicMock

import pytest
from sqlalchemy import select

from app.core.config import Settings
from app.core.errors import AdminCredentialsNotFound
from app.core.rbac import Role
from app.core.security_password import verify_password
from app.db.init_db import init_db
from app.models import User


def _cfg(**overrides) -> Settings:
    values = {"ADMIN_EMAIL": "Root@Acme.io", "ADMIN_PASSWORD": "Adm1n!pass"}
    values.update(overrides)
    return Settings(**values)


def test_seeds_admin_once(db):
    cfg = _cfg()
    init_db(db, cfg)
    init_db(db, cfg)

    admins = db.scalars(select(User).where(User.role == Role.ADMIN)).all()
    assert len(admins) == 1
    assert admins[0].email == "root@acme.io"
    assert verify_password("Adm1n!pass", admins[0].hashed_password)


def test_existing_admin_is_left_alone(db, make_user):
    make_user(email="root@acme.io", password="original-pass", role=Role.ADMIN)
    init_db(db, _cfg())

    admin = db.scalar(select(User).where(User.email == "root@acme.io"))
    assert verify_password("original-pass", admin.hashed_password)


@pytest.mark.parametrize("missing", ["ADMIN_EMAIL", "ADMIN_PASSWORD"])
def test_missing_credentials(db, missing):
    with pytest.raises(AdminCredentialsNotFound):
        init_db(db, _cfg(**{missing: None}))
    assert db.scalar(select(User)) is None


def test_signing_material_checked_in_order():
    from app.core.errors import SecretNotFoundError

    with pytest.raises(SecretNotFoundError) as exc:
        Settings(PRIVATE_KEY=None, REFRESH_TOKEN_SECRET=None).validate_signing_material()
    assert exc.value.secret_name == "PRIVATE_KEY"

    with pytest.raises(SecretNotFoundError) as exc:
        Settings(REFRESH_TOKEN_SECRET=None).validate_signing_material()
    assert exc.value.secret_name == "REFRESH_TOKEN_SECRET"


def _postgres_session(lock_acquired: bool) -> MagicMock:
    db = MagicMock()
    db.get_bind.return_value.dialect.name = "postgresql"
    db.execute.return_value.scalar.return_value = lock_acquired
    db.scalar.return_value = None
    return db


def _executed_sql(db: MagicMock) -> list[str]:
    return [str(c.args[0]) for c in db.execute.call_args_list]


def test_postgres_seed_holds_transaction_lock():
    db = _postgres_session(lock_acquired=True)
    init_db(db, _cfg())

    [sql] = _executed_sql(db)
    assert "pg_try_advisory_xact_lock" in sql
    db.add.assert_called_once()
    # the commit that persists the admin also releases the lock
    db.commit.assert_called_once()


def test_postgres_seed_skipped_when_locked_elsewhere():
    db = _postgres_session(lock_acquired=False)
    init_db(db, _cfg())

    db.add.assert_not_called()
    db.commit.assert_not_called()
    db.rollback.assert_called_once()
