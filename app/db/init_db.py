import logging

from sqlalchemy import select, text
from sqlalchemy.orm import Session

from app.core.config import Settings, settings as default_settings
from app.core.errors import AdminCredentialsNotFound
from app.core.rbac import Role
from app.core.security_password import hash_password
from app.models.user import User
from app.schemas.user import normalize_email

logger = logging.getLogger(__name__)

# pg_try_advisory_xact_lock(key1, key2): one instance seeds, the others skip
LOCK_KEY_1 = 41717
LOCK_KEY_2 = 1


def _seed_admin(db: Session, cfg: Settings) -> bool:
    """Stage the admin row if the email is free; the caller commits."""
    email = normalize_email(cfg.ADMIN_EMAIL)
    if db.scalar(select(User).where(User.email == email)):
        return False
    db.add(User(
        first_name=cfg.ADMIN_FIRST_NAME,
        last_name=cfg.ADMIN_LAST_NAME,
        email=email,
        hashed_password=hash_password(cfg.ADMIN_PASSWORD),
        role=Role.ADMIN,
    ))
    return True


def init_db(db: Session, cfg: Settings | None = None) -> None:
    cfg = cfg or default_settings
    if not cfg.ADMIN_EMAIL or not cfg.ADMIN_PASSWORD:
        raise AdminCredentialsNotFound()

    if db.get_bind().dialect.name == "postgresql":
        # transaction scoped: released by the commit/rollback below, on the same connection
        locked = db.execute(
            text("SELECT pg_try_advisory_xact_lock(:k1, :k2)"), {"k1": LOCK_KEY_1, "k2": LOCK_KEY_2}
        ).scalar()
        if not locked:
            db.rollback()
            logger.info("Another instance is bootstrapping admin; skipping on this instance")
            return

    try:
        created = _seed_admin(db, cfg)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Admin bootstrap attempted for %s (created=%s)", cfg.ADMIN_EMAIL, created)
