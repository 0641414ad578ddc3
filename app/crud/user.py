# app/crud/user.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import TenantNotFoundError, UserAlreadyExistsError
from app.core.rbac import Role
from app.core.security_password import hash_password
from app.crud.base import CRUDBase
from app.crud.tenant import tenant_crud
from app.models.user import User
from app.schemas.user import AdminUserCreate, ManagerUserCreate, UserCreateWithHash, normalize_email


class CRUDUser(CRUDBase[User]):
    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.execute(select(User).where(User.email == normalize_email(email))).scalar_one_or_none()

    def _insert(self, db: Session, user: User) -> User:
        if self.get_by_email(db, user.email) is not None:
            raise UserAlreadyExistsError(user.email)
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # lost a race against a concurrent insert of the same email
            db.rollback()
            raise UserAlreadyExistsError(user.email)
        db.refresh(user)
        return user

    def create_with_hash(self, db: Session, obj_in: UserCreateWithHash, *, role: Role = Role.CUSTOMER) -> User:
        return self._insert(db, User(
            first_name=obj_in.first_name,
            last_name=obj_in.last_name,
            email=normalize_email(obj_in.email),
            hashed_password=obj_in.hashed_password,
            role=role,
        ))

    def create_admin(self, db: Session, obj_in: AdminUserCreate) -> User:
        return self._insert(db, User(
            first_name=obj_in.first_name,
            last_name=obj_in.last_name,
            email=normalize_email(obj_in.email),
            hashed_password=hash_password(obj_in.password),
            role=Role.ADMIN,
        ))

    def create_manager(self, db: Session, obj_in: ManagerUserCreate) -> User:
        if self.get_by_email(db, obj_in.email) is not None:
            raise UserAlreadyExistsError(normalize_email(obj_in.email))
        if not tenant_crud.exists(db, obj_in.tenant_id):
            raise TenantNotFoundError(obj_in.tenant_id)
        return self._insert(db, User(
            first_name=obj_in.first_name,
            last_name=obj_in.last_name,
            email=normalize_email(obj_in.email),
            hashed_password=hash_password(obj_in.password),
            role=Role.MANAGER,
            tenant_id=obj_in.tenant_id,
        ))


user_crud = CRUDUser(User)
