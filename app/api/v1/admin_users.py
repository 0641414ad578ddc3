# app/api/v1/admin_users.py
from __future__ import annotations
import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Response
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.api.permissions import require_roles
from app.core.rbac import ADMIN_ONLY
from app.crud.user import user_crud
from app.schemas.user import AdminUserCreate, AdminUserOut, ManagerUserCreate

logger = logging.getLogger(__name__)

# every route here is admin only
router = APIRouter(dependencies=[Depends(require_roles(ADMIN_ONLY))])

@router.post("", response_model=AdminUserOut, status_code=201)
def create_admin(body: AdminUserCreate, db: Session = Depends(get_db)):
    u = user_crud.create_admin(db, body)
    logger.info("Admin user created id=%s", u.id)
    return u

@router.post("/managers", response_model=AdminUserOut, status_code=201)
def create_manager(body: ManagerUserCreate, db: Session = Depends(get_db)):
    u = user_crud.create_manager(db, body)
    logger.info("Manager user created id=%s tenant=%s", u.id, u.tenant_id)
    return u

@router.get("/{user_id}", response_model=AdminUserOut)
def get_user(user_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    u = user_crud.get(db, user_id)
    if not u:
        raise HTTPException(404, "User not found")
    return u

@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    # refresh_tokens rows go with the user (FK ON DELETE CASCADE)
    user_crud.remove(db, user_id)
    return Response(status_code=204)
