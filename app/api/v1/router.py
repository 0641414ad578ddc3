# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1 import auth, tenants, admin_users

api_router = APIRouter()

api_router.include_router(auth.router,        prefix="/auth",        tags=["auth"])
api_router.include_router(tenants.router,     prefix="/tenants",     tags=["tenants"])
api_router.include_router(admin_users.router, prefix="/admin/users", tags=["admin-users"])
