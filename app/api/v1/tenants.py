from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.api.permissions import require_roles
from app.core.rbac import ADMIN_ONLY, TENANT_STAFF, Role
from app.crud.tenant import tenant_crud
from app.schemas.tenant import TenantCreate, TenantOut

router = APIRouter()

@router.post("", response_model=TenantOut, status_code=201, dependencies=[Depends(require_roles(ADMIN_ONLY))])
def create_tenant(body: TenantCreate, db: Session = Depends(get_db)):
    return tenant_crud.create_from(db, body)

@router.get("/{tenant_id}", response_model=TenantOut)
def get_tenant(
    tenant_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    claims = Depends(require_roles(TENANT_STAFF)),
):
    # managers only see their own tenant
    if claims.role == Role.MANAGER and str(tenant_id) != claims.tenant_id:
        raise HTTPException(403, "Forbidden for other tenants")
    t = tenant_crud.get(db, tenant_id)
    if not t:
        raise HTTPException(404, "Tenant not found")
    return t
