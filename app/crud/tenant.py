from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.tenant import Tenant
from app.schemas.tenant import TenantCreate

class CRUDTenant(CRUDBase[Tenant]):
    def create_from(self, db: Session, obj_in: TenantCreate) -> Tenant:
        return self.create(db, obj_in.model_dump())

    def exists(self, db: Session, id: int) -> bool:
        return self.get(db, id) is not None

tenant_crud = CRUDTenant(Tenant)
