from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

class TenantCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    address: str = Field(min_length=1, max_length=255)

class TenantOut(BaseModel):
    id: int
    name: str
    address: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
