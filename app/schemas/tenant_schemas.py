from uuid import UUID
from datetime import datetime

from pydantic import BaseModel, Field


class TenantCreate(BaseModel):
    """Create a tenant (application users only)"""

    name: str = Field(..., min_length=1, max_length=255)


class TenantUpdate(BaseModel):
    """Update tenant name"""

    name: str = Field(..., min_length=1, max_length=255)


class TenantResponse(BaseModel):
    """Tenant details response"""

    id: UUID
    name: str
    created_timestamp: datetime
    updated_timestamp: datetime | None = None

    model_config = {"from_attributes": True}
