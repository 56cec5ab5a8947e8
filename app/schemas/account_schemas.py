from uuid import UUID
from datetime import datetime

from pydantic import BaseModel, Field


class AccountCreate(BaseModel):
    """Schema for creating a new account under a tenant"""

    tenant_id: UUID
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=255)
    reference_id: str | None = Field(None, max_length=255)


class AccountUpdate(BaseModel):
    """Schema for updating an account (the tenant cannot be changed)"""

    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, min_length=1, max_length=255)
    reference_id: str | None = Field(None, max_length=255)


class AccountResponse(BaseModel):
    """Schema for account response"""

    id: UUID
    tenant_id: UUID
    name: str
    address: str
    reference_id: str | None
    created_timestamp: datetime
    updated_timestamp: datetime | None = None

    model_config = {"from_attributes": True}


class AccountListResponse(BaseModel):
    """Schema for list of accounts"""

    accounts: list[AccountResponse]
    total: int
