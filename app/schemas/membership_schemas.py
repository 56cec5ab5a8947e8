from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class MembershipCreate(BaseModel):
    """Grant a user access at the scope named by the route"""

    user_id: UUID = Field(..., description="Identity provider subject of the user")


class ApplicationUserResponse(BaseModel):
    user_id: UUID
    created_user: UUID
    created_timestamp: datetime

    model_config = {"from_attributes": True}


class TenantUserResponse(BaseModel):
    tenant_id: UUID
    user_id: UUID
    created_user: UUID
    created_timestamp: datetime

    model_config = {"from_attributes": True}


class AccountUserResponse(BaseModel):
    account_id: UUID
    user_id: UUID
    created_user: UUID
    created_timestamp: datetime

    model_config = {"from_attributes": True}
