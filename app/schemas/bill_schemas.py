from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field


class BillResponse(BaseModel):
    """Schema for bill response"""

    id: UUID
    account_id: UUID
    bill_schedule_id: UUID | None
    name: str
    amount: Decimal
    currency: str
    due_date: date
    payment_id: str | None
    created_user: UUID
    created_timestamp: datetime
    updated_timestamp: datetime | None = None

    model_config = {"from_attributes": True}


class BillListResponse(BaseModel):
    """Paginated list of bills"""

    bills: list[BillResponse]
    total: int
    limit: int
    offset: int


class BillGenerationResponse(BaseModel):
    """Outcome of a manually triggered generation pass"""

    bills_created: int
    run_date: date


class BillUpdate(BaseModel):
    """
    Schema for updating a bill.

    Only provided fields are changed; the schedule and account links are fixed.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    amount: Decimal | None = Field(None, ge=0, max_digits=18, decimal_places=2)
    currency: str | None = Field(None, min_length=3, max_length=3, pattern="^[A-Z]{3}$")
    due_date: date | None = None
    payment_id: str | None = Field(None, min_length=1, max_length=255)
