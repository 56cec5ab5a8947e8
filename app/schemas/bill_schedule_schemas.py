from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, model_validator


class BillScheduleBase(BaseModel):
    """Fields shared by create and response schemas"""

    name: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., ge=0, max_digits=18, decimal_places=2)
    currency: str = Field(default="USD", min_length=3, max_length=3, pattern="^[A-Z]{3}$")
    day_due: int = Field(..., ge=1, le=31, description="Day of month bills fall due")
    month_interval: int = Field(default=1, ge=1)
    begin_date: date = Field(default=date.min)
    end_date: date = Field(default=date.max, description="Defaults to unbounded")
    enabled: bool = True


class BillScheduleCreate(BillScheduleBase):
    """Schema for creating a bill schedule"""

    account_id: UUID

    @model_validator(mode="after")
    def validate_date_range(self):
        """Ensure the schedule does not end before it begins"""
        if self.end_date < self.begin_date:
            raise ValueError("end_date must be on or after begin_date")
        return self


class BillScheduleUpdate(BaseModel):
    """
    Schema for updating a bill schedule.

    Changes to amount or currency only affect bills generated afterwards.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    amount: Decimal | None = Field(None, ge=0, max_digits=18, decimal_places=2)
    currency: str | None = Field(None, min_length=3, max_length=3, pattern="^[A-Z]{3}$")
    day_due: int | None = Field(None, ge=1, le=31)
    month_interval: int | None = Field(None, ge=1)
    begin_date: date | None = None
    end_date: date | None = None
    enabled: bool | None = None


class BillScheduleResponse(BillScheduleBase):
    """Schema for bill schedule response"""

    id: UUID
    account_id: UUID
    created_timestamp: datetime
    updated_timestamp: datetime | None = None

    model_config = {"from_attributes": True}


class BillScheduleListResponse(BaseModel):
    """Schema for list of bill schedules"""

    bill_schedules: list[BillScheduleResponse]
    total: int
