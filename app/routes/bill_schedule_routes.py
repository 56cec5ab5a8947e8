from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user_id
from app.services.bill_schedule_service import BillScheduleService
from app.schemas.bill_schedule_schemas import (
    BillScheduleCreate,
    BillScheduleUpdate,
    BillScheduleResponse,
    BillScheduleListResponse,
)

router = APIRouter()


@router.post("", response_model=BillScheduleResponse, status_code=status.HTTP_201_CREATED)
async def create_bill_schedule(
    data: BillScheduleCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Create a recurring bill schedule for an account.

    - **Requires access to the account's tenant**
    """
    service = BillScheduleService(db)
    return service.create_schedule(data, user_id)


@router.get("", response_model=BillScheduleListResponse)
async def list_bill_schedules(
    account_id: UUID = Query(..., description="Account whose schedules to list"),
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get all schedules of an account"""
    service = BillScheduleService(db)
    schedules = service.get_account_schedules(account_id, user_id)
    return BillScheduleListResponse(bill_schedules=schedules, total=len(schedules))


@router.get("/{schedule_id}", response_model=BillScheduleResponse)
async def get_bill_schedule(
    schedule_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get a single bill schedule"""
    service = BillScheduleService(db)
    return service.get_schedule(schedule_id, user_id)


@router.patch("/{schedule_id}", response_model=BillScheduleResponse)
async def update_bill_schedule(
    schedule_id: UUID,
    data: BillScheduleUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Update a bill schedule.

    Only bills generated after the update pick up the new values.
    """
    service = BillScheduleService(db)
    return service.update_schedule(schedule_id, data, user_id)


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bill_schedule(
    schedule_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Disable a bill schedule; already generated bills are kept"""
    service = BillScheduleService(db)
    service.delete_schedule(schedule_id, user_id)
    return None
