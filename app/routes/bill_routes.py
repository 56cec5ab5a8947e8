from datetime import date, datetime, UTC
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user_id
from app.services.bill_service import BillService
from app.schemas.bill_schemas import (
    BillGenerationResponse,
    BillListResponse,
    BillResponse,
    BillUpdate,
)

router = APIRouter()
generation_router = APIRouter()


@router.get("", response_model=BillListResponse)
async def list_bills(
    account_id: UUID = Query(..., description="Account whose bills to list"),
    start_date: Optional[date] = Query(None, description="Due on or after (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="Due on or before (YYYY-MM-DD)"),
    limit: int = Query(100, ge=1, le=1000, description="Max results"),
    offset: int = Query(0, ge=0, description="Pagination offset"),
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    List bills of an account, newest due date first.

    Query parameters:
    - **account_id**: Account to list (required)
    - **start_date** / **end_date**: Due date range (inclusive)
    - **limit** / **offset**: Pagination
    """
    service = BillService(db)
    bills, total = service.get_bills(
        account_id,
        user_id,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
        offset=offset,
    )
    return BillListResponse(bills=bills, total=total, limit=limit, offset=offset)


@router.get("/{bill_id}", response_model=BillResponse)
async def get_bill(
    bill_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get a single bill"""
    service = BillService(db)
    return service.get_bill(bill_id, user_id)


@router.patch("/{bill_id}", response_model=BillResponse)
async def update_bill(
    bill_id: UUID,
    data: BillUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Update a bill, e.g. to record its payment reference.

    - **Requires access to the account's tenant**
    """
    service = BillService(db)
    return service.update_bill(bill_id, data, user_id)


@router.delete("/{bill_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bill(
    bill_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Void a bill; it stays on record and is not generated again"""
    service = BillService(db)
    service.delete_bill(bill_id, user_id)
    return None


@generation_router.post("/run", response_model=BillGenerationResponse)
async def run_bill_generation(
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Run a bill generation pass now instead of waiting for the scheduler.

    - **Requires application-level access**
    """
    now = datetime.now(UTC)
    service = BillService(db)
    created = service.run_generation(user_id, now)
    return BillGenerationResponse(bills_created=created, run_date=now.date())
