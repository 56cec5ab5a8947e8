from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user_id
from app.services.account_service import AccountService
from app.schemas.account_schemas import (
    AccountCreate,
    AccountUpdate,
    AccountResponse,
    AccountListResponse,
)

router = APIRouter()


@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def create_account(
    data: AccountCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create a new account under a tenant the user has access to"""
    service = AccountService(db)
    return service.create_account(data, user_id)


@router.get("", response_model=AccountListResponse)
async def list_accounts(
    tenant_id: UUID = Query(..., description="Tenant whose accounts to list"),
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get all accounts of a tenant"""
    service = AccountService(db)
    accounts = service.get_tenant_accounts(tenant_id, user_id)
    return AccountListResponse(accounts=accounts, total=len(accounts))


@router.get("/{account_id}", response_model=AccountResponse)
async def get_account(
    account_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get specific account details"""
    service = AccountService(db)
    return service.get_account(account_id, user_id)


@router.patch("/{account_id}", response_model=AccountResponse)
async def update_account(
    account_id: UUID,
    data: AccountUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Update account details"""
    service = AccountService(db)
    return service.update_account(account_id, data, user_id)


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    account_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Disable an account; its bills and schedules are kept"""
    service = AccountService(db)
    service.delete_account(account_id, user_id)
    return None
