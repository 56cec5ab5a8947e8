from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user_id
from app.services.membership_service import MembershipService
from app.schemas.membership_schemas import (
    MembershipCreate,
    ApplicationUserResponse,
    TenantUserResponse,
    AccountUserResponse,
)

router = APIRouter()


@router.get("/application-users", response_model=list[ApplicationUserResponse])
async def list_application_users(
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """List application-level users (application access required)"""
    service = MembershipService(db)
    return service.list_application_users(user_id)


@router.post(
    "/application-users",
    response_model=ApplicationUserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_application_user(
    data: MembershipCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Grant application-level access"""
    service = MembershipService(db)
    return service.add_application_user(data.user_id, user_id)


@router.delete("/application-users/{target_user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_application_user(
    target_user_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Revoke application-level access"""
    service = MembershipService(db)
    service.remove_application_user(target_user_id, user_id)
    return None


@router.get("/tenants/{tenant_id}/users", response_model=list[TenantUserResponse])
async def list_tenant_users(
    tenant_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """List users with tenant-level access"""
    service = MembershipService(db)
    return service.list_tenant_users(tenant_id, user_id)


@router.post(
    "/tenants/{tenant_id}/users",
    response_model=TenantUserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_tenant_user(
    tenant_id: UUID,
    data: MembershipCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Grant tenant-level access (covers every account of the tenant)"""
    service = MembershipService(db)
    return service.add_tenant_user(tenant_id, data.user_id, user_id)


@router.delete("/tenants/{tenant_id}/users/{target_user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_tenant_user(
    tenant_id: UUID,
    target_user_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Revoke tenant-level access"""
    service = MembershipService(db)
    service.remove_tenant_user(tenant_id, target_user_id, user_id)
    return None


@router.get("/accounts/{account_id}/users", response_model=list[AccountUserResponse])
async def list_account_users(
    account_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """List users with account-level access (tenant access required)"""
    service = MembershipService(db)
    return service.list_account_users(account_id, user_id)


@router.post(
    "/accounts/{account_id}/users",
    response_model=AccountUserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_account_user(
    account_id: UUID,
    data: MembershipCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Grant access to a single account"""
    service = MembershipService(db)
    return service.add_account_user(account_id, data.user_id, user_id)


@router.delete(
    "/accounts/{account_id}/users/{target_user_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def remove_account_user(
    account_id: UUID,
    target_user_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Revoke access to a single account"""
    service = MembershipService(db)
    service.remove_account_user(account_id, target_user_id, user_id)
    return None
