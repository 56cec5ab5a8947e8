from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user_id
from app.services.tenant_service import TenantService
from app.schemas.tenant_schemas import TenantCreate, TenantResponse, TenantUpdate

router = APIRouter()


@router.get("", response_model=list[TenantResponse])
async def list_tenants(
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    List the tenants the authenticated user can access.

    Application users see every tenant.
    """
    service = TenantService(db)
    return service.list_tenants(user_id)


@router.post("", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
async def create_tenant(
    data: TenantCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Create a tenant.

    - **Requires application-level access**
    """
    service = TenantService(db)
    return service.create_tenant(data, user_id)


@router.get("/{tenant_id}", response_model=TenantResponse)
async def get_tenant(
    tenant_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get tenant details"""
    service = TenantService(db)
    return service.get_tenant(tenant_id, user_id)


@router.patch("/{tenant_id}", response_model=TenantResponse)
async def update_tenant(
    tenant_id: UUID,
    data: TenantUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Update tenant name"""
    service = TenantService(db)
    return service.update_tenant(tenant_id, data, user_id)
