from uuid import UUID

from sqlalchemy.orm import Session

from app.core.exceptions import ForbiddenException, NotFoundException
from app.models.tenant import Tenant
from app.repositories.tenant_repository import TenantRepository
from app.schemas.tenant_schemas import TenantCreate, TenantUpdate
from app.services.access_resolver import AccessResolver


class TenantService:
    """Service layer for tenant management business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.tenant_repo = TenantRepository(db)
        self.resolver = AccessResolver(db)

    def list_tenants(self, user_id: UUID) -> list[Tenant]:
        """
        List the tenants a user can see.

        Application users see every tenant; everyone else sees the tenants
        they hold a tenant-level membership on.
        """
        tenant_ids = self.resolver.list_member_tenant_ids(user_id)
        if tenant_ids is None:
            return self.tenant_repo.get_all()
        return self.tenant_repo.get_by_ids(tenant_ids)

    def get_tenant(self, tenant_id: UUID, user_id: UUID) -> Tenant:
        """
        Get tenant details.

        Raises:
            ForbiddenException: If the user has no access to the tenant
            NotFoundException: If the tenant doesn't exist
        """
        if not self.resolver.check_tenant_access(user_id, tenant_id):
            raise ForbiddenException("Not authorized to access this tenant")

        tenant = self.tenant_repo.get_by_id(tenant_id)
        if not tenant:
            raise NotFoundException(f"Tenant {tenant_id} not found")
        return tenant

    def create_tenant(self, data: TenantCreate, user_id: UUID) -> Tenant:
        """
        Create a tenant (application users only).

        Raises:
            ForbiddenException: If the user is not an application user
        """
        if not self.resolver.check_application_access(user_id):
            raise ForbiddenException("Only application users can create tenants")

        tenant = Tenant(name=data.name, created_user=user_id)
        return self.tenant_repo.create(tenant)

    def update_tenant(self, tenant_id: UUID, data: TenantUpdate, user_id: UUID) -> Tenant:
        """Update tenant name"""
        tenant = self.get_tenant(tenant_id, user_id)
        tenant.name = data.name
        tenant.mark_updated(user_id)
        return self.tenant_repo.update(tenant)
