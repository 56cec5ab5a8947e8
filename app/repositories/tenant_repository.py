"""Repository for Tenant model operations."""

from uuid import UUID

from sqlalchemy.orm import Session
from app.models.tenant import Tenant


class TenantRepository:
    """Repository for Tenant model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, tenant_id: UUID) -> Tenant | None:
        """
        Get an active tenant by ID.

        Args:
            tenant_id: Tenant ID

        Returns:
            Tenant object or None if not found or disabled
        """
        return (
            self.db.query(Tenant)
            .filter(Tenant.id == tenant_id, Tenant.disabled.is_(False))
            .first()
        )

    def get_all(self) -> list[Tenant]:
        """
        Get all active tenants.

        Returns:
            List of Tenant objects ordered by name
        """
        return self.db.query(Tenant).filter(Tenant.disabled.is_(False)).order_by(Tenant.name).all()

    def get_by_ids(self, tenant_ids: list[UUID]) -> list[Tenant]:
        """Get the active tenants among tenant_ids"""
        if not tenant_ids:
            return []
        return (
            self.db.query(Tenant)
            .filter(Tenant.id.in_(tenant_ids), Tenant.disabled.is_(False))
            .order_by(Tenant.name)
            .all()
        )

    def create(self, tenant: Tenant) -> Tenant:
        """
        Create a new tenant.

        Args:
            tenant: Tenant object to create

        Returns:
            Created Tenant object with ID populated
        """
        self.db.add(tenant)
        self.db.commit()
        self.db.refresh(tenant)
        return tenant

    def update(self, tenant: Tenant) -> Tenant:
        """
        Update an existing tenant.

        Args:
            tenant: Tenant object with updated fields

        Returns:
            Updated Tenant object
        """
        self.db.commit()
        self.db.refresh(tenant)
        return tenant
