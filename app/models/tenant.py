"""Tenant model for multi-tenant isolation."""

from uuid import UUID, uuid4

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from app.models.base import Base, AuditMixin

if TYPE_CHECKING:
    from app.models.tenant_user import TenantUser
    from app.models.account import Account


class Tenant(Base, AuditMixin):
    """
    Multi-tenant isolation boundary.

    A tenant is a billing organization (a utility, a landlord, an HOA...)
    that issues bills to its accounts. Every account belongs to exactly one
    tenant, and a tenant-level membership implicitly grants access to all
    of the tenant's accounts.

    The identifier is assigned at creation and never changes.
    """

    __tablename__ = "tenants"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Relationships
    users: Mapped[list["TenantUser"]] = relationship(
        "TenantUser",
        back_populates="tenant",
        cascade="all, delete-orphan",
    )
    accounts: Mapped[list["Account"]] = relationship(
        "Account",
        back_populates="tenant",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, name='{self.name}')>"
