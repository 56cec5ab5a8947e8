"""Tenant membership model linking users to tenants."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from app.models.base import Base, utcnow

if TYPE_CHECKING:
    from app.models.tenant import Tenant


class TenantUser(Base):
    """
    Join table granting a user access to a tenant.

    A tenant membership implicitly covers every account of the tenant;
    no per-account rows are materialized for it.

    Constraints:
    - Unique(tenant_id, user_id) - one membership per user per tenant
    """

    __tablename__ = "tenant_users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    tenant_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    created_user: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    created_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    # Relationships
    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="users")

    # Constraints
    __table_args__ = (
        UniqueConstraint("tenant_id", "user_id", name="uq_tenant_user"),
    )

    def __repr__(self) -> str:
        return f"<TenantUser(tenant_id={self.tenant_id}, user_id={self.user_id})>"
