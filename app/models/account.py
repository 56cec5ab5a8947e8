from uuid import UUID, uuid4

from sqlalchemy import String, Uuid, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from app.models.base import Base, AuditMixin

if TYPE_CHECKING:
    from app.models.tenant import Tenant
    from app.models.account_user import AccountUser
    from app.models.bill import Bill
    from app.models.bill_schedule import BillSchedule


class Account(Base, AuditMixin):
    """
    A billed party (a customer, a property, a unit) under one tenant.

    tenant_id is set at creation and never reassigned.
    """

    __tablename__ = "accounts"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    tenant_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,  # Critical for multi-tenant queries
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    reference_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # reference_id is the tenant's own identifier for the account (customer number)

    # Relationships
    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="accounts")
    users: Mapped[list["AccountUser"]] = relationship(
        "AccountUser",
        back_populates="account",
        cascade="all, delete-orphan",
    )
    bills: Mapped[list["Bill"]] = relationship(
        "Bill",
        back_populates="account",
        cascade="all, delete-orphan",
    )
    bill_schedules: Mapped[list["BillSchedule"]] = relationship(
        "BillSchedule",
        back_populates="account",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, tenant_id={self.tenant_id}, name='{self.name}')>"
