from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import String, Numeric, ForeignKey, Date, Index, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING, Optional
from app.models.base import Base, AuditMixin

if TYPE_CHECKING:
    from app.models.account import Account
    from app.models.bill_schedule import BillSchedule


class Bill(Base, AuditMixin):
    """
    An amount owed by an account, due on a given date.

    Bills generated from a schedule keep a reference to it; the
    (bill_schedule_id, due_date) unique constraint makes a second
    generation of the same bill fail instead of double-billing.
    payment_id references the external payment, once one exists.
    """

    __tablename__ = "bills"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    account_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    bill_schedule_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("bill_schedules.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    due_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    payment_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Relationships
    account: Mapped["Account"] = relationship("Account", back_populates="bills")
    bill_schedule: Mapped[Optional["BillSchedule"]] = relationship(
        "BillSchedule", back_populates="bills"
    )

    __table_args__ = (
        UniqueConstraint("bill_schedule_id", "due_date", name="uq_bill_schedule_due_date"),
        Index("ix_bills_account_due_date", "account_id", "due_date"),
    )

    def __repr__(self) -> str:
        return f"<Bill(id={self.id}, account_id={self.account_id}, due_date={self.due_date})>"
