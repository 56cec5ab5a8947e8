from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from app.models.base import Base, AuditMixin

if TYPE_CHECKING:
    from app.models.account import Account
    from app.models.bill import Bill


class BillSchedule(Base, AuditMixin):
    """
    Recurring template from which bills are generated.

    day_due is the day of the month bills fall due on; days past the end of
    a short month are clamped to its last day when a bill is generated.
    month_interval, begin_date and end_date describe the intended cadence
    and are kept for display; generation is governed by the lookahead
    horizon (see BillGenerator).
    """

    __tablename__ = "bill_schedules"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    account_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=18, scale=2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    day_due: Mapped[int] = mapped_column(Integer, nullable=False)
    month_interval: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    begin_date: Mapped[date] = mapped_column(Date, nullable=False, default=date.min)
    end_date: Mapped[date] = mapped_column(Date, nullable=False, default=date.max)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    account: Mapped["Account"] = relationship("Account", back_populates="bill_schedules")
    bills: Mapped[list["Bill"]] = relationship("Bill", back_populates="bill_schedule")

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_bill_schedules_amount_non_negative"),
        CheckConstraint("day_due BETWEEN 1 AND 31", name="ck_bill_schedules_day_due_range"),
        CheckConstraint("month_interval >= 1", name="ck_bill_schedules_month_interval_positive"),
    )

    def __repr__(self) -> str:
        return f"<BillSchedule(id={self.id}, account_id={self.account_id}, day_due={self.day_due})>"
