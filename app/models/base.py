from datetime import datetime, UTC
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    return datetime.now(UTC)


class AuditMixin:
    """
    Who created, last updated and soft-deleted a row, and when.

    Rows are never hard-deleted through the API; `disabled` hides them from
    reads and from bill generation.
    """

    created_user: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    created_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_user: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    updated_timestamp: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    disabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    disabled_user: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    disabled_timestamp: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def mark_updated(self, user_id: UUID) -> None:
        self.updated_user = user_id
        self.updated_timestamp = utcnow()

    def mark_disabled(self, user_id: UUID) -> None:
        self.disabled = True
        self.disabled_user = user_id
        self.disabled_timestamp = utcnow()
