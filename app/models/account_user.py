"""Account membership model linking users to a single account."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from app.models.base import Base, utcnow

if TYPE_CHECKING:
    from app.models.account import Account


class AccountUser(Base):
    """
    Join table granting a user access to exactly one account.

    Constraints:
    - Unique(account_id, user_id) - one membership per user per account
    """

    __tablename__ = "account_users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    account_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    created_user: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    created_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    # Relationships
    account: Mapped["Account"] = relationship("Account", back_populates="users")

    __table_args__ = (
        UniqueConstraint("account_id", "user_id", name="uq_account_user"),
    )

    def __repr__(self) -> str:
        return f"<AccountUser(account_id={self.account_id}, user_id={self.user_id})>"
