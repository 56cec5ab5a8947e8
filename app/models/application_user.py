"""Application-level membership: operators and support staff."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, utcnow


class ApplicationUser(Base):
    """
    Grants access to every tenant and every account in the system.

    Memberships only record a grant: user_id is the identity provider's
    subject and is not backed by a local user table.
    """

    __tablename__ = "application_users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, unique=True, index=True)
    created_user: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    created_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    def __repr__(self) -> str:
        return f"<ApplicationUser(user_id={self.user_id})>"
