from uuid import UUID

from sqlalchemy.orm import Session
from app.models.account import Account


class AccountRepository:
    """Repository for Account model operations with multi-tenant support"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_tenant(self, tenant_id: UUID) -> list[Account]:
        """Get all active accounts of a tenant"""
        return (
            self.db.query(Account)
            .filter(Account.tenant_id == tenant_id, Account.disabled.is_(False))
            .order_by(Account.name)
            .all()
        )

    def get_by_id(self, account_id: UUID) -> Account | None:
        """
        Get an active account by ID.

        Returns None if the account doesn't exist or was disabled.
        """
        return (
            self.db.query(Account)
            .filter(Account.id == account_id, Account.disabled.is_(False))
            .first()
        )

    def create(self, account: Account) -> Account:
        """Create new account"""
        self.db.add(account)
        self.db.commit()
        self.db.refresh(account)
        return account

    def update(self, account: Account) -> Account:
        """Update existing account (also used to persist a soft delete)"""
        self.db.commit()
        self.db.refresh(account)
        return account
