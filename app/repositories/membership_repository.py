"""Repository for the three membership relations (application, tenant, account)."""

from uuid import UUID

from sqlalchemy.orm import Session

from app.models.account import Account
from app.models.account_user import AccountUser
from app.models.application_user import ApplicationUser
from app.models.tenant import Tenant
from app.models.tenant_user import TenantUser


class MembershipRepository:
    """
    Read and write access to membership grants.

    The has_* methods are the lookups the access resolver composes; they
    only test for the existence of an explicit grant and never walk the
    hierarchy themselves.
    """

    def __init__(self, db: Session):
        self.db = db

    # Lookups used by the access resolver

    def has_application_membership(self, user_id: UUID) -> bool:
        """Check whether user_id holds an application-level grant"""
        return self.db.query(
            self.db.query(ApplicationUser)
            .filter(ApplicationUser.user_id == user_id)
            .exists()
        ).scalar()

    def has_tenant_membership(self, user_id: UUID, tenant_id: UUID) -> bool:
        """Check whether user_id holds a grant on tenant_id"""
        return self.db.query(
            self.db.query(TenantUser)
            .filter(TenantUser.user_id == user_id, TenantUser.tenant_id == tenant_id)
            .exists()
        ).scalar()

    def has_account_membership(self, user_id: UUID, account_id: UUID) -> bool:
        """Check whether user_id holds a grant on account_id"""
        return self.db.query(
            self.db.query(AccountUser)
            .filter(AccountUser.user_id == user_id, AccountUser.account_id == account_id)
            .exists()
        ).scalar()

    def find_account(self, account_id: UUID) -> Account | None:
        """
        Get an account by ID, including soft-deleted ones.

        A disabled account still belongs to its tenant, so tenant-level
        grants keep applying to it.
        """
        return self.db.query(Account).filter(Account.id == account_id).first()

    def find_tenant(self, tenant_id: UUID) -> Tenant | None:
        """Get a tenant by ID"""
        return self.db.query(Tenant).filter(Tenant.id == tenant_id).first()

    # Membership management

    def get_application_users(self) -> list[ApplicationUser]:
        return self.db.query(ApplicationUser).order_by(ApplicationUser.created_timestamp).all()

    def get_application_user(self, user_id: UUID) -> ApplicationUser | None:
        return self.db.query(ApplicationUser).filter(ApplicationUser.user_id == user_id).first()

    def get_tenant_users(self, tenant_id: UUID) -> list[TenantUser]:
        return (
            self.db.query(TenantUser)
            .filter(TenantUser.tenant_id == tenant_id)
            .order_by(TenantUser.created_timestamp)
            .all()
        )

    def get_tenant_user(self, user_id: UUID, tenant_id: UUID) -> TenantUser | None:
        return (
            self.db.query(TenantUser)
            .filter(TenantUser.user_id == user_id, TenantUser.tenant_id == tenant_id)
            .first()
        )

    def get_user_tenant_ids(self, user_id: UUID) -> list[UUID]:
        """Get IDs of every tenant the user holds a tenant-level grant on"""
        rows = self.db.query(TenantUser.tenant_id).filter(TenantUser.user_id == user_id).all()
        return [row.tenant_id for row in rows]

    def get_account_users(self, account_id: UUID) -> list[AccountUser]:
        return (
            self.db.query(AccountUser)
            .filter(AccountUser.account_id == account_id)
            .order_by(AccountUser.created_timestamp)
            .all()
        )

    def get_account_user(self, user_id: UUID, account_id: UUID) -> AccountUser | None:
        return (
            self.db.query(AccountUser)
            .filter(AccountUser.user_id == user_id, AccountUser.account_id == account_id)
            .first()
        )

    def create(self, membership: ApplicationUser | TenantUser | AccountUser):
        """
        Create a membership of any level.

        Raises:
            IntegrityError: If the same grant already exists
        """
        self.db.add(membership)
        self.db.commit()
        self.db.refresh(membership)
        return membership

    def delete(self, membership: ApplicationUser | TenantUser | AccountUser) -> None:
        """Revoke a membership"""
        self.db.delete(membership)
        self.db.commit()
