from uuid import UUID

from sqlalchemy.orm import Session

from app.core.exceptions import ForbiddenException, NotFoundException
from app.models.account import Account
from app.repositories.account_repository import AccountRepository
from app.repositories.tenant_repository import TenantRepository
from app.schemas.account_schemas import AccountCreate, AccountUpdate
from app.services.access_resolver import AccessResolver


class AccountService:
    """Service for account business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AccountRepository(db)
        self.tenant_repo = TenantRepository(db)
        self.resolver = AccessResolver(db)

    def create_account(self, data: AccountCreate, user_id: UUID) -> Account:
        """
        Create new account under a tenant.

        Raises:
            ForbiddenException: If the user has no access to the tenant
            NotFoundException: If the tenant doesn't exist
        """
        if not self.resolver.check_tenant_access(user_id, data.tenant_id):
            raise ForbiddenException("Not authorized to create accounts for this tenant")
        if not self.tenant_repo.get_by_id(data.tenant_id):
            raise NotFoundException(f"Tenant {data.tenant_id} not found")

        account = Account(
            tenant_id=data.tenant_id,
            name=data.name,
            address=data.address,
            reference_id=data.reference_id,
            created_user=user_id,
        )
        return self.repo.create(account)

    def get_tenant_accounts(self, tenant_id: UUID, user_id: UUID) -> list[Account]:
        """Get all accounts of a tenant"""
        if not self.resolver.check_tenant_access(user_id, tenant_id):
            raise ForbiddenException("Not authorized to list accounts of this tenant")
        return self.repo.get_by_tenant(tenant_id)

    def get_account(self, account_id: UUID, user_id: UUID) -> Account:
        """
        Get specific account after checking account-level access.

        Raises:
            ForbiddenException: If the user has no access to the account
            NotFoundException: If account not found
        """
        if not self.resolver.check_account_access(user_id, account_id):
            raise ForbiddenException("Not authorized to access this account")

        account = self.repo.get_by_id(account_id)
        if not account:
            raise NotFoundException("Account not found")
        return account

    def get_managed_account(self, account_id: UUID, user_id: UUID) -> Account:
        """
        Get an account the user may modify.

        Changes to an account require access to its tenant; an account-level
        membership only allows reading.
        """
        account = self.repo.get_by_id(account_id)
        if not account:
            # Fall through so unknown ids are only revealed to application users
            if not self.resolver.check_account_access(user_id, account_id):
                raise ForbiddenException("Not authorized to access this account")
            raise NotFoundException("Account not found")

        if not self.resolver.check_tenant_access(user_id, account.tenant_id):
            raise ForbiddenException("Not authorized to modify this account")
        return account

    def update_account(self, account_id: UUID, data: AccountUpdate, user_id: UUID) -> Account:
        """Update account details"""
        account = self.get_managed_account(account_id, user_id)

        if data.name is not None:
            account.name = data.name
        if data.address is not None:
            account.address = data.address
        if data.reference_id is not None:
            account.reference_id = data.reference_id
        account.mark_updated(user_id)

        return self.repo.update(account)

    def delete_account(self, account_id: UUID, user_id: UUID) -> None:
        """Soft delete account; its bills and schedules stay for auditing"""
        account = self.get_managed_account(account_id, user_id)
        account.mark_disabled(user_id)
        self.repo.update(account)
