from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ForbiddenException, NotFoundException, ValidationException
from app.models.account_user import AccountUser
from app.models.application_user import ApplicationUser
from app.models.tenant_user import TenantUser
from app.repositories.membership_repository import MembershipRepository
from app.services.access_resolver import AccessResolver
from app.services.account_service import AccountService
from app.services.tenant_service import TenantService


class MembershipService:
    """
    Grants and revokes memberships at the three levels.

    Who may manage a level:
    - application users: application users
    - tenant users: anyone with access to the tenant
    - account users: anyone with access to the account's tenant
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = MembershipRepository(db)
        self.resolver = AccessResolver(db)
        self.tenant_service = TenantService(db)
        self.account_service = AccountService(db)

    # Application level

    def list_application_users(self, user_id: UUID) -> list[ApplicationUser]:
        self._require_application_access(user_id)
        return self.repo.get_application_users()

    def add_application_user(self, new_user_id: UUID, user_id: UUID) -> ApplicationUser:
        self._require_application_access(user_id)
        return self._create(ApplicationUser(user_id=new_user_id, created_user=user_id))

    def remove_application_user(self, target_user_id: UUID, user_id: UUID) -> None:
        self._require_application_access(user_id)
        if target_user_id == user_id:
            raise ValidationException("Application users cannot remove themselves")

        membership = self.repo.get_application_user(target_user_id)
        if not membership:
            raise NotFoundException("Application user not found")
        self.repo.delete(membership)

    # Tenant level

    def list_tenant_users(self, tenant_id: UUID, user_id: UUID) -> list[TenantUser]:
        tenant = self.tenant_service.get_tenant(tenant_id, user_id)
        return self.repo.get_tenant_users(tenant.id)

    def add_tenant_user(self, tenant_id: UUID, new_user_id: UUID, user_id: UUID) -> TenantUser:
        tenant = self.tenant_service.get_tenant(tenant_id, user_id)
        return self._create(
            TenantUser(tenant_id=tenant.id, user_id=new_user_id, created_user=user_id)
        )

    def remove_tenant_user(self, tenant_id: UUID, target_user_id: UUID, user_id: UUID) -> None:
        tenant = self.tenant_service.get_tenant(tenant_id, user_id)
        membership = self.repo.get_tenant_user(target_user_id, tenant.id)
        if not membership:
            raise NotFoundException("User is not a member of this tenant")
        self.repo.delete(membership)

    # Account level

    def list_account_users(self, account_id: UUID, user_id: UUID) -> list[AccountUser]:
        account = self.account_service.get_managed_account(account_id, user_id)
        return self.repo.get_account_users(account.id)

    def add_account_user(self, account_id: UUID, new_user_id: UUID, user_id: UUID) -> AccountUser:
        account = self.account_service.get_managed_account(account_id, user_id)
        return self._create(
            AccountUser(account_id=account.id, user_id=new_user_id, created_user=user_id)
        )

    def remove_account_user(self, account_id: UUID, target_user_id: UUID, user_id: UUID) -> None:
        account = self.account_service.get_managed_account(account_id, user_id)
        membership = self.repo.get_account_user(target_user_id, account.id)
        if not membership:
            raise NotFoundException("User is not a member of this account")
        self.repo.delete(membership)

    def _require_application_access(self, user_id: UUID) -> None:
        if not self.resolver.check_application_access(user_id):
            raise ForbiddenException("Application-level access required")

    def _create(self, membership):
        try:
            return self.repo.create(membership)
        except IntegrityError:
            self.db.rollback()
            raise ValidationException("User already has this membership")
