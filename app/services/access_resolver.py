"""
Hierarchical access resolution.

Grants are recorded at three nested levels and applied upward-implicitly:

    application  ->  every tenant and every account
    tenant       ->  the tenant and every account under it
    account      ->  that account only

No derived membership rows exist; each check walks the hierarchy from the
narrowest level to the broadest and stops at the first grant found. Missing
accounts or tenants are not errors here, the check simply continues at the
application level.
"""

import logging
from collections.abc import Mapping
from contextlib import contextmanager
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import PersistenceException
from app.models.scope import AccountScope, Scope, TenantScope
from app.repositories.membership_repository import MembershipRepository

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("app.audit")

# Returned for unusable identities; matches no membership row
EMPTY_USER_ID = UUID(int=0)

# Claims that may carry the caller's identifier, in lookup order
USER_ID_CLAIMS = ("sub", "nameid")


@contextmanager
def _membership_store():
    """Turn store failures into PersistenceException so callers fail closed."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception("Membership store lookup failed")
        raise PersistenceException("Membership store unavailable") from e


class AccessResolver:
    """Answers whether a user may act on an account, a tenant or the whole application"""

    def __init__(self, db: Session):
        self.db = db
        self.membership_repo = MembershipRepository(db)

    def check_access(self, user_id: UUID, scope: Scope) -> bool:
        """
        Check access to any scope.

        Args:
            user_id: Caller identifier (see resolve_user_id)
            scope: AccountScope or TenantScope

        Returns:
            True if any grant covering the scope exists
        """
        if isinstance(scope, AccountScope):
            return self.check_account_access(user_id, scope.account_id)
        return self.check_tenant_access(user_id, scope.tenant_id)

    def check_account_access(self, user_id: UUID, account_id: UUID) -> bool:
        """
        Check access to an account.

        Granted by an account membership, a membership on the account's
        tenant, or an application membership.

        Raises:
            PersistenceException: If the membership store cannot be read
        """
        with _membership_store():
            account = self.membership_repo.find_account(account_id)
            if account is not None:
                if self.membership_repo.has_account_membership(user_id, account_id):
                    return True
                if self.membership_repo.has_tenant_membership(user_id, account.tenant_id):
                    return True

            if self.membership_repo.has_application_membership(user_id):
                return True

        self._log_denial(user_id, AccountScope(account_id))
        return False

    def check_tenant_access(self, user_id: UUID, tenant_id: UUID) -> bool:
        """
        Check access to a tenant.

        Granted by a membership on the tenant or an application membership.
        Account memberships never grant tenant access.

        Raises:
            PersistenceException: If the membership store cannot be read
        """
        with _membership_store():
            tenant = self.membership_repo.find_tenant(tenant_id)
            if tenant is not None and self.membership_repo.has_tenant_membership(
                user_id, tenant_id
            ):
                return True

            if self.membership_repo.has_application_membership(user_id):
                return True

        self._log_denial(user_id, TenantScope(tenant_id))
        return False

    def check_application_access(self, user_id: UUID) -> bool:
        """
        Check for an application-level grant.

        Raises:
            PersistenceException: If the membership store cannot be read
        """
        with _membership_store():
            if self.membership_repo.has_application_membership(user_id):
                return True

        self._log_denial(user_id, None)
        return False

    def list_member_tenant_ids(self, user_id: UUID) -> list[UUID] | None:
        """
        Tenant ids covered by the user's grants, for listing.

        Returns None for application users, whose grant covers every tenant.
        Lookups here are not access checks and log no denials.

        Raises:
            PersistenceException: If the membership store cannot be read
        """
        with _membership_store():
            if self.membership_repo.has_application_membership(user_id):
                return None
            return self.membership_repo.get_user_tenant_ids(user_id)

    def resolve_user_id(self, principal: Any) -> UUID:
        """
        Extract the caller's user id from decoded token claims.

        Never raises. A principal that is not a claims mapping, or a missing,
        empty or non-UUID identifier, is logged and replaced with
        EMPTY_USER_ID, which every access check denies.
        """
        if not isinstance(principal, Mapping) or not principal:
            logger.warning("User attempted call without an identity")
            return EMPTY_USER_ID

        sid = next((principal.get(claim) for claim in USER_ID_CLAIMS if principal.get(claim)), None)
        if not sid:
            logger.warning("User attempted call without an sid")
            return EMPTY_USER_ID

        try:
            return UUID(str(sid))
        except ValueError:
            logger.warning("User sid %s could not be parsed as UUID", sid)
            return EMPTY_USER_ID

    def _log_denial(self, user_id: UUID, scope: Scope | None) -> None:
        scope_name = scope.name if scope is not None else "application"
        scope_id = scope.scope_id if scope is not None else None
        audit_logger.warning(
            "Denied %s-level access to user id %s",
            scope_name,
            user_id,
            extra={
                "user_id": str(user_id),
                "scope": scope_name,
                "scope_id": str(scope_id) if scope_id is not None else None,
            },
        )
