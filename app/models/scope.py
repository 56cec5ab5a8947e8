"""Authorization scopes an access check can target."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class AccountScope:
    """A single account; satisfied by account, tenant or application grants."""

    account_id: UUID

    name = "account"

    @property
    def scope_id(self) -> UUID:
        return self.account_id


@dataclass(frozen=True)
class TenantScope:
    """A tenant; satisfied by tenant or application grants."""

    tenant_id: UUID

    name = "tenant"

    @property
    def scope_id(self) -> UUID:
        return self.tenant_id


Scope = AccountScope | TenantScope
