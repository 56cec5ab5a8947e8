"""Import every model so they register with Base.metadata."""

from app.models.base import Base
from app.models.tenant import Tenant
from app.models.account import Account
from app.models.application_user import ApplicationUser
from app.models.tenant_user import TenantUser
from app.models.account_user import AccountUser
from app.models.bill_schedule import BillSchedule
from app.models.bill import Bill

__all__ = [
    "Base",
    "Tenant",
    "Account",
    "ApplicationUser",
    "TenantUser",
    "AccountUser",
    "BillSchedule",
    "Bill",
]
