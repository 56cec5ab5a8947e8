from datetime import date, datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.exceptions import ForbiddenException, NotFoundException, ValidationException
from app.models.bill import Bill
from app.repositories.bill_repository import BillRepository
from app.schemas.bill_schemas import BillUpdate
from app.services.access_resolver import AccessResolver
from app.services.account_service import AccountService
from app.services.bill_generator import BillGenerator


class BillService:
    """Bill business logic; bills are only created by the bill generator"""

    def __init__(self, db: Session):
        self.db = db
        self.bill_repo = BillRepository(db)
        self.account_service = AccountService(db)
        self.resolver = AccessResolver(db)

    def get_bill(self, bill_id: UUID, user_id: UUID) -> Bill:
        """
        Get bill by ID with access verification.

        Raises:
            ForbiddenException: If the user has no access to the bill's account
            NotFoundException: If bill doesn't exist
        """
        bill = self._find_bill(bill_id, user_id)

        if not self.resolver.check_account_access(user_id, bill.account_id):
            raise ForbiddenException("Not authorized to access this bill")
        return bill

    def get_bills(
        self,
        account_id: UUID,
        user_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Bill], int]:
        """
        Get bills of an account with optional due date range.

        Returns:
            Tuple of (bills, total_count)
        """
        account = self.account_service.get_account(account_id, user_id)
        return self.bill_repo.get_by_account(
            account.id,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
            offset=offset,
        )

    def update_bill(self, bill_id: UUID, data: BillUpdate, user_id: UUID) -> Bill:
        """
        Update a bill (requires access to the account's tenant).

        Used to correct a generated bill or record its payment reference.

        Raises:
            ValidationException: If the new due date collides with another
                bill of the same schedule
        """
        bill = self._get_managed_bill(bill_id, user_id)

        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(bill, field, value)
        bill.mark_updated(user_id)

        try:
            return self.bill_repo.update(bill)
        except IntegrityError:
            self.db.rollback()
            raise ValidationException("Schedule already has a bill due on this date")

    def delete_bill(self, bill_id: UUID, user_id: UUID) -> None:
        """
        Soft delete a bill.

        A disabled bill still counts for its schedule's due date, so the
        generator does not issue it again.
        """
        bill = self._get_managed_bill(bill_id, user_id)
        bill.mark_disabled(user_id)
        self.bill_repo.update(bill)

    def run_generation(self, user_id: UUID, now: datetime) -> int:
        """
        Run a bill generation pass on demand (application users only).

        Uses the same system actor and horizon as the scheduled job.
        """
        if not self.resolver.check_application_access(user_id):
            raise ForbiddenException("Application-level access required")

        generator = BillGenerator(
            self.db,
            system_user_id=settings.SYSTEM_USER_ID,
            horizon_days=settings.BILL_GENERATION_HORIZON_DAYS,
        )
        return generator.generate_due_bills(now)

    def _find_bill(self, bill_id: UUID, user_id: UUID) -> Bill:
        bill = self.bill_repo.get_by_id(bill_id)
        if not bill:
            # Unknown ids are only revealed to application users
            if not self.resolver.check_application_access(user_id):
                raise ForbiddenException("Not authorized to access this bill")
            raise NotFoundException(f"Bill {bill_id} not found")
        return bill

    def _get_managed_bill(self, bill_id: UUID, user_id: UUID) -> Bill:
        bill = self._find_bill(bill_id, user_id)

        if not self.resolver.check_tenant_access(user_id, bill.account.tenant_id):
            raise ForbiddenException("Not authorized to modify this bill")
        return bill
