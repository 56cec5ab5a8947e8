from uuid import UUID

from sqlalchemy.orm import Session

from app.core.exceptions import ForbiddenException, NotFoundException, ValidationException
from app.models.bill_schedule import BillSchedule
from app.repositories.bill_schedule_repository import BillScheduleRepository
from app.schemas.bill_schedule_schemas import BillScheduleCreate, BillScheduleUpdate
from app.services.access_resolver import AccessResolver
from app.services.account_service import AccountService


class BillScheduleService:
    """Service layer for bill schedule business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BillScheduleRepository(db)
        self.account_service = AccountService(db)
        self.resolver = AccessResolver(db)

    def get_account_schedules(self, account_id: UUID, user_id: UUID) -> list[BillSchedule]:
        """
        Get the schedules of an account.

        Raises:
            ForbiddenException: If the user has no access to the account
            NotFoundException: If the account doesn't exist
        """
        account = self.account_service.get_account(account_id, user_id)
        return self.repo.get_by_account(account.id)

    def get_schedule(self, schedule_id: UUID, user_id: UUID) -> BillSchedule:
        """
        Get a schedule by ID.

        Raises:
            ForbiddenException: If the user has no access to its account
            NotFoundException: If the schedule doesn't exist
        """
        schedule = self._find_schedule(schedule_id, user_id)

        if not self.resolver.check_account_access(user_id, schedule.account_id):
            raise ForbiddenException("Not authorized to access this bill schedule")
        return schedule

    def create_schedule(self, data: BillScheduleCreate, user_id: UUID) -> BillSchedule:
        """
        Create a schedule for an account; requires access to the account's tenant.
        """
        account = self.account_service.get_managed_account(data.account_id, user_id)

        schedule = BillSchedule(
            account_id=account.id,
            name=data.name,
            amount=data.amount,
            currency=data.currency,
            day_due=data.day_due,
            month_interval=data.month_interval,
            begin_date=data.begin_date,
            end_date=data.end_date,
            enabled=data.enabled,
            created_user=user_id,
        )
        return self.repo.create(schedule)

    def update_schedule(
        self, schedule_id: UUID, data: BillScheduleUpdate, user_id: UUID
    ) -> BillSchedule:
        """
        Update a schedule.

        Bills already generated keep their amount and currency; changes
        apply to bills generated from now on.

        Raises:
            ValidationException: If the resulting date range is inverted
        """
        schedule = self._get_managed_schedule(schedule_id, user_id)

        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(schedule, field, value)

        if schedule.end_date < schedule.begin_date:
            self.db.rollback()
            raise ValidationException("end_date must be on or after begin_date")

        schedule.mark_updated(user_id)
        return self.repo.update(schedule)

    def delete_schedule(self, schedule_id: UUID, user_id: UUID) -> None:
        """Soft delete a schedule; it stops generating bills immediately"""
        schedule = self._get_managed_schedule(schedule_id, user_id)
        schedule.mark_disabled(user_id)
        self.repo.update(schedule)

    def _find_schedule(self, schedule_id: UUID, user_id: UUID) -> BillSchedule:
        schedule = self.repo.get_by_id(schedule_id)
        if not schedule:
            # Unknown ids are only revealed to application users
            if not self.resolver.check_application_access(user_id):
                raise ForbiddenException("Not authorized to access this bill schedule")
            raise NotFoundException(f"Bill schedule {schedule_id} not found")
        return schedule

    def _get_managed_schedule(self, schedule_id: UUID, user_id: UUID) -> BillSchedule:
        schedule = self._find_schedule(schedule_id, user_id)

        if not self.resolver.check_tenant_access(user_id, schedule.account.tenant_id):
            raise ForbiddenException("Not authorized to modify this bill schedule")
        return schedule
