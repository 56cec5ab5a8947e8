"""
Recurring bill generation.

One pass selects every enabled schedule whose newest bill is not far enough
in the future, creates the bill for the current month and commits the whole
batch at once. Re-running a pass is safe: bills that already exist for the
computed due date are skipped, and a failed pass leaves nothing behind.
"""

import calendar
import logging
from datetime import date, datetime
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import PersistenceException
from app.models.bill import Bill
from app.models.bill_schedule import BillSchedule
from app.repositories.bill_repository import BillRepository
from app.repositories.bill_schedule_repository import BillScheduleRepository

logger = logging.getLogger(__name__)

DEFAULT_HORIZON_DAYS = 10


def compute_due_date(now: datetime | date, day_due: int) -> date:
    """
    Due date of a schedule's bill for the month containing `now`.

    Days past the end of the month are clamped to its last day
    (day 31 in April -> April 30, day 30 in February -> Feb 28/29).
    The year and month are always those of `now`.
    """
    last_day = calendar.monthrange(now.year, now.month)[1]
    return date(now.year, now.month, min(day_due, last_day))


class BillGenerator:
    """
    Materializes due bills from active bill schedules.

    Must not run concurrently with itself against the same database; the
    scheduler registers it with max_instances=1 and the
    (bill_schedule_id, due_date) unique constraint rejects a racing batch.
    """

    def __init__(
        self,
        db: Session,
        system_user_id: UUID,
        horizon_days: int = DEFAULT_HORIZON_DAYS,
    ):
        self.db = db
        self.system_user_id = system_user_id
        self.horizon_days = horizon_days
        self.schedule_repo = BillScheduleRepository(db)
        self.bill_repo = BillRepository(db)

    def generate_due_bills(self, now: datetime) -> int:
        """
        Run one generation pass.

        Args:
            now: Time of the run; only its date is used

        Returns:
            Number of bills created

        Raises:
            PersistenceException: If reading schedules or committing fails.
                Nothing from this pass is kept in that case.
        """
        logger.info(
            "Bill generation started",
            extra={"run_date": now.date().isoformat(), "horizon_days": self.horizon_days},
        )

        try:
            schedules = self.schedule_repo.list_due_schedules(now, self.horizon_days)
            new_bills = []
            for schedule in schedules:
                due_date = compute_due_date(now, schedule.day_due)
                if self.bill_repo.has_bill_due_on(schedule.id, due_date):
                    continue
                new_bills.append(self._build_bill(schedule, due_date))

            if new_bills:
                self.bill_repo.create_bulk(new_bills)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Bill generation aborted, batch rolled back")
            raise PersistenceException("Bill generation failed") from e

        logger.info(
            "Bill generation committed",
            extra={"schedules_selected": len(schedules), "bills_created": len(new_bills)},
        )
        return len(new_bills)

    def _build_bill(self, schedule: BillSchedule, due_date: date) -> Bill:
        return Bill(
            name=schedule.name,
            amount=schedule.amount,
            currency=schedule.currency,
            due_date=due_date,
            bill_schedule_id=schedule.id,
            account_id=schedule.account_id,
            created_user=self.system_user_id,
        )
