from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.account import Account
from app.models.bill import Bill
from app.models.bill_schedule import BillSchedule


class BillScheduleRepository:
    """Repository for BillSchedule data access"""

    def __init__(self, db: Session):
        self.db = db

    def list_due_schedules(self, now: datetime, horizon_days: int) -> list[BillSchedule]:
        """
        Get schedules that need a new bill.

        A schedule needs one when it is enabled, neither it nor its account
        is disabled, and it has no bill due on or after now's date plus
        horizon_days. Disabled bills count, so a voided bill is not reissued.

        Args:
            now: Current time of the generation run
            horizon_days: Lookahead window in days

        Returns:
            List of BillSchedule objects, oldest first
        """
        cutoff = now.date() + timedelta(days=horizon_days)
        return (
            self.db.query(BillSchedule)
            .filter(
                BillSchedule.enabled.is_(True),
                BillSchedule.disabled.is_(False),
                BillSchedule.account.has(Account.disabled.is_(False)),
                ~BillSchedule.bills.any(Bill.due_date >= cutoff),
            )
            .order_by(BillSchedule.created_timestamp, BillSchedule.id)
            .all()
        )

    def get_by_account(self, account_id: UUID) -> list[BillSchedule]:
        """Get all active schedules of an account"""
        return (
            self.db.query(BillSchedule)
            .filter(BillSchedule.account_id == account_id, BillSchedule.disabled.is_(False))
            .order_by(BillSchedule.name)
            .all()
        )

    def get_by_id(self, schedule_id: UUID) -> BillSchedule | None:
        """Get an active schedule by ID"""
        return (
            self.db.query(BillSchedule)
            .filter(BillSchedule.id == schedule_id, BillSchedule.disabled.is_(False))
            .first()
        )

    def create(self, schedule: BillSchedule) -> BillSchedule:
        """Create a new schedule"""
        self.db.add(schedule)
        self.db.commit()
        self.db.refresh(schedule)
        return schedule

    def update(self, schedule: BillSchedule) -> BillSchedule:
        """Update a schedule (also used to persist a soft delete)"""
        self.db.commit()
        self.db.refresh(schedule)
        return schedule
