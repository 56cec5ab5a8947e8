from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.bill import Bill


class BillRepository:
    """Repository for Bill data access"""

    def __init__(self, db: Session):
        self.db = db

    def create_bulk(self, bills: list[Bill]) -> list[Bill]:
        """
        Add multiple bills without committing.
        Caller responsible for commit. Enables atomic batch operations.
        """
        self.db.add_all(bills)
        self.db.flush()  # Assign IDs and surface constraint violations without committing
        return bills

    def has_bill_due_on(self, schedule_id: UUID, due_date: date) -> bool:
        """Check whether a schedule already produced a bill due on due_date (disabled bills included)"""
        return self.db.query(
            self.db.query(Bill)
            .filter(Bill.bill_schedule_id == schedule_id, Bill.due_date == due_date)
            .exists()
        ).scalar()

    def get_by_id(self, bill_id: UUID) -> Optional[Bill]:
        """Get an active bill by ID"""
        return (
            self.db.query(Bill)
            .filter(Bill.id == bill_id, Bill.disabled.is_(False))
            .first()
        )

    def get_by_account(
        self,
        account_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Bill], int]:
        """
        Get bills of an account, newest due date first.

        Args:
            account_id: Account ID
            start_date: Optional due date lower bound (inclusive)
            end_date: Optional due date upper bound (inclusive)
            limit: Maximum number of results
            offset: Pagination offset

        Returns:
            Tuple of (bills list, total count)
        """
        query = self.db.query(Bill).filter(
            Bill.account_id == account_id, Bill.disabled.is_(False)
        )

        if start_date is not None:
            query = query.filter(Bill.due_date >= start_date)

        if end_date is not None:
            query = query.filter(Bill.due_date <= end_date)

        # Get total count before pagination
        total = query.count()

        bills = (
            query.order_by(Bill.due_date.desc(), Bill.created_timestamp.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )

        return bills, total

    def get_by_schedule(self, schedule_id: UUID) -> list[Bill]:
        """Get all bills generated from a schedule, oldest due date first"""
        return (
            self.db.query(Bill)
            .filter(Bill.bill_schedule_id == schedule_id)
            .order_by(Bill.due_date)
            .all()
        )

    def update(self, bill: Bill) -> Bill:
        """Update a bill (also used to persist a soft delete)"""
        self.db.commit()
        self.db.refresh(bill)
        return bill
