import logging
from datetime import datetime, UTC

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.config import settings
from app.database import SessionLocal
from app.services.bill_generator import BillGenerator

scheduler = BackgroundScheduler(timezone="UTC")

logger = logging.getLogger(__name__)

BILL_GENERATION_JOB_ID = "generate_due_bills"


def run_bill_generation(now: datetime | None = None) -> int:
    """
    Run one bill generation pass in its own session.

    Failures propagate to APScheduler, which logs them; the next tick
    recomputes everything from the database.
    """
    db = SessionLocal()
    try:
        generator = BillGenerator(
            db,
            system_user_id=settings.SYSTEM_USER_ID,
            horizon_days=settings.BILL_GENERATION_HORIZON_DAYS,
        )
        return generator.generate_due_bills(now or datetime.now(UTC))
    finally:
        db.close()


def start_scheduler() -> None:
    scheduler.add_job(
        run_bill_generation,
        trigger=IntervalTrigger(minutes=settings.BILL_GENERATION_INTERVAL_MINUTES),
        id=BILL_GENERATION_JOB_ID,
        max_instances=1,  # Single writer
        coalesce=True,
        next_run_time=datetime.now(UTC),
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        f"[Scheduler] Bill generation scheduled every {settings.BILL_GENERATION_INTERVAL_MINUTES} minutes"
    )


def shutdown_scheduler() -> None:
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("[Scheduler] Stopped")
