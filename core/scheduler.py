# core/scheduler.py
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, List, Optional

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger

from core.config import settings
from core.logging_config import logger


JOB_PREFIX = "receipt:"


def receipt_job_id(donation_id: str) -> str:
    return f"{JOB_PREFIX}{donation_id}"


class ReceiptScheduler:
    """
    Timer queue for the simulated donation receipt.

    Each new donation gets a one-shot job that flips its local
    ``receipt_sent`` flag after the configured delay. Jobs are keyed by
    donation id so they can be cancelled before they fire. Nothing is
    actually sent.
    """

    def __init__(self, delay_seconds: Optional[float] = None, scheduler: Optional[AsyncIOScheduler] = None):
        self.delay_seconds = settings.RECEIPT_DELAY_SECONDS if delay_seconds is None else delay_seconds
        self.scheduler = scheduler or AsyncIOScheduler(timezone="UTC")
        self._callback: Optional[Callable[[str], Awaitable[None]]] = None

    def bind(self, callback: Callable[[str], Awaitable[None]]):
        self._callback = callback

    def start(self):
        if not self.scheduler.running:
            self.scheduler.start()
            logger.info(f"⏰ Receipt scheduler started (delay {self.delay_seconds}s)")

    def shutdown(self):
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)

    def schedule(self, donation_id: str):
        if self._callback is None:
            raise RuntimeError("ReceiptScheduler has no callback bound")

        run_at = datetime.now(timezone.utc) + timedelta(seconds=self.delay_seconds)
        self.scheduler.add_job(
            self._callback,
            trigger=DateTrigger(run_date=run_at),
            args=[donation_id],
            id=receipt_job_id(donation_id),
            replace_existing=True,
            misfire_grace_time=None,
        )

    def cancel(self, donation_id: str) -> bool:
        try:
            self.scheduler.remove_job(receipt_job_id(donation_id))
        except JobLookupError:
            return False
        logger.info(f"Cancelled pending receipt for donation {donation_id}")
        return True

    def pending(self) -> List[str]:
        return [
            job.id[len(JOB_PREFIX):]
            for job in self.scheduler.get_jobs()
            if job.id.startswith(JOB_PREFIX)
        ]

    def cancel_all(self):
        for donation_id in self.pending():
            self.cancel(donation_id)
