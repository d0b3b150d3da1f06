"""
Analytics External Services
===========================

APScheduler wrapper that captures daily snapshots in the background.
"""

from typing import Awaitable, Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from triagedesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class AnalyticsScheduler:
    """
    Wrapper for APScheduler for periodic snapshot capture.

    Manages the lifecycle of the scheduler and its single job.
    """

    JOB_ID = "analytics_snapshot"

    def __init__(self, interval_seconds: int = 3600):
        self.interval_seconds = interval_seconds
        self._scheduler: Optional[AsyncIOScheduler] = None
        self._running = False

    async def start(self, job_func: Callable[[], Awaitable[None]]) -> None:
        """Start the scheduler with the given coroutine function."""
        if self._running:
            logger.warning("Analytics scheduler already running")
            return

        self._scheduler = AsyncIOScheduler()

        self._scheduler.add_job(
            job_func,
            "interval",
            seconds=self.interval_seconds,
            id=self.JOB_ID,
            name="Analytics Snapshot Job",
            misfire_grace_time=60,
            max_instances=1,
            coalesce=True,
            replace_existing=True
        )

        self._scheduler.start()
        self._running = True

        logger.info(
            "Analytics scheduler started",
            extra={"interval_seconds": self.interval_seconds}
        )

    async def stop(self) -> None:
        """Stop the scheduler gracefully."""
        if not self._running:
            return

        if self._scheduler:
            self._scheduler.shutdown(wait=False)

        self._running = False
        logger.info("Analytics scheduler stopped")

    @property
    def is_running(self) -> bool:
        return self._running
