import logging
import asyncio
from datetime import datetime, timedelta, timezone
from typing import Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from core.config import settings
from core.exceptions import TrackerError
from ingestion.runner import IngestionRunner

logger = logging.getLogger(__name__)


class IngestionScheduler:
    """
    Runs an ingestion cycle at startup and then on a fixed interval.

    Cycles never overlap. A failed cycle is logged and the next tick is
    the only retry. stop() waits for an in-flight cycle to commit or roll
    back before cancelling the wait for the next tick.
    """

    JOB_ID = "ingest_pull"

    def __init__(
        self,
        runner: IngestionRunner,
        interval: Optional[timedelta] = None,
        scheduler: Optional[AsyncIOScheduler] = None
    ):
        self.runner = runner
        self.interval = interval or timedelta(seconds=settings.INGEST_INTERVAL_SECONDS)
        self.scheduler = scheduler or AsyncIOScheduler(timezone=timezone.utc)
        self._cycle_lock = asyncio.Lock()
        self.last_pull_id: Optional[int] = None

    @property
    def running(self) -> bool:
        return self.scheduler.running

    async def run_cycle(self) -> Optional[int]:
        """Job body: one fetch/ingest cycle. Never raises."""
        async with self._cycle_lock:
            logger.info("Scheduler: starting ingestion cycle")
            try:
                pull_id = await self.runner.run()
            except TrackerError as e:
                logger.error(f"Scheduler: ingestion cycle failed - {e.message}")
                return None
            except Exception:
                logger.exception("Scheduler: unexpected error in ingestion cycle")
                return None

            self.last_pull_id = pull_id
            return pull_id

    def start(self):
        """Register the ingestion job and start the scheduler"""
        self.scheduler.add_job(
            self.run_cycle,
            trigger=IntervalTrigger(seconds=int(self.interval.total_seconds())),
            id=self.JOB_ID,
            next_run_time=datetime.now(timezone.utc),  # first cycle at startup
            max_instances=1,
            coalesce=True,
            replace_existing=True
        )
        self.scheduler.start()
        logger.info(f"Ingestion scheduler started (interval: {self.interval})")

    async def stop(self):
        if not self.scheduler.running:
            return
        async with self._cycle_lock:
            self.scheduler.shutdown(wait=False)
            # Newer APScheduler releases flip the stopped state on the next loop turn
            await asyncio.sleep(0)
        logger.info("Ingestion scheduler stopped")
