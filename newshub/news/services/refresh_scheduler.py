import asyncio
from typing import Optional

import structlog

from .refresh_service import NewsRefreshService

logger = structlog.get_logger(__name__)


class RefreshScheduler:
    """Periodic trigger that calls refresh_all on a fixed interval"""

    def __init__(self, refresh_service: NewsRefreshService, interval_seconds: float, run_on_start: bool = True):
        self.refresh_service = refresh_service
        self.interval_seconds = interval_seconds
        self.run_on_start = run_on_start
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run(), name="refresh-scheduler")
        logger.info("refresh_scheduler_started", interval_seconds=self.interval_seconds)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("refresh_scheduler_stopped")

    async def run_cycle(self) -> None:
        logger.info("scheduled_refresh_started")
        try:
            summary = await self.refresh_service.refresh_all()
            logger.info("scheduled_refresh_completed", **summary.to_dict())
        except Exception as e:
            logger.error("scheduled_refresh_failed", error=str(e), error_type=type(e).__name__)

    async def _run(self) -> None:
        if not self.run_on_start:
            await asyncio.sleep(self.interval_seconds)
        while True:
            await self.run_cycle()
            await asyncio.sleep(self.interval_seconds)
