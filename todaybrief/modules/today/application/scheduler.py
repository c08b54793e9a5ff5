"""Background refresh schedule for the today cache."""

from __future__ import annotations

import asyncio

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from loguru import logger

from todaybrief.core.infrastructure.logging import BusinessEvents
from todaybrief.modules.today.application.cache import TodayCache


class TodayRefreshScheduler:
    """Runs ``TodayCache.refresh_all`` at startup and then on a fixed interval.

    At most one refresh cycle is in flight: a tick that fires while the
    previous cycle is still running is skipped, not queued.
    """

    JOB_ID = "today_refresh"

    def __init__(
        self,
        cache: TodayCache,
        interval_seconds: int,
        startup_timeout_seconds: float,
        scheduler: AsyncIOScheduler | None = None,
    ) -> None:
        self._cache = cache
        self._interval_seconds = interval_seconds
        self._startup_timeout_seconds = startup_timeout_seconds
        self._scheduler = scheduler
        self._in_flight: asyncio.Task[None] | None = None
        self._started = False

    @property
    def is_refreshing(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    async def start(self) -> bool:
        """Run the first cycle, then schedule the rest.

        Returns True if the first cycle finished within the startup timeout.
        On timeout the cycle keeps running in the background.
        """
        if self._started:
            logger.warning("Today refresh scheduler already started")
            return True

        first_cycle_done = await self._run_startup_cycle()

        if self._scheduler is None:
            self._scheduler = AsyncIOScheduler()
        self._scheduler.add_job(
            self.tick,
            trigger=IntervalTrigger(seconds=self._interval_seconds),
            id=self.JOB_ID,
            name="Today content refresh",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()
        self._started = True
        logger.info(
            f"Today refresh scheduled every {self._interval_seconds}s "
            f"(first cycle completed: {first_cycle_done})"
        )
        return first_cycle_done

    async def _run_startup_cycle(self) -> bool:
        task = self._launch_cycle()
        if task is None:
            return False
        try:
            await asyncio.wait_for(asyncio.shield(task), self._startup_timeout_seconds)
        except TimeoutError:
            logger.warning(
                f"First today refresh did not finish within "
                f"{self._startup_timeout_seconds}s, continuing startup"
            )
            return False
        return True

    async def tick(self) -> bool:
        """Run one cycle unless one is already in flight. Returns whether it ran."""
        task = self._launch_cycle()
        if task is None:
            return False
        await task
        return True

    def _launch_cycle(self) -> asyncio.Task[None] | None:
        if self.is_refreshing:
            logger.warning("Previous today refresh still running, skipping this tick")
            BusinessEvents.today_refresh_skipped(reason="previous_cycle_in_flight")
            return None
        self._in_flight = asyncio.create_task(self._run_cycle())
        return self._in_flight

    async def _run_cycle(self) -> None:
        await self._cache.refresh_all()

    async def shutdown(self) -> None:
        if self._scheduler is not None and self._started:
            self._scheduler.shutdown(wait=False)
            self._started = False
            logger.info("Today refresh scheduler stopped")
        if self.is_refreshing and self._in_flight is not None:
            self._in_flight.cancel()
