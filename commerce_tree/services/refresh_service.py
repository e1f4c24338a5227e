"""
==============================================================================
Refresh Scheduler Module
==============================================================================

Background runner for periodic jobs such as the catalog cache refresh.

Background Task:
---------------
Each scheduled job gets its own asyncio task that:
1. Sleeps for the job period (there is no immediate first run)
2. Runs the blocking job in a worker thread
3. Logs any error raised by the job and keeps going

==============================================================================
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict


# Module logger
logger = logging.getLogger(__name__)


class CacheRefreshScheduler:
    """
    Manager for named periodic background jobs.

    Example:
        >>> scheduler = CacheRefreshScheduler()
        >>> scheduler.schedule(cache.scheduled_refresh, "CatalogCache.refresh", 600)
        >>> # ... application runs ...
        >>> scheduler.stop()
    """

    def __init__(self) -> None:
        self._tasks: Dict[str, asyncio.Task] = {}
        self._running = False

    async def _run_periodically(
        self,
        job: Callable[[], Any],
        name: str,
        period_seconds: float,
    ) -> None:
        """Background loop of one job."""
        logger.info(f"🔄 Job {name} scheduled every {period_seconds}s")

        while self._running:
            try:
                await asyncio.sleep(period_seconds)

                logger.debug(f"Running scheduled job {name}...")
                await asyncio.to_thread(job)

            except asyncio.CancelledError:
                logger.info(f"🛑 Job {name} cancelled")
                break
            except Exception as e:
                logger.error(f"Scheduled job {name} failed: {e}", exc_info=True)

    def schedule(
        self,
        job: Callable[[], Any],
        name: str,
        period_seconds: float,
    ) -> asyncio.Task:
        """
        Start a periodic job.

        Must be called from a running event loop. Scheduling a name that
        is already running returns the existing task.

        Args:
            job: Blocking callable run in a worker thread
            name: Unique job name
            period_seconds: Delay before each run

        Returns:
            The asyncio Task running the job
        """
        task = self._tasks.get(name)
        if task is None or task.done():
            self._running = True
            task = asyncio.create_task(self._run_periodically(job, name, period_seconds), name=name)
            self._tasks[name] = task
            logger.info(f"✅ Job {name} started")
        return task

    def stop(self) -> None:
        """Cancel every scheduled job."""
        self._running = False
        for name, task in self._tasks.items():
            if not task.done():
                task.cancel()
                logger.info(f"🛑 Job {name} stopped")
        self._tasks.clear()

    @property
    def is_running(self) -> bool:
        """Check if at least one job is running."""
        return self._running and any(not task.done() for task in self._tasks.values())

    @property
    def job_names(self) -> list:
        return [name for name, task in self._tasks.items() if not task.done()]
