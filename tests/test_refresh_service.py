"""
==============================================================================
Refresh Scheduler Tests
==============================================================================

Tests for the periodic background job runner.

==============================================================================
"""

import asyncio
import threading

from commerce_tree.services import CacheRefreshScheduler


class TestCacheRefreshScheduler:
    """Tests for scheduling, error handling and shutdown."""

    def test_no_immediate_first_run(self):
        """Test a job waits one period before its first run."""
        runs = []

        async def scenario():
            scheduler = CacheRefreshScheduler()
            scheduler.schedule(lambda: runs.append(1), "job", 10)
            await asyncio.sleep(0.05)
            scheduler.stop()

        asyncio.run(scenario())
        assert runs == []

    def test_runs_periodically_in_worker_thread(self):
        """Test the job runs repeatedly outside the event loop thread."""
        threads = []

        async def scenario():
            scheduler = CacheRefreshScheduler()
            scheduler.schedule(lambda: threads.append(threading.get_ident()), "job", 0.01)
            await asyncio.sleep(0.2)
            scheduler.stop()

        asyncio.run(scenario())

        assert len(threads) >= 2
        assert threading.get_ident() not in threads

    def test_job_error_does_not_stop_loop(self):
        """Test a failing run is logged and the next tick still runs."""
        runs = []

        def job():
            runs.append(1)
            raise RuntimeError("catalog unavailable")

        async def scenario():
            scheduler = CacheRefreshScheduler()
            scheduler.schedule(job, "job", 0.01)
            await asyncio.sleep(0.2)
            running = scheduler.is_running
            scheduler.stop()
            return running

        assert asyncio.run(scenario()) is True
        assert len(runs) >= 2

    def test_stop_cancels_jobs(self):
        async def scenario():
            scheduler = CacheRefreshScheduler()
            task = scheduler.schedule(lambda: None, "job", 10)
            assert scheduler.job_names == ["job"]
            scheduler.stop()
            await asyncio.sleep(0)
            return scheduler, task

        scheduler, task = asyncio.run(scenario())

        assert task.done()
        assert scheduler.is_running is False
        assert scheduler.job_names == []

    def test_same_name_is_scheduled_once(self):
        async def scenario():
            scheduler = CacheRefreshScheduler()
            first = scheduler.schedule(lambda: None, "job", 10)
            second = scheduler.schedule(lambda: None, "job", 10)
            scheduler.stop()
            return first, second

        first, second = asyncio.run(scenario())
        assert first is second
