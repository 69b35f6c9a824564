# src/tidy_todo/tasks/task_scheduler.py

from __future__ import annotations

"""
Retention cleanup scheduler.

A small polling loop that calls TaskStore.cleanup_completed() on a fixed
interval. The loop is owned by CleanupScheduler, which ties it to the store's
lifecycle: start() after the store is loaded, stop() before the store goes away.
"""

import asyncio
import contextlib
import logging

from .task_store import TaskStore

logger = logging.getLogger(__name__)

DEFAULT_CLEANUP_INTERVAL_SECONDS = 24 * 60 * 60.0


async def run_cleanup_scheduler(
        store: TaskStore,
        *,
        interval_seconds: float = DEFAULT_CLEANUP_INTERVAL_SECONDS,
        run_immediately: bool = False,
) -> None:
    """
    Every interval_seconds: purge expired completed tasks.

    Failures are logged and the loop keeps going.
    To stop the scheduler, cancel the coroutine/task.
    """
    sleep_s = max(0.01, float(interval_seconds))

    if not run_immediately:
        await asyncio.sleep(sleep_s)

    while True:
        try:
            removed = await store.cleanup_completed()
            logger.debug("Scheduled cleanup tick removed=%d", removed)
        except Exception:
            logger.exception("cleanup_completed failed")

        await asyncio.sleep(sleep_s)


class CleanupScheduler:
    """Cancellable handle around run_cleanup_scheduler()."""

    def __init__(
        self,
        store: TaskStore,
        *,
        interval_seconds: float = DEFAULT_CLEANUP_INTERVAL_SECONDS,
        run_immediately: bool = False,
    ) -> None:
        self._store = store
        self._interval_seconds = float(interval_seconds)
        self._run_immediately = run_immediately
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Spawn the loop on the running event loop. Calling it twice is a no-op."""
        if self.running:
            return
        self._task = asyncio.create_task(
            run_cleanup_scheduler(
                self._store,
                interval_seconds=self._interval_seconds,
                run_immediately=self._run_immediately,
            ),
            name="tidy-todo-cleanup",
        )
        logger.info("Cleanup scheduler started interval=%ss", self._interval_seconds)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Cleanup scheduler stopped.")
