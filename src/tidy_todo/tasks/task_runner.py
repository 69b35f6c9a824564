# src/tidy_todo/tasks/task_runner.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import Any, TypeVar

from ..core.state import AppState
from .task_scheduler import CleanupScheduler

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SUBMIT_TIMEOUT_SECONDS = 10.0


async def _run_store(
    state: AppState,
    stop_event: asyncio.Event,
    loaded: threading.Event,
) -> None:
    store = state.store
    try:
        await store.load()
    finally:
        loaded.set()

    interval = float(getattr(state.settings, "cleanup_interval_seconds", 86400.0))
    # The first cleanup runs right away so a long-closed app purges on start.
    scheduler = CleanupScheduler(store, interval_seconds=interval, run_immediately=True)
    scheduler.start()
    try:
        await stop_event.wait()
    finally:
        await scheduler.stop()
        logger.info("Task store loop stopped.")


@dataclass
class StoreBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def submit(
        self,
        coro: Coroutine[Any, Any, T],
        timeout: float | None = DEFAULT_SUBMIT_TIMEOUT_SECONDS,
    ) -> T:
        """Run a coroutine on the store loop and wait for its result (bounded)."""
        fut = asyncio.run_coroutine_threadsafe(coro, self.loop)
        try:
            return fut.result(timeout=timeout)
        except TimeoutError:
            fut.cancel()
            raise

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except Exception:
            logger.debug("Failed to signal store loop stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_store_in_background(state: AppState, *, load_timeout: float = 10.0) -> StoreBackgroundRunner | None:
    """
    Start the store's event loop in a background thread.

    Why a thread:
    - console REPL is blocking (input()).
    - the store, its storage and the cleanup timer are async and share one loop.

    Returns once the store has finished loading (or load_timeout elapsed).
    """
    ready = threading.Event()
    loaded = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(_run_store(state, stop_event, loaded))
        except Exception:
            logger.exception("Task store loop crashed.")
        finally:
            with contextlib.suppress(Exception):
                loop.run_until_complete(loop.shutdown_default_executor())
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="tidy-todo-store", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Store thread did not initialize properly.")
        return None

    if not loaded.wait(timeout=load_timeout):
        logger.warning("Task store is still loading after %.1fs.", load_timeout)

    logger.info("Task store background thread started.")
    return StoreBackgroundRunner(thread=t, loop=loop, stop_event=stop_event)
