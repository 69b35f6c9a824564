# tests/test_task_scheduler.py

from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest

from tidy_todo.tasks.task_scheduler import CleanupScheduler, run_cleanup_scheduler
from tidy_todo.tasks.task_store import TaskStore

from .fakes import FakeClock


async def _store_with_expired_task(store: TaskStore, clock: FakeClock) -> None:
    task_id = await store.add_task("old", clock.now.date() + timedelta(days=1))
    await store.complete_task(task_id)
    clock.advance(days=31)


@pytest.mark.asyncio
async def test_scheduler_purges_expired_tasks(store: TaskStore, clock: FakeClock) -> None:
    await _store_with_expired_task(store, clock)

    runner = asyncio.create_task(run_cleanup_scheduler(store, interval_seconds=0.01))

    await asyncio.sleep(0.05)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert store.completed == ()


@pytest.mark.asyncio
async def test_scheduler_waits_one_interval_before_first_run(store: TaskStore, clock: FakeClock) -> None:
    await _store_with_expired_task(store, clock)

    runner = asyncio.create_task(run_cleanup_scheduler(store, interval_seconds=60.0))
    await asyncio.sleep(0.02)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert len(store.completed) == 1


@pytest.mark.asyncio
async def test_scheduler_keeps_running_after_a_failing_tick(store: TaskStore) -> None:
    calls = 0

    async def flaky(now=None) -> int:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise RuntimeError("boom")
        return 0

    store.cleanup_completed = flaky  # type: ignore[method-assign]

    runner = asyncio.create_task(run_cleanup_scheduler(store, interval_seconds=0.01, run_immediately=True))
    await asyncio.sleep(0.05)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert calls >= 2


@pytest.mark.asyncio
async def test_cleanup_scheduler_start_stop(store: TaskStore, clock: FakeClock) -> None:
    await _store_with_expired_task(store, clock)

    scheduler = CleanupScheduler(store, interval_seconds=0.01, run_immediately=True)
    scheduler.start()
    scheduler.start()  # no second loop
    assert scheduler.running

    await asyncio.sleep(0.03)
    await scheduler.stop()

    assert not scheduler.running
    assert store.completed == ()

    # Stopping twice is harmless.
    await scheduler.stop()
