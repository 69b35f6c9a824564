# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tidy_todo.core.state import AppState
from tidy_todo.tasks.task_store import TaskStore

from .fakes import NOW, FakeClock, InMemoryStorage, RecordingNotifier

PENDING_KEY = "todo.pending"
COMPLETED_KEY = "todo.completed"


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tidy-todo-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        storage_dir=tmp_path / "storage",
        pending_key=PENDING_KEY,
        completed_key=COMPLETED_KEY,
        max_task_length=50,
        high_priority_days=7,
        retention_days=30,
        cleanup_interval_seconds=3600.0,
        date_format="%Y-%m-%d",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture()
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def store(storage: InMemoryStorage, notifier: RecordingNotifier, clock: FakeClock) -> TaskStore:
    """TaskStore over in-memory storage. Not loaded: tests call `await store.load()` when needed."""
    return TaskStore(
        storage,
        notifier=notifier,
        clock=clock,
        pending_key=PENDING_KEY,
        completed_key=COMPLETED_KEY,
    )


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, notifier: RecordingNotifier) -> AppState:
    return AppState(settings=settings, store=store, notifier=notifier)
