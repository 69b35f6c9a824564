# tests/fakes.py

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from tidy_todo.tasks.task_errors import ReadFailed, WriteFailed

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


class InMemoryStorage:
    """
    Deterministic KeyValueStorage for unit tests.

    - blobs live in a dict
    - individual keys can be made to fail on load/save
    - tracks concurrent saves per key (to assert single-flight writes)
    """

    def __init__(self, blobs: dict[str, str] | None = None, *, save_delay: float = 0.0) -> None:
        self.blobs: dict[str, str] = dict(blobs or {})
        self.save_delay = save_delay
        self.fail_load: set[str] = set()
        self.fail_save: set[str] = set()
        self.saves: list[str] = []
        self.max_in_flight: dict[str, int] = {}
        self._in_flight: dict[str, int] = {}

    async def load(self, key: str) -> str | None:
        if key in self.fail_load:
            raise ReadFailed(key, "disk on fire")
        return self.blobs.get(key)

    async def save(self, key: str, blob: str) -> None:
        self._in_flight[key] = self._in_flight.get(key, 0) + 1
        self.max_in_flight[key] = max(self.max_in_flight.get(key, 0), self._in_flight[key])
        try:
            if self.save_delay:
                await asyncio.sleep(self.save_delay)
            if key in self.fail_save:
                raise WriteFailed(key, "disk full")
            self.blobs[key] = blob
            self.saves.append(key)
        finally:
            self._in_flight[key] -= 1


@dataclass(slots=True)
class Alert:
    title: str
    message: str


@dataclass(slots=True)
class RecordingNotifier:
    alerts: list[Alert] = field(default_factory=list)

    def notify(self, title: str, message: str) -> None:
        self.alerts.append(Alert(title=title, message=message))


class FakeClock:
    """Mutable, timezone-aware clock."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)
