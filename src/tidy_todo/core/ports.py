# src/tidy_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task store.

The store depends on Protocols instead of concrete implementations.
This keeps storage and presentation swappable and makes testing easier.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from ..tasks.task_models import TaskSnapshot

Clock = Callable[[], datetime]
# Returns a timezone-aware "now".

SnapshotListener = Callable[[TaskSnapshot], None]


class KeyValueStorage(Protocol):
    """
    Async get/set of string blobs keyed by name.

    Implementations raise StorageError subclasses:
    - ReadFailed from load() on I/O failure
    - WriteFailed from save()
    A key that was never written loads as None.
    """

    async def load(self, key: str) -> str | None: ...

    async def save(self, key: str, blob: str) -> None: ...


class Notifier(Protocol):
    """
    Presentation-side port for non-fatal, user-visible messages
    (the "alert" of a mobile UI, a printed line in the console).
    """

    def notify(self, title: str, message: str) -> None: ...
