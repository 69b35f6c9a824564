# src/tidy_todo/tasks/task_store.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import date, datetime

from ..core.ports import Clock, KeyValueStorage, Notifier, SnapshotListener
from .due_dates import as_aware, classify_due_date, days_until_due, elapsed_days
from .task_codec import decode_completed, decode_pending, encode_completed, encode_pending, new_task_id
from .task_errors import EmptyInput, NotFound, StorageError, TooLong
from .task_models import (
    HIGH_PRIORITY_DAYS,
    MAX_TASK_LENGTH,
    RETENTION_DAYS,
    Classification,
    CompletedTask,
    Priority,
    Task,
    TaskId,
    TaskSnapshot,
)

logger = logging.getLogger(__name__)

DEFAULT_PENDING_KEY = "todo.pending"
DEFAULT_COMPLETED_KEY = "todo.completed"


def _local_now() -> datetime:
    return datetime.now().astimezone()


class TaskStore:
    """
    Owner of the pending and completed task collections.

    Every mutation writes the affected collection back to storage before it
    returns. Storage failures never raise out of a mutation: they are logged,
    reported through the notifier, and the in-memory change is kept so the
    user still sees it for the rest of the session.

    Concurrency:
    - all methods must be called from one event loop
    - one asyncio.Lock per collection serializes mutate-then-save, so there is
      at most one save in flight per key
    - complete_task() takes both locks, always pending first
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        notifier: Notifier | None = None,
        clock: Clock | None = None,
        pending_key: str = DEFAULT_PENDING_KEY,
        completed_key: str = DEFAULT_COMPLETED_KEY,
        max_task_length: int = MAX_TASK_LENGTH,
        high_priority_days: int = HIGH_PRIORITY_DAYS,
        retention_days: int = RETENTION_DAYS,
    ) -> None:
        self._storage = storage
        self._notifier = notifier
        self._clock: Clock = clock or _local_now
        self._pending_key = pending_key
        self._completed_key = completed_key
        self._max_task_length = int(max_task_length)
        self._high_priority_days = int(high_priority_days)
        self._retention_days = int(retention_days)

        # Insertion order; display order is derived on read.
        self._pending: list[Task] = []
        self._completed: list[CompletedTask] = []

        self._pending_lock = asyncio.Lock()
        self._completed_lock = asyncio.Lock()
        self._listeners: list[SnapshotListener] = []

    # ---- loading ----

    async def load(self) -> None:
        """
        Read both collections from storage.

        A failing key leaves that collection empty. All failures of one load
        are reported to the user as a single notification.
        """
        now = self._now()
        failures: list[StorageError] = []

        async with self._pending_lock:
            try:
                blob = await self._storage.load(self._pending_key)
                self._pending = decode_pending(self._pending_key, blob, today=now.date()) if blob else []
            except StorageError as e:
                logger.exception("Failed to load pending tasks")
                self._pending = []
                failures.append(e)

        async with self._completed_lock:
            try:
                blob = await self._storage.load(self._completed_key)
                self._completed = decode_completed(self._completed_key, blob, now=now) if blob else []
            except StorageError as e:
                logger.exception("Failed to load completed tasks")
                self._completed = []
                failures.append(e)

        if failures:
            self._notify("Storage error", "; ".join(str(e) for e in failures))

        logger.info(
            "TaskStore loaded pending=%d completed=%d", len(self._pending), len(self._completed)
        )
        self._emit()

    # ---- read views ----

    def _now(self) -> datetime:
        return as_aware(self._clock())

    def today(self) -> date:
        return self._now().date()

    def days_until_due(self, due_date: date | datetime) -> int:
        return days_until_due(due_date, self._now())

    @property
    def pending(self) -> tuple[Task, ...]:
        today = self.today()
        # sorted() is stable and returns a new list; the live collection is untouched.
        return tuple(sorted(self._pending, key=lambda t: days_until_due(t.due_date, today)))

    @property
    def completed(self) -> tuple[CompletedTask, ...]:
        return tuple(sorted(self._completed, key=lambda t: t.completed_at, reverse=True))

    def snapshot(self) -> TaskSnapshot:
        return TaskSnapshot(pending=self.pending, completed=self.completed)

    def priority_of(self, task: Task) -> Priority:
        return classify_due_date(task.due_date, self._now(), threshold_days=self._high_priority_days)

    def classify(self) -> Classification:
        high: list[Task] = []
        normal: list[Task] = []
        for task in self.pending:
            if self.priority_of(task) is Priority.HIGH:
                high.append(task)
            else:
                normal.append(task)
        return Classification(high_priority=tuple(high), normal=tuple(normal))

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ---- mutations ----

    async def add_task(self, text: str, due_date: date | datetime) -> TaskId:
        """
        Validate and append a new pending task.

        Raises EmptyInput for blank text (callers ignore it silently) and
        TooLong when the trimmed text exceeds the limit.
        """
        clean = (text or "").strip()
        if not clean:
            raise EmptyInput()
        if len(clean) > self._max_task_length:
            raise TooLong(self._max_task_length, len(clean))

        if isinstance(due_date, datetime):
            due_date = due_date.date()

        task = Task(id=new_task_id(), text=clean, due_date=due_date)
        async with self._pending_lock:
            self._pending.append(task)
            await self._save_pending()

        logger.debug("Task added id=%s due=%s", task.id, task.due_date)
        self._emit()
        return task.id

    async def complete_task(self, task_id: str) -> CompletedTask:
        async with self._pending_lock, self._completed_lock:
            idx = self._index_of(self._pending, task_id)
            if idx is None:
                raise NotFound(task_id)

            task = self._pending.pop(idx)
            done = CompletedTask.from_task(task, self._now())
            self._completed.append(done)

            await self._save_pending()
            await self._save_completed()

        logger.debug("Task completed id=%s at=%s", done.id, done.completed_at.isoformat())
        self._emit()
        return done

    async def remove_task(self, task_id: str, *, from_completed: bool = False) -> None:
        if from_completed:
            async with self._completed_lock:
                idx = self._index_of(self._completed, task_id)
                if idx is None:
                    raise NotFound(task_id)
                del self._completed[idx]
                await self._save_completed()
        else:
            async with self._pending_lock:
                idx = self._index_of(self._pending, task_id)
                if idx is None:
                    raise NotFound(task_id)
                del self._pending[idx]
                await self._save_pending()

        logger.debug("Task removed id=%s completed=%s", task_id, from_completed)
        self._emit()

    async def cleanup_completed(self, now: datetime | None = None) -> int:
        """
        Purge completed tasks older than the retention limit.

        A task is purged once the elapsed days since completion (rounded up)
        exceed retention_days. Returns the number of purged tasks.
        """
        now = self._now() if now is None else as_aware(now)

        async with self._completed_lock:
            keep = [
                t for t in self._completed if elapsed_days(t.completed_at, now) <= self._retention_days
            ]
            removed = len(self._completed) - len(keep)
            if removed:
                self._completed = keep
                await self._save_completed()

        if removed:
            logger.info("Cleanup removed %d completed task(s)", removed)
            self._emit()
        else:
            logger.debug("Cleanup: nothing to remove")
        return removed

    # ---- internals ----

    @staticmethod
    def _index_of(items: list[Task] | list[CompletedTask], task_id: str) -> int | None:
        for i, item in enumerate(items):
            if item.id == task_id:
                return i
        return None

    async def _save_pending(self) -> None:
        await self._save(self._pending_key, encode_pending(self._pending))

    async def _save_completed(self) -> None:
        await self._save(self._completed_key, encode_completed(self._completed))

    async def _save(self, key: str, blob: str) -> None:
        try:
            await self._storage.save(key, blob)
        except StorageError as e:
            # In-memory state is kept; the next successful save catches storage up.
            logger.exception("Failed to save %s", key)
            self._notify("Storage error", str(e))

    def _notify(self, title: str, message: str) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.notify(title, message)
        except Exception:
            logger.exception("Notifier failed")

    def _emit(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception("Task listener failed")
