# src/tidy_todo/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import NewType

TaskId = NewType("TaskId", str)

MAX_TASK_LENGTH = 50
HIGH_PRIORITY_DAYS = 7
RETENTION_DAYS = 30


class Priority(StrEnum):
    """Derived bucket of a pending task. Never persisted."""

    HIGH = "high"
    NORMAL = "normal"


@dataclass(slots=True, frozen=True)
class Task:
    id: TaskId
    text: str
    due_date: date


@dataclass(slots=True, frozen=True)
class CompletedTask:
    id: TaskId
    text: str
    due_date: date
    completed_at: datetime

    @classmethod
    def from_task(cls, task: Task, completed_at: datetime) -> CompletedTask:
        return cls(
            id=task.id,
            text=task.text,
            due_date=task.due_date,
            completed_at=completed_at,
        )


@dataclass(slots=True, frozen=True)
class Classification:
    """Pending tasks split by urgency, each part sorted by days until due."""

    high_priority: tuple[Task, ...]
    normal: tuple[Task, ...]


@dataclass(slots=True, frozen=True)
class TaskSnapshot:
    """
    Immutable view handed to subscribers after every change.

    Both tuples are already in display order:
    - pending: ascending by days until due (stable)
    - completed: most recently completed first
    """

    pending: tuple[Task, ...]
    completed: tuple[CompletedTask, ...]
