# src/tidy_todo/tasks/task_codec.py

"""
JSON encoding of the two task collections.

Wire shape (one JSON array per storage key):
    pending:   [{"id": "...", "text": "...", "dueDate": "YYYY-MM-DD"}, ...]
    completed: [{..., "completedAt": "<ISO-8601 timestamp>"}, ...]

Decoding is lenient per entry and strict per blob: a blob that is not a JSON
array raises ParseFailed, while a bad entry inside a valid array is repaired
or skipped.
"""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from .due_dates import parse_due_date, parse_timestamp
from .task_errors import ParseFailed
from .task_models import CompletedTask, Task, TaskId

logger = logging.getLogger(__name__)


def new_task_id() -> TaskId:
    return TaskId(uuid.uuid4().hex)


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "dueDate": task.due_date.isoformat(),
    }


def completed_to_dict(task: CompletedTask) -> dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "dueDate": task.due_date.isoformat(),
        "completedAt": task.completed_at.isoformat(),
    }


def encode_pending(tasks: Iterable[Task]) -> str:
    return json.dumps([task_to_dict(t) for t in tasks], ensure_ascii=False)


def encode_completed(tasks: Iterable[CompletedTask]) -> str:
    return json.dumps([completed_to_dict(t) for t in tasks], ensure_ascii=False)


def _load_array(key: str, blob: str) -> list[Any]:
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise ParseFailed(key, str(e)) from e
    if not isinstance(data, list):
        raise ParseFailed(key, f"expected a JSON array, got {type(data).__name__}")
    return data


def _common_fields(key: str, raw: Any, today: date) -> tuple[TaskId, str, date] | None:
    if not isinstance(raw, dict):
        logger.warning("Skipping non-object entry in %s: %r", key, raw)
        return None

    text = str(raw.get("text") or "").strip()
    if not text:
        logger.warning("Skipping entry without text in %s: %r", key, raw)
        return None

    raw_id = raw.get("id")
    task_id = TaskId(str(raw_id)) if raw_id not in (None, "") else new_task_id()

    due = parse_due_date(raw.get("dueDate"))
    if due is None:
        logger.warning("Bad dueDate %r for task %s in %s; using today", raw.get("dueDate"), task_id, key)
        due = today

    return task_id, text, due


def decode_pending(key: str, blob: str, *, today: date) -> list[Task]:
    out: list[Task] = []
    for raw in _load_array(key, blob):
        fields = _common_fields(key, raw, today)
        if fields is None:
            continue
        task_id, text, due = fields
        out.append(Task(id=task_id, text=text, due_date=due))
    return out


def decode_completed(key: str, blob: str, *, now: datetime) -> list[CompletedTask]:
    out: list[CompletedTask] = []
    for raw in _load_array(key, blob):
        fields = _common_fields(key, raw, now.date())
        if fields is None:
            continue
        task_id, text, due = fields

        completed_at = parse_timestamp(raw.get("completedAt"))
        if completed_at is None:
            logger.warning("Bad completedAt for task %s in %s; using now", task_id, key)
            completed_at = now

        out.append(CompletedTask(id=task_id, text=text, due_date=due, completed_at=completed_at))
    return out
