# src/tidy_todo/tasks/due_dates.py

"""
Calendar arithmetic for due dates and retention.

Everything that compares a due date with "today" goes through days_until_due(),
which truncates both sides to midnight first. Comparing against the current
time instead produces off-by-one buckets late in the evening.
"""

from __future__ import annotations

import math
from datetime import date, datetime

from .task_models import HIGH_PRIORITY_DAYS, Priority

DEFAULT_DATE_FORMAT = "%d/%m/%Y"

_SECONDS_PER_DAY = 86400.0


def midnight(value: date | datetime) -> date:
    """Drop the time-of-day component (a date is already at midnight)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_until_due(due_date: date | datetime, today: date | datetime | None = None) -> int:
    """Whole days from today's midnight to the due date's midnight (negative if overdue)."""
    if today is None:
        today = date.today()
    return (midnight(due_date) - midnight(today)).days


def classify_due_date(
    due_date: date | datetime,
    today: date | datetime | None = None,
    *,
    threshold_days: int = HIGH_PRIORITY_DAYS,
) -> Priority:
    if days_until_due(due_date, today) <= threshold_days:
        return Priority.HIGH
    return Priority.NORMAL


def as_aware(ts: datetime) -> datetime:
    """Naive timestamps are local wall-clock time."""
    if ts.tzinfo is None:
        return ts.astimezone()
    return ts


def elapsed_days(since: datetime, now: datetime) -> int:
    """Days between two timestamps, rounded up (a partial day counts as a day)."""
    seconds = (as_aware(now) - as_aware(since)).total_seconds()
    return math.ceil(seconds / _SECONDS_PER_DAY)


def parse_due_date(raw: object) -> date | None:
    """
    Accept "YYYY-MM-DD" or a full ISO timestamp and return the calendar date.

    A timestamp names an instant, so its date is taken in the local timezone:
    "2026-04-18T17:00:00Z" is 19 April in UTC+7.

    Returns None for anything unparseable so callers can pick their own fallback.
    """
    if not isinstance(raw, str) or not raw.strip():
        return None
    s = raw.strip()
    try:
        return date.fromisoformat(s)
    except ValueError:
        pass
    try:
        ts = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        return None
    return as_aware(ts).astimezone().date()


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as local time."""
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        ts = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    return as_aware(ts)


# ---- display helpers (derived on read, never stored) ----


def format_due_date(due_date: date, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    return due_date.strftime(fmt)


def format_completed_at(completed_at: datetime, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    return completed_at.astimezone().strftime(f"{fmt} %H:%M")


def days_left_label(days: int) -> str:
    if days == 0:
        return "due today"
    if days < 0:
        n = -days
        return f"{n} day overdue" if n == 1 else f"{n} days overdue"
    return "1 day left" if days == 1 else f"{days} days left"
