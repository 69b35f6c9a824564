# tests/test_due_dates.py

from __future__ import annotations

import time
from collections.abc import Iterator
from datetime import date, datetime, timedelta, timezone

import pytest

from tidy_todo.tasks.due_dates import (
    classify_due_date,
    days_left_label,
    days_until_due,
    elapsed_days,
    format_due_date,
    parse_due_date,
    parse_timestamp,
)
from tidy_todo.tasks.task_models import Priority


def test_days_until_due_ignores_time_of_day_of_now() -> None:
    due = date(2026, 3, 13)
    late = datetime(2026, 3, 10, 23, 59, tzinfo=timezone.utc)
    early = datetime(2026, 3, 10, 0, 1, tzinfo=timezone.utc)

    assert days_until_due(due, late) == 3
    assert days_until_due(due, early) == 3


def test_days_until_due_ignores_time_of_day_of_due_date() -> None:
    today = date(2026, 3, 10)
    morning = datetime(2026, 3, 13, 0, 1)
    evening = datetime(2026, 3, 13, 23, 59)

    assert days_until_due(morning, today) == days_until_due(evening, today) == 3


def test_days_until_due_today_and_overdue() -> None:
    today = date(2026, 3, 10)
    assert days_until_due(today, today) == 0
    assert days_until_due(date(2026, 3, 8), today) == -2


def test_days_until_due_crosses_month_and_year() -> None:
    assert days_until_due(date(2027, 1, 2), date(2026, 12, 30)) == 3


@pytest.mark.parametrize(
    ("offset", "expected"),
    [(-3, Priority.HIGH), (0, Priority.HIGH), (7, Priority.HIGH), (8, Priority.NORMAL), (40, Priority.NORMAL)],
)
def test_classify_due_date_threshold_is_inclusive(offset: int, expected: Priority) -> None:
    today = date(2026, 3, 10)
    assert classify_due_date(today + timedelta(days=offset), today) == expected


def test_elapsed_days_rounds_partial_days_up() -> None:
    start = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert elapsed_days(start, start) == 0
    assert elapsed_days(start, start + timedelta(days=29)) == 29
    assert elapsed_days(start, start + timedelta(days=30, seconds=1)) == 31


def test_parse_due_date_accepts_date_and_timestamp() -> None:
    assert parse_due_date("2026-03-12") == date(2026, 3, 12)
    local_day = datetime(2026, 3, 12, 17, tzinfo=timezone.utc).astimezone().date()
    assert parse_due_date("2026-03-12T17:00:00.000Z") == local_day
    assert parse_due_date("2026-03-12T17:00:00") == date(2026, 3, 12)
    assert parse_due_date("12/03/2026") is None
    assert parse_due_date(None) is None
    assert parse_due_date("") is None


@pytest.fixture()
def bangkok_tz(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "Asia/Bangkok")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def test_utc_timestamp_due_date_lands_on_local_calendar_day(bangkok_tz: None) -> None:
    # Local midnight of 19 April in UTC+7, as serialized by a JS Date.
    assert parse_due_date("2026-04-18T17:00:00.000Z") == date(2026, 4, 19)
    assert parse_due_date("2026-04-19T16:59:00+00:00") == date(2026, 4, 19)
    assert parse_due_date("2026-04-19T17:00:00+00:00") == date(2026, 4, 20)


def test_elapsed_days_accepts_naive_timestamps() -> None:
    done = datetime(2026, 1, 1, 12, 0).astimezone()
    assert elapsed_days(done, datetime(2026, 1, 31, 12, 0)) == 30
    assert elapsed_days(datetime(2026, 1, 1, 12, 0), done + timedelta(days=2)) == 2


def test_parse_timestamp_makes_naive_values_aware() -> None:
    ts = parse_timestamp("2026-03-10T08:30:00")
    assert ts is not None
    assert ts.tzinfo is not None

    utc = parse_timestamp("2026-03-10T08:30:00Z")
    assert utc == datetime(2026, 3, 10, 8, 30, tzinfo=timezone.utc)

    assert parse_timestamp("yesterday") is None


def test_display_helpers() -> None:
    assert format_due_date(date(2026, 3, 5)) == "05/03/2026"
    assert format_due_date(date(2026, 3, 5), "%Y-%m-%d") == "2026-03-05"

    assert days_left_label(0) == "due today"
    assert days_left_label(1) == "1 day left"
    assert days_left_label(5) == "5 days left"
    assert days_left_label(-1) == "1 day overdue"
    assert days_left_label(-4) == "4 days overdue"
