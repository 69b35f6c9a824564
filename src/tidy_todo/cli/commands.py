# src/tidy_todo/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import date

from ..core.state import AppState
from ..tasks.due_dates import (
    DEFAULT_DATE_FORMAT,
    days_left_label,
    format_completed_at,
    format_due_date,
)
from ..tasks.task_errors import EmptyInput, NotFound, TooLong
from ..tasks.task_models import CompletedTask, Task

CommandHandler = Callable[[AppState, list[str]], Awaitable[str]]

logger = logging.getLogger(__name__)

ID_DISPLAY_LEN = 8


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Must run on the store's event loop.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _date_format(state: AppState) -> str:
    return str(getattr(state.settings, "date_format", DEFAULT_DATE_FORMAT) or DEFAULT_DATE_FORMAT)


def _short_id(task_id: str) -> str:
    return task_id[:ID_DISPLAY_LEN]


def render_task(state: AppState, task: Task) -> str:
    days = state.store.days_until_due(task.due_date)
    due = format_due_date(task.due_date, _date_format(state))
    return f"[{_short_id(task.id)}] {task.text}  (due {due}, {days_left_label(days)})"


def render_completed(state: AppState, task: CompletedTask) -> str:
    done_at = format_completed_at(task.completed_at, _date_format(state))
    return f"[{_short_id(task.id)}] {task.text}  (done {done_at})"


def resolve_task_id(items: Sequence[Task | CompletedTask], prefix: str) -> str | None:
    """Return the single id starting with prefix, or None when nothing or several match."""
    prefix = prefix.strip().lower()
    if not prefix:
        return None
    matches = [t.id for t in items if t.id.lower().startswith(prefix)]
    if len(matches) != 1:
        return None
    return matches[0]


async def add_from_text(state: AppState, text: str, due_date: date | None = None) -> str:
    """
    Shared by /add and plain-text input.

    Blank input is ignored without a message; an over-long text is reported.
    """
    today = state.store.today()
    if due_date is None:
        due_date = today
    if due_date < today:
        return "Due date cannot be in the past."

    try:
        task_id = await state.store.add_task(text, due_date)
    except EmptyInput:
        return ""
    except TooLong as e:
        return f"Error: {e}"

    return f"Added [{_short_id(task_id)}] due {format_due_date(due_date, _date_format(state))}."


async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_add(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /add [YYYY-MM-DD] <text>"

    due: date | None = None
    try:
        due = date.fromisoformat(args[0])
        args = args[1:]
    except ValueError:
        due = None

    return await add_from_text(state, " ".join(args), due)


async def cmd_list(state: AppState, args: list[str]) -> str:
    parts = state.store.classify()
    if not parts.high_priority and not parts.normal:
        return "No pending tasks."

    lines: list[str] = []
    if parts.high_priority:
        lines.append("High Priority Tasks")
        lines.extend(f"  {render_task(state, t)}" for t in parts.high_priority)
    if parts.normal:
        if lines:
            lines.append("")
        lines.append("Normal Tasks")
        lines.extend(f"  {render_task(state, t)}" for t in parts.normal)
    return "\n".join(lines)


async def cmd_completed(state: AppState, args: list[str]) -> str:
    items = state.store.completed
    if not items:
        return "No completed tasks."
    lines = ["Completed Tasks"]
    lines.extend(f"  {render_completed(state, t)}" for t in items)
    return "\n".join(lines)


async def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <id>"
    task_id = resolve_task_id(state.store.pending, args[0])
    if task_id is None:
        return f"No single pending task matches '{args[0]}'."
    try:
        done = await state.store.complete_task(task_id)
    except NotFound:
        logger.debug("complete_task: %s already gone", task_id)
        return ""
    return f"Done: {done.text}"


async def _remove(state: AppState, args: list[str], *, from_completed: bool) -> str:
    if not args:
        return "Usage: /rmdone <id>" if from_completed else "Usage: /rm <id>"
    items = state.store.completed if from_completed else state.store.pending
    task_id = resolve_task_id(items, args[0])
    if task_id is None:
        which = "completed" if from_completed else "pending"
        return f"No single {which} task matches '{args[0]}'."
    try:
        await state.store.remove_task(task_id, from_completed=from_completed)
    except NotFound:
        logger.debug("remove_task: %s already gone", task_id)
        return ""
    return f"Removed [{_short_id(task_id)}]."


async def cmd_rm(state: AppState, args: list[str]) -> str:
    return await _remove(state, args, from_completed=False)


async def cmd_rmdone(state: AppState, args: list[str]) -> str:
    return await _remove(state, args, from_completed=True)


async def cmd_cleanup(state: AppState, args: list[str]) -> str:
    removed = await state.store.cleanup_completed()
    return f"Cleanup removed {removed} completed task(s)."


registry.register("help", cmd_help, "Show this help.", aliases=["h", "?"])
registry.register("add", cmd_add, "Add a task: /add [YYYY-MM-DD] <text> (date defaults to today).")
registry.register("list", cmd_list, "Show pending tasks by priority.", aliases=["ls"])
registry.register("completed", cmd_completed, "Show completed tasks, most recent first.")
registry.register("done", cmd_done, "Mark a pending task as done: /done <id>.")
registry.register("rm", cmd_rm, "Delete a pending task: /rm <id>.")
registry.register("rmdone", cmd_rmdone, "Delete a completed task: /rmdone <id>.")
registry.register("cleanup", cmd_cleanup, "Purge completed tasks past the retention window.")
