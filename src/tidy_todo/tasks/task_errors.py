# src/tidy_todo/tasks/task_errors.py

"""Error taxonomy shared by the store, storage backends and the console."""

from __future__ import annotations


class TodoError(Exception):
    """Base class for all tidy_todo errors."""


class ValidationError(TodoError):
    pass


class EmptyInput(ValidationError):
    def __init__(self) -> None:
        super().__init__("Task text is empty")


class TooLong(ValidationError):
    def __init__(self, limit: int, length: int) -> None:
        self.limit = limit
        self.length = length
        super().__init__(f"Task text cannot exceed {limit} characters")


class NotFound(TodoError):
    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class StorageError(TodoError):
    """Persistence failure for a single key."""

    action = "access"

    def __init__(self, key: str, detail: str = "") -> None:
        self.key = key
        self.detail = detail
        msg = f"Failed to {self.action} '{key}'"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class ReadFailed(StorageError):
    action = "read"


class WriteFailed(StorageError):
    action = "write"


class ParseFailed(StorageError):
    action = "parse"
