# src/tidy_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the JSON file storage, notifier and TaskStore into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Notifier
from ..core.state import AppState
from ..storage.json_store import JsonFileStorage
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, notifier: Notifier) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    The store is created but not loaded; loading happens on the store's event loop.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(
        JsonFileStorage(settings.storage_dir),
        notifier=notifier,
        pending_key=settings.pending_key,
        completed_key=settings.completed_key,
        max_task_length=settings.max_task_length,
        high_priority_days=settings.high_priority_days,
        retention_days=settings.retention_days,
    )
    return AppState(settings=settings, store=store, notifier=notifier)
