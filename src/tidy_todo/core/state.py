# src/tidy_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_store import TaskStore
from .ports import Notifier


@dataclass
class AppState:
    # Settings are kept on the state for easy access in commands and connectors.
    settings: object

    store: TaskStore
    notifier: Notifier
