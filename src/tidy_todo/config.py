# src/tidy_todo/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Components receive settings by injection; nothing reads os.environ directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TIDY"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_dir: Path

    # ---- Storage keys ----
    pending_key: str
    completed_key: str

    # ---- Task rules ----
    max_task_length: int
    high_priority_days: int
    retention_days: int
    cleanup_interval_seconds: float

    # ---- Display ----
    date_format: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tidy-todo").strip() or "tidy-todo"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tidy_todo"))
        storage_dir = _env_path(_k("STORAGE_DIR"), data_dir / "storage")

        pending_key = _env(_k("PENDING_KEY"), "todo.pending").strip() or "todo.pending"
        completed_key = _env(_k("COMPLETED_KEY"), "todo.completed").strip() or "todo.completed"

        # Keep limits positive; a zero or negative value would make the app unusable.
        max_task_length = max(1, _env_int(_k("MAX_TASK_LENGTH"), 50))
        high_priority_days = _env_int(_k("HIGH_PRIORITY_DAYS"), 7)
        retention_days = max(0, _env_int(_k("RETENTION_DAYS"), 30))
        cleanup_interval_seconds = max(1.0, _env_float(_k("CLEANUP_INTERVAL_SECONDS"), 86400.0))

        date_format = _env(_k("DATE_FORMAT"), "%d/%m/%Y") or "%d/%m/%Y"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_dir=storage_dir,
            pending_key=pending_key,
            completed_key=completed_key,
            max_task_length=max_task_length,
            high_priority_days=high_priority_days,
            retention_days=retention_days,
            cleanup_interval_seconds=cleanup_interval_seconds,
            date_format=date_format,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Load .env once (without overriding the real environment) and cache the Settings."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
