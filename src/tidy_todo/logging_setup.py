# src/tidy_todo/logging_setup.py

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

APP_LOGGER = "tidy_todo"
LOG_FILE_NAME = "tidy_todo.log"

_LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(name: str | int | None, default: int = logging.INFO) -> int:
    """Map TIDY_LOG_LEVEL ("debug", "WARNING", "10") to a logging level."""
    if isinstance(name, int):
        return name
    raw = (name or "").strip().upper()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


class _AppFirstFilter(logging.Filter):
    """Console shows app records at the handler level; other loggers only from `foreign_level` up."""

    def __init__(self, app_prefix: str = APP_LOGGER, foreign_level: int = logging.ERROR) -> None:
        super().__init__()
        self._prefix = app_prefix
        self._foreign_level = foreign_level

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == self._prefix or record.name.startswith(self._prefix + "."):
            return True
        return record.levelno >= self._foreign_level


def setup_logging(
    *,
    log_dir: str | Path = ".local/tidy_todo",
    level: str | int | None = "INFO",
    file_level: int = logging.DEBUG,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
) -> Path:
    """
    Console handler at `level` (filtered to app logs) plus a rotating DEBUG file.

    Call once at startup; existing root handlers are replaced. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(resolve_level(level))
    console.setFormatter(fmt)
    console.addFilter(_AppFirstFilter())
    root.addHandler(console)

    file_handler = RotatingFileHandler(
        log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    return log_file
