# src/tidy_todo/storage/json_store.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import re
from pathlib import Path

from ..tasks.task_errors import ReadFailed, WriteFailed

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class JsonFileStorage:
    """
    Key-value storage with one JSON file per key under a local directory.

    - blocking file I/O runs in a worker thread (asyncio.to_thread)
    - writes are atomic: temp file + os.replace
    - failures raise ReadFailed / WriteFailed right away
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)
        logger.info("JsonFileStorage ready root=%s", self._root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: str) -> Path:
        if not key or not key.strip():
            raise ValueError("storage key is required")
        name = _UNSAFE_KEY_CHARS.sub("_", key.strip())
        return self._root / f"{name}.json"

    async def load(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return await asyncio.to_thread(self._read, path)
        except OSError as e:
            raise ReadFailed(key, str(e)) from e

    async def save(self, key: str, blob: str) -> None:
        path = self.path_for(key)
        try:
            await asyncio.to_thread(self._write, path, blob)
        except OSError as e:
            raise WriteFailed(key, str(e)) from e
        logger.debug("Saved key=%s bytes=%d", key, len(blob))

    @staticmethod
    def _read(path: Path) -> str | None:
        if not path.exists():
            return None
        return path.read_text("utf-8")

    @staticmethod
    def _write(path: Path, blob: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(blob, "utf-8")
        os.replace(tmp, path)
        with contextlib.suppress(OSError):
            # Best-effort: task text is personal, keep the file private on disk.
            os.chmod(path, 0o600)
