"""Local filesystem storage — one JSON file per persisted list.

Layout:
    <data_dir>/customerData.json   — customer blobs, newest first
    <data_dir>/activityLog.json    — activity entries, newest first
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from crm.application.interfaces import RecordStorage
from crm.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class JsonFileStorage(RecordStorage):
    """Infrastructure adapter storing a list as a JSON array on disk."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self.name = self._path.name

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[dict[str, Any]]:
        if not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read {self._path}: {exc}") from exc
        if not isinstance(data, list):
            raise StorageError(f"{self._path} does not contain a JSON list")
        return data

    def save(self, items: list[dict[str, Any]]) -> bool:
        """Write to a temp file then atomically rename onto the target."""
        tmp_path: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self._path)
        except OSError as exc:
            logger.error("Could not write %s: %s", self._path, exc)
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            return False

        logger.debug("Saved %d items to %s", len(items), self._path)
        return True
