"""File-backed blob store: one file per key inside a data directory."""

from __future__ import annotations

import contextlib
import logging
import os
import re
from pathlib import Path
from typing import Optional

from todo_list.exceptions import StorageError
from todo_list.storage.base import BlobStore

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileBlobStore(BlobStore):
    """Stores each key as `<key>.json` under a directory.

    Writes go to a temporary file first and are then moved into place,
    so a failed write never leaves a half-written blob behind.
    """

    SUFFIX = ".json"

    def __init__(self, directory: str | Path) -> None:
        """Initialize file store.

        Args:
            directory: Data directory (created on first write)
        """
        self._dir = Path(directory).expanduser()

    @property
    def directory(self) -> Path:
        return self._dir

    def _path_for(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise StorageError(key, "invalid key")
        return self._dir / f"{key}{self.SUFFIX}"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(key, f"read failed: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise StorageError(key, f"write failed: {e}") from e
        logger.debug("Wrote %d characters to %s", len(value), path)

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(key, f"remove failed: {e}") from e
