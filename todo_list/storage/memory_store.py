"""In-memory blob store."""

from __future__ import annotations

from typing import Optional

from todo_list.storage.base import BlobStore


class MemoryBlobStore(BlobStore):
    """Keeps blobs in a dict. Nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
