"""Abstract base class for blob store backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class BlobStore(ABC):
    """Key-value store of text blobs.

    Implementations raise StorageError when the store is unavailable
    or rejects a write.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the blob stored under key, or None if absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous blob."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete the blob under key. Missing keys are ignored."""
