"""Blob store backends for persisting the task list."""

from todo_list.storage.base import BlobStore
from todo_list.storage.file_store import FileBlobStore
from todo_list.storage.memory_store import MemoryBlobStore

__all__ = ["BlobStore", "FileBlobStore", "MemoryBlobStore"]
