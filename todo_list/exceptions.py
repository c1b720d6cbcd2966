"""Custom exceptions for the task list."""

from __future__ import annotations


class TodoListError(Exception):
    """Base exception for all task list errors."""


class ValidationError(TodoListError):
    """Input rejected before a task is created (e.g. blank title)."""


class StorageError(TodoListError):
    """Blob store unavailable, or a read or write was rejected."""

    def __init__(self, key: str, message: str) -> None:
        """Initialize storage error with the key involved."""
        self.key = key
        super().__init__(f"Storage key '{key}': {message}")


class ConfigError(TodoListError):
    """Configuration file unreadable or invalid."""
