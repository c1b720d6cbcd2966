"""Saving and loading the task collection through a blob store."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from todo_list.models import Task
from todo_list.storage.base import BlobStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "todoTasks"


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a save. Callers are free to ignore it."""

    ok: bool
    count: int = 0
    error: Optional[str] = None


def serialize_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([task.to_dict() for task in tasks], ensure_ascii=False)


def deserialize_tasks(blob: str) -> list[Task]:
    """Parse a stored blob, keeping every record that forms a Task.

    Unusable records are skipped one at a time and logged, so a single
    hand-edited entry never costs the rest of the collection.

    Raises:
        ValueError: if the blob is not a JSON list.
    """
    try:
        parsed = json.loads(blob)
    except RecursionError as e:
        raise ValueError("Task data is nested too deeply") from e
    if not isinstance(parsed, list):
        raise ValueError(f"Expected a list of tasks, got {type(parsed).__name__}")

    tasks = []
    for position, record in enumerate(parsed):
        try:
            tasks.append(Task.from_dict(record))
        except (KeyError, TypeError, AttributeError, ValueError, OverflowError) as e:
            logger.warning("Skipping unusable task record #%d: %r", position, e)
    return tasks


class TaskPersistence:
    """Best-effort persistence of the whole collection under one key.

    Failures never propagate: save reports them through SaveResult and
    load falls back to an empty collection. An empty collection removes
    the key instead of storing an empty list.
    """

    def __init__(self, store: BlobStore, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def save(self, tasks: Iterable[Task]) -> SaveResult:
        """Write the collection to the blob store."""
        snapshot = list(tasks)
        try:
            if snapshot:
                self._store.set_item(self._key, serialize_tasks(snapshot))
            else:
                self._store.remove_item(self._key)
        except Exception as e:
            # Any backend failure leaves the app running in memory only.
            logger.warning("Could not save tasks, continuing in memory: %s", e)
            return SaveResult(ok=False, error=str(e))

        logger.debug("Saved %d tasks under '%s'", len(snapshot), self._key)
        return SaveResult(ok=True, count=len(snapshot))

    def load(self) -> list[Task]:
        """Read the collection, or an empty list if nothing usable is stored."""
        try:
            blob = self._store.get_item(self._key)
        except Exception as e:
            logger.warning("Could not read stored tasks: %s", e)
            return []

        if not blob:
            return []

        try:
            tasks = deserialize_tasks(blob)
        except ValueError as e:
            logger.warning("Ignoring malformed task data under '%s': %s", self._key, e)
            return []

        logger.debug("Loaded %d tasks from '%s'", len(tasks), self._key)
        return tasks
