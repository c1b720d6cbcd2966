"""In-memory task collection."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Iterator
from typing import Callable, Optional

from todo_list.models import Task

logger = logging.getLogger(__name__)


class TaskIdGenerator:
    """Issues timestamp-derived ids that never repeat.

    Ids are the current time in milliseconds, bumped past the last issued
    (or observed) id when the clock has not moved on.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    def observe(self, task_id: int) -> None:
        """Make sure future ids are greater than an existing one."""
        self._last = max(self._last, task_id)

    def next_id(self) -> int:
        candidate = int(self._clock() * 1000)
        self._last = max(candidate, self._last + 1)
        return self._last


class TaskStore:
    """Owns the ordered task collection.

    Tasks keep their insertion order. Lookup misses are no-ops that
    return None rather than raising.
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: list[Task] = list(tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Snapshot of the collection in insertion order."""
        return tuple(self._tasks)

    def add(self, task: Task) -> bool:
        """Append a task. Returns False, leaving the store unchanged, for a blank title."""
        if not task.title.strip():
            return False
        self._tasks.append(task)
        logger.debug("Added task %s", task.id)
        return True

    def remove(self, task_id: int) -> Optional[Task]:
        """Remove and return the matching task, or None if it is not present."""
        index = self._index_of(task_id)
        if index is None:
            return None
        removed = self._tasks.pop(index)
        logger.debug("Removed task %s", task_id)
        return removed

    def toggle_completion(self, task_id: int) -> Optional[Task]:
        """Flip the completed flag, keeping the task in place."""
        index = self._index_of(task_id)
        if index is None:
            return None
        toggled = self._tasks[index].toggle_completed()
        self._tasks[index] = toggled
        return toggled

    def find_by_id(self, task_id: int) -> Optional[Task]:
        index = self._index_of(task_id)
        return None if index is None else self._tasks[index]

    def replace_all(self, tasks: Iterable[Task]) -> None:
        self._tasks = list(tasks)

    def max_id(self) -> int:
        return max((task.id for task in self._tasks), default=0)

    def _index_of(self, task_id: int) -> Optional[int]:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None
