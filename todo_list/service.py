"""Controller owning the task list state."""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from todo_list.exceptions import ValidationError
from todo_list.filters import filtered_view
from todo_list.models import (
    PriorityFilter,
    StatusFilter,
    Task,
    TaskDraft,
    TaskStatistics,
)
from todo_list.persistence import SaveResult, TaskPersistence
from todo_list.statistics import compute_statistics
from todo_list.store import TaskIdGenerator, TaskStore

logger = logging.getLogger(__name__)


class TodoController:
    """Single owner of the task collection, filter state, search text and draft.

    Every mutating action persists the collection afterwards. The
    presentation layer reads `visible_tasks()` and `statistics()` to
    refresh itself.

    Editing removes the task from the store as soon as it is loaded into
    the draft; the next `add_task` re-creates it under a new id. There is
    no cancel: clearing the draft or starting another edit loses the task.
    """

    def __init__(
        self,
        persistence: TaskPersistence,
        id_generator: Optional[TaskIdGenerator] = None,
    ) -> None:
        """Initialize controller with a persistence adapter."""
        self._persistence = persistence
        self._ids = id_generator or TaskIdGenerator()
        self._store = TaskStore()
        self._status_filter = StatusFilter.ALL
        self._priority_filter = PriorityFilter.ALL
        self._search_text = ""
        self._draft = TaskDraft.blank()
        self._editing_id: Optional[int] = None
        self._last_save: Optional[SaveResult] = None

    # ------------------------------------------------------------------ state

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._store.tasks

    @property
    def status_filter(self) -> StatusFilter:
        return self._status_filter

    @property
    def priority_filter(self) -> PriorityFilter:
        return self._priority_filter

    @property
    def search_text(self) -> str:
        return self._search_text

    @property
    def draft(self) -> TaskDraft:
        return self._draft

    @property
    def is_editing(self) -> bool:
        return self._editing_id is not None

    @property
    def last_save(self) -> Optional[SaveResult]:
        """Result of the most recent save, None before any mutation."""
        return self._last_save

    def load(self) -> int:
        """Replace the collection with the stored one. Returns the task count."""
        tasks = self._persistence.load()
        self._store.replace_all(tasks)
        self._ids.observe(self._store.max_id())
        logger.info("Loaded %d tasks", len(tasks))
        return len(tasks)

    # ---------------------------------------------------------------- actions

    def update_draft(self, **fields: Any) -> TaskDraft:
        """Set staged input values; fields passed as None are left alone."""
        self._draft = self._draft.with_updates(**fields)
        return self._draft

    def clear_draft(self) -> None:
        """Reset the staged inputs. An edit in progress is abandoned."""
        if self._editing_id is not None:
            logger.warning("Edit of task %s abandoned; the task is discarded", self._editing_id)
        self._draft = TaskDraft.blank()
        self._editing_id = None

    def add_task(self, **fields: Any) -> Task:
        """Create a task from the draft plus any field values given.

        Raises:
            ValidationError: if the resulting title is blank. Nothing changes.
        """
        draft = self._draft.with_updates(**fields)
        if not draft.is_valid:
            raise ValidationError("Please enter a valid task title.")

        task = draft.to_task(self._ids.next_id())
        self._store.add(task)
        if self._editing_id is not None:
            logger.info("Task %s re-added as %s", self._editing_id, task.id)
        self._draft = TaskDraft.blank()
        self._editing_id = None
        self._save()
        return task

    def delete_task(self, task_id: int) -> Optional[Task]:
        removed = self._store.remove(task_id)
        if removed is None:
            logger.debug("Delete ignored, no task %s", task_id)
            return None
        self._save()
        return removed

    def toggle_task(self, task_id: int) -> Optional[Task]:
        toggled = self._store.toggle_completion(task_id)
        if toggled is None:
            logger.debug("Toggle ignored, no task %s", task_id)
            return None
        self._save()
        return toggled

    def begin_edit(self, task_id: int) -> Optional[TaskDraft]:
        """Load a task into the draft and remove it from the store."""
        task = self._store.find_by_id(task_id)
        if task is None:
            logger.debug("Edit ignored, no task %s", task_id)
            return None

        if self._editing_id is not None:
            logger.warning(
                "Edit of task %s replaced by edit of task %s; the first is discarded",
                self._editing_id,
                task_id,
            )
        self._draft = TaskDraft.from_task(task)
        self._editing_id = task_id
        self._store.remove(task_id)
        self._save()
        return self._draft

    def get_task(self, task_id: int) -> Optional[Task]:
        return self._store.find_by_id(task_id)

    # ---------------------------------------------------------------- filters

    def set_status_filter(self, value: Union[StatusFilter, str]) -> None:
        self._status_filter = StatusFilter(value)

    def set_priority_filter(self, value: Union[PriorityFilter, str]) -> None:
        self._priority_filter = PriorityFilter(value)

    def set_search(self, text: str) -> None:
        self._search_text = text

    def visible_tasks(self) -> list[Task]:
        return filtered_view(
            self._store.tasks,
            self._status_filter,
            self._priority_filter,
            self._search_text,
        )

    def statistics(self) -> TaskStatistics:
        return compute_statistics(self._store.tasks)

    def _save(self) -> SaveResult:
        self._last_save = self._persistence.save(self._store.tasks)
        return self._last_save
