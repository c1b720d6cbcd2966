"""Filtering and title search over a task sequence."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Union

from todo_list.models import PriorityFilter, StatusFilter, Task


def _matches_status(task: Task, status: StatusFilter) -> bool:
    if status is StatusFilter.PENDING:
        return not task.completed
    if status is StatusFilter.COMPLETED:
        return task.completed
    return True


def filtered_view(
    tasks: Iterable[Task],
    status_filter: Union[StatusFilter, str] = StatusFilter.ALL,
    priority_filter: Union[PriorityFilter, str] = PriorityFilter.ALL,
    search_text: str = "",
) -> list[Task]:
    """Return the tasks matching both filters and the search text.

    The search is a case-insensitive substring match against the title
    only. Results keep the input order.
    """
    status = StatusFilter(status_filter)
    priority = PriorityFilter(priority_filter)
    needle = search_text.strip().lower()

    return [
        task
        for task in tasks
        if _matches_status(task, status)
        and priority.matches(task.priority)
        and (not needle or needle in task.title.lower())
    ]
