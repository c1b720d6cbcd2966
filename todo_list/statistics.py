"""Counts derived from the full task collection."""

from __future__ import annotations

from collections.abc import Iterable

from todo_list.models import Priority, Task, TaskStatistics


def compute_statistics(tasks: Iterable[Task]) -> TaskStatistics:
    """Count total, pending, completed and high-priority tasks.

    Always computed over the unfiltered collection.
    """
    total = completed = high_priority = 0
    for task in tasks:
        total += 1
        if task.completed:
            completed += 1
        if task.priority is Priority.HIGH:
            high_priority += 1

    return TaskStatistics(
        total=total,
        pending=total - completed,
        completed=completed,
        high_priority=high_priority,
    )
