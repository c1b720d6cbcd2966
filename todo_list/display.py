"""Display formatting for task output."""

from collections.abc import Sequence
from datetime import date
from typing import Optional

from tabulate import tabulate

from todo_list.models import PriorityFilter, StatusFilter, Task, TaskStatistics


def status_label(task: Task) -> str:
    return "Completed" if task.completed else "Pending"


def format_tasks_table(tasks: Sequence[Task]) -> str:
    """Format tasks as a table string."""
    if not tasks:
        return "No tasks found."

    headers = ["ID", "Title", "Status", "Priority", "Category", "Due"]
    rows = [
        [
            task.id,
            _truncate(task.title, 30),
            status_label(task),
            task.priority.label,
            _truncate(task.category, 15),
            _format_date(task.due_date),
        ]
        for task in tasks
    ]
    return tabulate(rows, headers=headers, tablefmt="simple")


def format_task_detail(task: Task) -> str:
    """Format a single task with full details."""
    due = _format_date(task.due_date) or "Not set"

    return f"""
Task #{task.id}
{"─" * 40}
Title:       {task.title}
Description: {task.description or "(none)"}
Priority:    {task.priority.label}
Category:    {task.category or "(none)"}
Status:      {status_label(task)}
Due Date:    {due}
""".strip()


def format_statistics(stats: TaskStatistics) -> str:
    rows = [
        ["Total", stats.total],
        ["Pending", stats.pending],
        ["Completed", stats.completed],
        ["High priority", stats.high_priority],
    ]
    return tabulate(rows, tablefmt="plain")


def format_active_filters(status: StatusFilter, priority: PriorityFilter, search: str) -> str:
    """One-line summary of the filters producing the current view."""
    parts = [f"status={status.value}", f"priority={priority.value}"]
    if search.strip():
        parts.append(f'search="{search.strip()}"')
    return "Showing: " + ", ".join(parts)


def _truncate(text: str, max_len: int) -> str:
    """Truncate text with ellipsis if too long."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 1] + "…"


def _format_date(value: Optional[date]) -> str:
    if value is None:
        return ""
    return value.isoformat()
