"""Todo List - a small personal task list manager."""

from todo_list.filters import filtered_view
from todo_list.models import Priority, PriorityFilter, StatusFilter, Task, TaskDraft, TaskStatistics
from todo_list.persistence import SaveResult, TaskPersistence
from todo_list.service import TodoController
from todo_list.statistics import compute_statistics
from todo_list.store import TaskStore

__all__ = [
    "Priority",
    "PriorityFilter",
    "SaveResult",
    "StatusFilter",
    "Task",
    "TaskDraft",
    "TaskPersistence",
    "TaskStatistics",
    "TaskStore",
    "TodoController",
    "compute_statistics",
    "filtered_view",
]
