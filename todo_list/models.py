"""Task model and related types."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any, Optional

DEFAULT_CATEGORY = "general"


class Priority(Enum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_string(cls, value: str) -> Priority:
        """Parse priority from string, case-insensitive."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"Invalid priority '{value}'. Must be one of: {valid}")

    @property
    def label(self) -> str:
        return self.value.capitalize()


class StatusFilter(Enum):
    """Restricts the view by completion state."""

    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"


class PriorityFilter(Enum):
    """Restricts the view by declared priority."""

    ALL = "all"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def matches(self, priority: Priority) -> bool:
        return self is PriorityFilter.ALL or self.value == priority.value


def parse_due_date(value: Optional[str]) -> Optional[date]:
    """Parse a YYYY-MM-DD string; empty or None means no due date."""
    if not value:
        return None
    return date.fromisoformat(value)


@dataclass(frozen=True)
class Task:
    """Immutable task representation.

    Attributes:
        id: Unique task identifier, assigned at creation and never changed.
        title: Task title (required, never blank).
        description: Task description.
        priority: Task priority level.
        category: Free-text category.
        due_date: Optional due date.
        completed: Completion status.
    """

    id: int
    title: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    category: str = DEFAULT_CATEGORY
    due_date: Optional[date] = None
    completed: bool = False

    def __post_init__(self) -> None:
        """Validate task data."""
        if not self.title or not self.title.strip():
            raise ValueError("Title cannot be empty")

    def toggle_completed(self) -> Task:
        """Return a new Task with toggled completion status."""
        return replace(self, completed=not self.completed)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the field names of the persisted blob."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "category": self.category,
            "dueDate": self.due_date.isoformat() if self.due_date else "",
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """Build a Task from a persisted record.

        Raises:
            KeyError, TypeError, ValueError: if the record is unusable.
        """
        return cls(
            id=int(data["id"]),
            title=str(data["title"]),
            description=str(data.get("description") or ""),
            priority=Priority.from_string(str(data.get("priority") or "medium")),
            category=str(data.get("category") or ""),
            due_date=parse_due_date(data.get("dueDate")),
            completed=bool(data.get("completed", False)),
        )


@dataclass(frozen=True)
class TaskDraft:
    """Raw input values staged before a task is created.

    This is the staging area used both for new tasks and for the edit
    workflow, where a task's values are loaded back into it.
    """

    title: str = ""
    description: str = ""
    priority: Priority = Priority.MEDIUM
    category: str = DEFAULT_CATEGORY
    due_date: Optional[date] = None

    @classmethod
    def blank(cls) -> TaskDraft:
        return cls()

    @classmethod
    def from_task(cls, task: Task) -> TaskDraft:
        return cls(
            title=task.title,
            description=task.description,
            priority=task.priority,
            category=task.category,
            due_date=task.due_date,
        )

    @property
    def is_valid(self) -> bool:
        return bool(self.title.strip())

    def with_updates(self, **fields: Any) -> TaskDraft:
        """Return a new draft, ignoring fields passed as None."""
        return replace(self, **{k: v for k, v in fields.items() if v is not None})

    def to_task(self, task_id: int) -> Task:
        """Create a fresh, pending Task from the staged values."""
        return Task(
            id=task_id,
            title=self.title.strip(),
            description=self.description.strip(),
            priority=self.priority,
            category=self.category,
            due_date=self.due_date,
        )


@dataclass(frozen=True)
class TaskStatistics:
    """Counts over the full task collection."""

    total: int = 0
    pending: int = 0
    completed: int = 0
    high_priority: int = 0
