"""Command-line interface for the task list."""

from __future__ import annotations

import argparse
import logging
from datetime import date
from pathlib import Path
from typing import Callable, Optional, Sequence

from todo_list.config import AppConfig, load_config
from todo_list.display import (
    format_active_filters,
    format_statistics,
    format_task_detail,
    format_tasks_table,
)
from todo_list.exceptions import ConfigError, ValidationError
from todo_list.models import Priority, PriorityFilter, StatusFilter
from todo_list.persistence import TaskPersistence
from todo_list.service import TodoController
from todo_list.storage import BlobStore, FileBlobStore, MemoryBlobStore
from todo_list.utils.logger import setup_logger

logger = logging.getLogger(__name__)


def parse_date(value: str) -> date:
    """Parse a due date from string."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date format: '{value}'. Use: YYYY-MM-DD")


def parse_priority(value: str) -> Priority:
    """Parse priority from string."""
    try:
        return Priority.from_string(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _add_task_fields(parser: argparse.ArgumentParser, for_edit: bool) -> None:
    parser.add_argument("-d", "--description", help="Task description")
    parser.add_argument(
        "-p", "--priority", type=parse_priority,
        help="Priority: low, medium, high" + ("" if for_edit else " (default: medium)"),
    )
    parser.add_argument(
        "-c", "--category", help="Task category" + ("" if for_edit else " (default: general)")
    )
    parser.add_argument("--due", type=parse_date, help="Due date (YYYY-MM-DD)")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="todo-list",
        description="Manage a personal task list.",
    )
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument("--data-dir", type=Path, help="Directory holding the task data")
    parser.add_argument("--log-level", help="Logging level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Add command
    add_parser = subparsers.add_parser("add", help="Add a new task")
    add_parser.add_argument("title", help="Task title")
    _add_task_fields(add_parser, for_edit=False)

    # List command
    list_parser = subparsers.add_parser("list", help="List tasks matching the filters")
    list_parser.add_argument(
        "-s", "--status", choices=[s.value for s in StatusFilter], default="all",
        help="Filter by completion status",
    )
    list_parser.add_argument(
        "-p", "--priority", choices=[p.value for p in PriorityFilter], default="all",
        help="Filter by priority",
    )
    list_parser.add_argument("-q", "--search", default="", help="Search text (title only)")

    # Show command
    show_parser = subparsers.add_parser("show", help="Show task details")
    show_parser.add_argument("id", type=int, help="Task ID")

    # Toggle command
    toggle_parser = subparsers.add_parser("toggle", help="Toggle task completion")
    toggle_parser.add_argument("id", type=int, help="Task ID")

    # Edit command
    edit_parser = subparsers.add_parser(
        "edit", help="Edit a task (it is re-created under a new ID)"
    )
    edit_parser.add_argument("id", type=int, help="Task ID")
    edit_parser.add_argument("-t", "--title", help="New title")
    _add_task_fields(edit_parser, for_edit=True)

    # Delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("id", type=int, help="Task ID")
    delete_parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    # Stats command
    subparsers.add_parser("stats", help="Show task statistics")

    return parser


def _ask(prompt: str) -> bool:
    return input(prompt).strip().lower() in ("y", "yes")


class CLI:
    """Command-line interface handler."""

    def __init__(
        self,
        controller: TodoController,
        confirm: Callable[[str], bool] = _ask,
    ) -> None:
        """Initialize CLI with a controller."""
        self._controller = controller
        self._confirm = confirm

    def run(self, args: argparse.Namespace) -> int:
        """Execute the requested command. Returns exit code."""
        if args.command is None:
            print("No command specified. Use --help for usage.")
            return 1

        handler = getattr(self, f"_handle_{args.command}", None)
        if handler is None:
            return 1

        try:
            return handler(args) or 0
        except ValidationError as e:
            print(e)
            return 1

    def _not_found(self, task_id: int) -> int:
        print(f"No task with ID {task_id}.")
        return 1

    def _handle_add(self, args: argparse.Namespace) -> None:
        """Handle add command."""
        task = self._controller.add_task(
            title=args.title,
            description=args.description,
            priority=args.priority,
            category=args.category,
            due_date=args.due,
        )
        print(f"Added task #{task.id}: {task.title}")

    def _handle_list(self, args: argparse.Namespace) -> None:
        """Handle list command."""
        self._controller.set_status_filter(args.status)
        self._controller.set_priority_filter(args.priority)
        self._controller.set_search(args.search)

        print(format_active_filters(
            self._controller.status_filter,
            self._controller.priority_filter,
            self._controller.search_text,
        ))
        print(format_tasks_table(self._controller.visible_tasks()))
        print()
        print(format_statistics(self._controller.statistics()))

    def _handle_show(self, args: argparse.Namespace) -> Optional[int]:
        """Handle show command."""
        task = self._controller.get_task(args.id)
        if task is None:
            return self._not_found(args.id)
        print(format_task_detail(task))
        return None

    def _handle_toggle(self, args: argparse.Namespace) -> Optional[int]:
        """Handle toggle command."""
        task = self._controller.toggle_task(args.id)
        if task is None:
            return self._not_found(args.id)
        status = "completed" if task.completed else "pending"
        print(f"Task #{task.id} marked as {status}")
        return None

    def _handle_edit(self, args: argparse.Namespace) -> Optional[int]:
        """Handle edit command."""
        if args.title is not None and not args.title.strip():
            raise ValidationError("Please enter a valid task title.")
        if self._controller.begin_edit(args.id) is None:
            return self._not_found(args.id)

        task = self._controller.add_task(
            title=args.title,
            description=args.description,
            priority=args.priority,
            category=args.category,
            due_date=args.due,
        )
        print(f"Updated task #{args.id}, now #{task.id}: {task.title}")
        return None

    def _handle_delete(self, args: argparse.Namespace) -> Optional[int]:
        """Handle delete command."""
        if self._controller.get_task(args.id) is None:
            return self._not_found(args.id)
        if not args.yes and not self._confirm("Are you sure you want to delete this task? [y/N] "):
            print("Cancelled.")
            return None
        self._controller.delete_task(args.id)
        print(f"Deleted task #{args.id}")
        return None

    def _handle_stats(self, args: argparse.Namespace) -> None:
        """Handle stats command."""
        print(format_statistics(self._controller.statistics()))


def build_controller(config: AppConfig) -> TodoController:
    """Wire the blob store, persistence and controller from config."""
    store: BlobStore
    if config.storage_backend == "memory":
        store = MemoryBlobStore()
    else:
        store = FileBlobStore(config.data_dir)
    return TodoController(TaskPersistence(store, key=config.storage_key))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config, data_dir=args.data_dir, log_level=args.log_level)
    except ConfigError as e:
        print(f"Configuration error: {e}")
        return 2

    setup_logger(log_dir=config.log_dir, level=config.log_level)
    logger.debug("Using data directory %s", config.data_dir)

    controller = build_controller(config)
    controller.load()

    cli = CLI(controller)
    return cli.run(args)
