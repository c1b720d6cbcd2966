"""Tests for TodoController."""

import json
import logging
from datetime import date

import pytest
from todo_list.exceptions import StorageError, ValidationError
from todo_list.models import Priority, PriorityFilter, StatusFilter, TaskDraft, TaskStatistics
from todo_list.persistence import TaskPersistence
from todo_list.service import TodoController
from todo_list.storage import MemoryBlobStore
from todo_list.store import TaskIdGenerator


class ReadOnlyStore(MemoryBlobStore):
    """Store that rejects every write."""

    def set_item(self, key, value):
        raise StorageError(key, "quota exceeded")


@pytest.fixture
def blob_store():
    return MemoryBlobStore()


@pytest.fixture
def controller(blob_store):
    """Controller over an in-memory blob store."""
    return TodoController(TaskPersistence(blob_store))


def reload(blob_store):
    """Simulate a new session over the same blob store."""
    fresh = TodoController(TaskPersistence(blob_store))
    fresh.load()
    return fresh


class TestAddTask:
    """Tests for adding tasks."""

    def test_add_then_find(self, controller):
        task = controller.add_task(title="Buy milk", priority=Priority.LOW)

        assert controller.get_task(task.id) == task
        assert task.category == "general"

    def test_add_persists(self, controller, blob_store):
        controller.add_task(title="Buy milk")

        assert controller.last_save.ok is True
        assert [t.title for t in reload(blob_store).tasks] == ["Buy milk"]

    @pytest.mark.parametrize("title", ["", "   "])
    def test_blank_title_rejected(self, controller, title):
        controller.add_task(title="Existing")
        before = controller.tasks

        with pytest.raises(ValidationError, match="valid task title"):
            controller.add_task(title=title)

        assert controller.tasks == before

    def test_ids_are_unique_and_increasing(self, blob_store):
        controller = TodoController(
            TaskPersistence(blob_store), id_generator=TaskIdGenerator(clock=lambda: 1.0)
        )
        ids = [controller.add_task(title=f"Task {n}").id for n in range(3)]

        assert ids == [1000, 1001, 1002]

    def test_load_seeds_id_generator(self, blob_store):
        first = TodoController(TaskPersistence(blob_store), TaskIdGenerator(clock=lambda: 5.0))
        old = first.add_task(title="Old")

        second = TodoController(TaskPersistence(blob_store), TaskIdGenerator(clock=lambda: 1.0))
        second.load()
        new = second.add_task(title="New")

        assert new.id > old.id

    def test_save_failure_does_not_block(self):
        controller = TodoController(TaskPersistence(ReadOnlyStore()))

        task = controller.add_task(title="In memory only")

        assert controller.get_task(task.id) == task
        assert controller.last_save.ok is False


class TestMutations:
    """Tests for toggle and delete."""

    def test_scenario(self, controller):
        controller.add_task(title="Buy milk", priority=Priority.LOW)
        bills = controller.add_task(title="Pay bills", priority=Priority.HIGH)

        controller.set_priority_filter("high")
        assert [t.title for t in controller.visible_tasks()] == ["Pay bills"]
        assert controller.statistics() == TaskStatistics(
            total=2, pending=2, completed=0, high_priority=1
        )

        controller.toggle_task(bills.id)
        stats = controller.statistics()
        assert stats.pending == 1
        assert stats.completed == 1

    def test_toggle_twice_restores(self, controller):
        task = controller.add_task(title="Flip")
        controller.toggle_task(task.id)
        controller.toggle_task(task.id)

        assert controller.get_task(task.id).completed is False

    def test_toggle_persists(self, controller, blob_store):
        task = controller.add_task(title="Flip")
        controller.toggle_task(task.id)

        assert reload(blob_store).get_task(task.id).completed is True

    def test_delete(self, controller, blob_store):
        task = controller.add_task(title="Gone")
        controller.add_task(title="Stays")

        assert controller.delete_task(task.id) == task
        assert [t.title for t in reload(blob_store).tasks] == ["Stays"]

    def test_lookup_misses_are_noops(self, controller):
        controller.add_task(title="Only")
        before = controller.tasks

        assert controller.delete_task(123) is None
        assert controller.toggle_task(123) is None
        assert controller.begin_edit(123) is None
        assert controller.get_task(123) is None
        assert controller.tasks == before


class TestFilters:
    """Tests for filter state and the visible view."""

    def test_defaults(self, controller):
        assert controller.status_filter is StatusFilter.ALL
        assert controller.priority_filter is PriorityFilter.ALL
        assert controller.search_text == ""

    def test_statistics_ignore_filters(self, controller):
        controller.add_task(title="Alpha")
        controller.add_task(title="Beta", priority=Priority.HIGH)
        controller.set_status_filter("completed")
        controller.set_search("alpha")

        assert controller.visible_tasks() == []
        assert controller.statistics().total == 2

    def test_search(self, controller):
        controller.add_task(title="Write report")
        controller.add_task(title="Read book")
        controller.set_search("REPORT")

        assert [t.title for t in controller.visible_tasks()] == ["Write report"]

    def test_invalid_filter_raises(self, controller):
        with pytest.raises(ValueError):
            controller.set_status_filter("done")


class TestEditWorkflow:
    """Edit loads a task into the draft and removes it right away."""

    def test_begin_edit_stages_and_removes(self, controller, blob_store):
        task = controller.add_task(
            title="Report", description="Q3", priority=Priority.HIGH,
            category="work", due_date=date(2026, 12, 1),
        )

        draft = controller.begin_edit(task.id)

        assert controller.is_editing
        assert draft == TaskDraft(title="Report", description="Q3", priority=Priority.HIGH,
                                  category="work", due_date=date(2026, 12, 1))
        assert controller.get_task(task.id) is None
        assert reload(blob_store).tasks == ()

    def test_next_add_creates_fresh_task(self, controller):
        task = controller.add_task(title="Report", category="work")
        controller.toggle_task(task.id)
        controller.begin_edit(task.id)

        edited = controller.add_task(title="Final report")

        assert not controller.is_editing
        assert edited.id != task.id
        assert edited.title == "Final report"
        assert edited.category == "work"
        assert edited.completed is False
        assert controller.draft == TaskDraft.blank()

    def test_edited_task_moves_to_end(self, controller):
        first = controller.add_task(title="First")
        controller.add_task(title="Second")
        controller.begin_edit(first.id)
        controller.add_task()

        assert [t.title for t in controller.tasks] == ["Second", "First"]

    def test_clear_draft_loses_task(self, controller, caplog):
        task = controller.add_task(title="Doomed")
        controller.begin_edit(task.id)

        with caplog.at_level(logging.WARNING):
            controller.clear_draft()

        assert not controller.is_editing
        assert controller.tasks == ()
        assert "abandoned" in caplog.text

    def test_second_edit_discards_first(self, controller, caplog):
        one = controller.add_task(title="One")
        two = controller.add_task(title="Two")
        controller.begin_edit(one.id)

        with caplog.at_level(logging.WARNING):
            controller.begin_edit(two.id)
        controller.add_task()

        assert [t.title for t in controller.tasks] == ["Two"]
        assert "discarded" in caplog.text

    def test_failed_readd_keeps_editing(self, controller):
        task = controller.add_task(title="Keep me")
        controller.begin_edit(task.id)

        with pytest.raises(ValidationError):
            controller.add_task(title=" ")

        assert controller.is_editing
        assert controller.draft.title == "Keep me"
        assert controller.add_task().title == "Keep me"

    def test_update_draft(self, controller):
        controller.update_draft(title="Staged", priority=Priority.LOW)
        task = controller.add_task()

        assert task.title == "Staged"
        assert task.priority == Priority.LOW


class TestLoadRecovery:
    """A bad stored record must not cost the valid ones on the next save."""

    def test_add_after_partial_load_keeps_valid_tasks(self, blob_store, controller):
        for title in ("t1", "t2", "t3"):
            controller.add_task(title=title)
        records = json.loads(blob_store.get_item("todoTasks"))
        records.append({"id": 1, "title": "bad", "priority": "urgent"})
        blob_store.set_item("todoTasks", json.dumps(records))

        session = reload(blob_store)
        session.add_task(title="new")

        stored = json.loads(blob_store.get_item("todoTasks"))
        assert [record["title"] for record in stored] == ["t1", "t2", "t3", "new"]

    def test_deleting_last_task_clears_key(self, blob_store, controller):
        task = controller.add_task(title="Only")
        controller.delete_task(task.id)

        assert blob_store.get_item("todoTasks") is None
