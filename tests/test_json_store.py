"""Tests for the JSON file task store."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from taskview.adapters.json_store import JsonTaskStore, TaskFileError
from taskview.core.tasks import Priority


@pytest.fixture
def now():
    return datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def tasks_file(tmp_path):
    return tmp_path / "todo-list.json"


@pytest.fixture
def store(tasks_file):
    return JsonTaskStore(tasks_file)


class TestLoad:
    def test_missing_file_is_empty(self, store):
        assert store.list_tasks() == []

    def test_reads_existing_file(self, tasks_file):
        tasks_file.write_text(
            json.dumps(
                {
                    "tasks": [
                        {
                            "id": 1,
                            "title": "Existing",
                            "description": "",
                            "completed": False,
                            "priority": "high",
                            "due_date": "0001-01-01T00:00:00Z",
                            "created_at": "2025-01-10T08:00:00Z",
                        }
                    ],
                    "next_id": 2,
                }
            )
        )
        store = JsonTaskStore(tasks_file)

        tasks = store.list_tasks()
        assert len(tasks) == 1
        assert tasks[0].title == "Existing"
        assert tasks[0].priority is Priority.HIGH
        assert tasks[0].due_date is None

    def test_corrupt_file_is_empty(self, tasks_file, caplog):
        tasks_file.write_text("{not json")
        store = JsonTaskStore(tasks_file)

        assert store.list_tasks() == []
        assert "Failed to read tasks file" in caplog.text

    def test_next_id_never_reuses_existing_ids(self, tasks_file, now):
        tasks_file.write_text(
            json.dumps(
                {
                    "tasks": [{"id": 5, "title": "Five", "created_at": "2025-01-10T08:00:00Z"}],
                    "next_id": 1,
                }
            )
        )
        store = JsonTaskStore(tasks_file)
        task = store.add("Next", now=now)
        assert task.id == 6


class TestAdd:
    def test_assigns_sequential_ids(self, store, now):
        first = store.add("First", now=now)
        second = store.add("Second", now=now + timedelta(seconds=1))
        assert (first.id, second.id) == (1, 2)

    def test_stamps_creation_time(self, store, now):
        task = store.add("Task", now=now)
        assert task.created_at == now

    def test_persists_to_disk(self, store, tasks_file, now):
        due = now + timedelta(days=2)
        store.add("Persisted", description="desc", priority="medium", due_date=due, now=now)

        reloaded = JsonTaskStore(tasks_file).list_tasks()
        assert len(reloaded) == 1
        assert reloaded[0].title == "Persisted"
        assert reloaded[0].description == "desc"
        assert reloaded[0].priority is Priority.MEDIUM
        assert reloaded[0].due_date == due
        assert reloaded[0].created_at == now

        data = json.loads(tasks_file.read_text())
        assert data["next_id"] == 2

    def test_rejects_empty_title(self, store, now):
        with pytest.raises(ValueError, match="title"):
            store.add("   ", now=now)
        assert store.list_tasks() == []

    def test_keeps_insertion_order(self, store, now):
        for title in ["a", "b", "c"]:
            store.add(title, now=now)
        assert [t.title for t in store.list_tasks()] == ["a", "b", "c"]


class TestToggleAndDelete:
    def test_toggle_flips_completed(self, store, tasks_file, now):
        task = store.add("Task", now=now)

        assert store.toggle(task.id) is True
        assert store.get(task.id).completed is True
        assert JsonTaskStore(tasks_file).get(task.id).completed is True

        assert store.toggle(task.id) is True
        assert store.get(task.id).completed is False

    def test_toggle_missing_task(self, store):
        assert store.toggle(99) is False

    def test_delete(self, store, tasks_file, now):
        keep = store.add("Keep", now=now)
        drop = store.add("Drop", now=now)

        assert store.delete(drop.id) is True
        assert [t.id for t in store.list_tasks()] == [keep.id]
        assert [t.id for t in JsonTaskStore(tasks_file).list_tasks()] == [keep.id]

    def test_delete_missing_task(self, store):
        assert store.delete(1) is False

    def test_ids_not_reused_after_delete(self, store, now):
        store.add("One", now=now)
        two = store.add("Two", now=now)
        store.delete(two.id)
        assert store.add("Three", now=now).id == 3

    def test_counts(self, store, now):
        store.add("a", now=now)
        b = store.add("b", now=now)
        store.add("c", now=now)
        store.toggle(b.id)
        assert store.counts() == (2, 1)

    def test_list_returns_copy(self, store, now):
        store.add("a", now=now)
        store.list_tasks().clear()
        assert len(store.list_tasks()) == 1


class TestUnreadableFile:
    def test_desktop_app_file_with_nanoseconds(self, tasks_file, now):
        tasks_file.write_text(
            json.dumps(
                {
                    "tasks": [
                        {
                            "id": 1,
                            "title": "Existing",
                            "description": "",
                            "completed": False,
                            "priority": "low",
                            "due_date": "2025-10-21T18:00:00.5+03:00",
                            "created_at": "2025-10-19T12:34:56.123456789+03:00",
                        }
                    ],
                    "next_id": 2,
                }
            )
        )
        store = JsonTaskStore(tasks_file)
        assert store.load_error is None
        store.add("New", now=now)

        data = json.loads(tasks_file.read_text())
        assert [t["title"] for t in data["tasks"]] == ["Existing", "New"]

    def test_refuses_to_overwrite(self, tasks_file, now):
        original = '{"tasks": [{"id": 1, "title": "Existing", "created_at": "not a date"}], "next_id": 2}'
        tasks_file.write_text(original)
        store = JsonTaskStore(tasks_file)

        assert store.list_tasks() == []
        assert store.load_error is not None
        with pytest.raises(TaskFileError, match="Refusing to overwrite"):
            store.add("New", now=now)
        assert tasks_file.read_text() == original
        assert store.list_tasks() == []

    def test_toggle_and_delete_do_not_write(self, tasks_file):
        tasks_file.write_text("{not json")
        store = JsonTaskStore(tasks_file)

        assert store.toggle(1) is False
        assert store.delete(1) is False
        assert tasks_file.read_text() == "{not json"


class TestUpdate:
    @pytest.fixture
    def task(self, store, now):
        return store.add(
            "Draft",
            description="first pass",
            priority="low",
            due_date=now + timedelta(days=1),
            now=now,
        )

    def test_updates_fields(self, store, tasks_file, task, now):
        due = now + timedelta(days=4)
        updated = store.update(
            task.id,
            title="Final",
            description="",
            priority="high",
            due_date=due,
            completed=True,
        )

        assert updated.title == "Final"
        assert updated.description == ""
        assert updated.priority is Priority.HIGH
        assert updated.due_date == due
        assert updated.completed is True
        assert updated.created_at == task.created_at
        assert JsonTaskStore(tasks_file).get(task.id) == updated

    def test_partial_update_keeps_other_fields(self, store, task):
        updated = store.update(task.id, priority="medium")
        assert updated.title == "Draft"
        assert updated.description == "first pass"
        assert updated.due_date == task.due_date
        assert updated.priority is Priority.MEDIUM

    def test_clears_due_date(self, store, tasks_file, task):
        assert store.update(task.id, due_date=None).due_date is None
        assert JsonTaskStore(tasks_file).get(task.id).due_date is None

    def test_missing_task(self, store):
        assert store.update(42, title="x") is None

    def test_rejects_empty_title(self, store, task):
        with pytest.raises(ValueError, match="title"):
            store.update(task.id, title="  ")
        assert store.get(task.id).title == "Draft"

    def test_rejects_unknown_field(self, store, task):
        with pytest.raises(ValueError, match="created_at"):
            store.update(task.id, created_at=None)
