"""JSON file task storage adapter."""

import json
import logging
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path

from taskview.core.tasks import Priority, Task

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "description", "priority", "due_date", "completed")


class TaskFileError(Exception):
    """Raised when the tasks file cannot be read and must not be overwritten."""

    pass


class JsonTaskStore:
    """
    File-based task storage.

    Implements TaskRepository protocol. The whole collection lives in one
    JSON document: {"tasks": [...], "next_id": N}. Tasks are kept in
    insertion order.

    If an existing file cannot be read, the store lists no tasks and every
    write raises TaskFileError, leaving the file untouched.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()
        self._tasks: list[Task] = []
        self._next_id = 1
        self.load_error: str | None = None
        self._load()

    def _load(self) -> None:
        """Read the tasks file. A missing file means an empty store."""
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text())
            tasks = [Task.from_dict(item) for item in data.get("tasks") or []]
            next_id = int(data.get("next_id") or 1)
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            self.load_error = str(e)
            logger.warning(f"Failed to read tasks file {self.path}: {e}")
            return

        # Never hand out an id that is already taken
        highest = max((t.id for t in tasks), default=0)
        self._tasks = tasks
        self._next_id = max(next_id, highest + 1)
        logger.debug(f"Loaded {len(self._tasks)} tasks from {self.path}")

    def _save(self) -> None:
        if self.load_error is not None:
            raise TaskFileError(
                f"Refusing to overwrite unreadable tasks file {self.path}: {self.load_error}"
            )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(
                {
                    "tasks": [t.to_dict() for t in self._tasks],
                    "next_id": self._next_id,
                },
                indent=2,
            )
        )

    def _index(self, task_id: int) -> int | None:
        return next((i for i, t in enumerate(self._tasks) if t.id == task_id), None)

    def list_tasks(self) -> list[Task]:
        """All tasks in insertion order."""
        return list(self._tasks)

    def get(self, task_id: int) -> Task | None:
        i = self._index(task_id)
        return self._tasks[i] if i is not None else None

    def add(
        self,
        title: str,
        description: str = "",
        priority: Priority | str = Priority.NONE,
        due_date: datetime | None = None,
        now: datetime | None = None,
    ) -> Task:
        """Create, persist and return a new task. Raises ValueError on an empty title."""
        title = title.strip()
        if not title:
            raise ValueError("Task title must not be empty")

        task = Task(
            id=self._next_id,
            title=title,
            description=description,
            priority=Priority.parse(priority),
            due_date=due_date,
            created_at=now or datetime.now(timezone.utc),
        )
        self._save_with(self._tasks + [task], self._next_id + 1)
        logger.info(f"Added task #{task.id}: {task.title}")
        return task

    def update(self, task_id: int, **fields) -> Task | None:
        """
        Change any of title, description, priority, due_date and completed.

        Passing due_date=None clears the due date. Returns the updated task,
        or None if the task does not exist. Raises ValueError for an empty
        title or an unknown field.
        """
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown task field(s): {', '.join(sorted(unknown))}")

        i = self._index(task_id)
        if i is None:
            return None

        if "title" in fields:
            fields["title"] = (fields["title"] or "").strip()
            if not fields["title"]:
                raise ValueError("Task title must not be empty")
        if "priority" in fields:
            fields["priority"] = Priority.parse(fields["priority"])
        if "description" in fields:
            fields["description"] = fields["description"] or ""
        if "completed" in fields:
            fields["completed"] = bool(fields["completed"])

        task = replace(self._tasks[i], **fields)
        tasks = list(self._tasks)
        tasks[i] = task
        self._save_with(tasks, self._next_id)
        logger.info(f"Updated task #{task_id}: {', '.join(sorted(fields))}")
        return task

    def toggle(self, task_id: int) -> bool:
        """Flip a task's completed flag. Returns False if the task does not exist."""
        task = self.get(task_id)
        if task is None:
            return False
        self.update(task_id, completed=not task.completed)
        return True

    def delete(self, task_id: int) -> bool:
        """Remove a task. Returns False if the task does not exist."""
        i = self._index(task_id)
        if i is None:
            return False
        self._save_with(self._tasks[:i] + self._tasks[i + 1:], self._next_id)
        logger.info(f"Deleted task #{task_id}")
        return True

    def _save_with(self, tasks: list[Task], next_id: int) -> None:
        """Persist a new state; memory only changes once the write succeeds."""
        previous = self._tasks, self._next_id
        self._tasks, self._next_id = tasks, next_id
        try:
            self._save()
        except Exception:
            self._tasks, self._next_id = previous
            raise

    def counts(self) -> tuple[int, int]:
        """(active, completed) totals."""
        completed = sum(1 for t in self._tasks if t.completed)
        return len(self._tasks) - completed, completed
