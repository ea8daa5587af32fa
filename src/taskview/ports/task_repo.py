"""Task repository interface."""

from typing import Protocol

from taskview.core.tasks import Task


class TaskRepository(Protocol):
    """Interface for fetching tasks from any backend."""

    def list_tasks(self) -> list[Task]:
        """Fetch all tasks in insertion order."""
        ...
