"""Shared workflow layer between the CLI and the query engine.

Resolves the store and clock from config and runs queries against them.
"""

import logging
from pathlib import Path

from .adapters.json_store import JsonTaskStore
from .adapters.system_clock import SystemClock
from .config import Config
from .core.query import TaskQuery
from .core.tasks import Task
from .ports import Clock, TaskRepository

logger = logging.getLogger(__name__)


def get_store(config: Config) -> JsonTaskStore:
    """Resolve the tasks file from config."""
    return JsonTaskStore(Path(config.tasks_file).expanduser())


def get_clock(config: Config) -> SystemClock:
    return SystemClock(config.timezone)


def build_query(
    config: Config,
    status: str | None = None,
    date_mode: str | None = None,
    sort: str | None = None,
    ascending: bool | None = None,
    priority: str | None = None,
) -> TaskQuery:
    """Merge explicit options over the configured defaults."""
    return TaskQuery.from_strings(
        status if status is not None else config.default_status,
        date_mode if date_mode is not None else config.default_date,
        sort if sort is not None else config.default_sort,
        ascending if ascending is not None else config.default_ascending,
        priority,
    )


def run_query(
    task_query: TaskQuery,
    store: TaskRepository,
    clock: Clock,
) -> list[Task]:
    """Fetch tasks from the store and apply the query at the clock's current time."""
    tasks = store.list_tasks()
    result = task_query.apply(tasks, clock.now())
    logger.debug(
        f"Query status={task_query.status.value} date={task_query.date_mode.value} "
        f"sort={task_query.sort.value or '-'} ascending={task_query.ascending}: "
        f"{len(result)}/{len(tasks)} tasks"
    )
    return result
