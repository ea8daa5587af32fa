"""Functional core - pure business logic with no I/O."""

from .tasks import Task, Priority
from .query import (
    StatusMode,
    DateMode,
    SortField,
    TaskQuery,
    filter_by_status,
    filter_by_priority,
    filter_by_date,
    sort_tasks,
    query,
)

__all__ = [
    # Tasks
    "Task",
    "Priority",
    # Query
    "StatusMode",
    "DateMode",
    "SortField",
    "TaskQuery",
    "filter_by_status",
    "filter_by_priority",
    "filter_by_date",
    "sort_tasks",
    "query",
]
