"""Task query engine: status filter, date filter and sort.

Pure functions - no I/O, no clock reads. Unknown filter or sort values
never raise; each stage documents the no-op it falls back to.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import Enum

from .tasks import Priority, Task


class StatusMode(Enum):
    """Filter by completion flag."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value: "str | StatusMode | None") -> "StatusMode":
        if isinstance(value, StatusMode):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.ALL


class DateMode(Enum):
    """Filter by due-date window relative to now."""

    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    OVERDUE = "overdue"

    @classmethod
    def parse(cls, value: "str | DateMode | None") -> "DateMode":
        if isinstance(value, DateMode):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.ALL


class SortField(Enum):
    """Primary ordering key. NONE leaves the order untouched."""

    NONE = ""
    DATE = "date"  # creation time
    PRIORITY = "priority"
    DUE_DATE = "dueDate"

    @classmethod
    def parse(cls, value: "str | SortField | None") -> "SortField":
        if isinstance(value, SortField):
            return value
        value = (value or "").strip()
        # snake_case spellings used in config files
        aliases = {"due_date": cls.DUE_DATE, "due": cls.DUE_DATE, "duedate": cls.DUE_DATE}
        if value.lower() in aliases:
            return aliases[value.lower()]
        try:
            return cls(value.lower())
        except ValueError:
            return cls.NONE


def _instant(dt: datetime) -> float:
    """Comparable scalar for a datetime; naive values are read as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def _calendar_date(dt: datetime, now: datetime) -> date:
    """Calendar date of dt, seen from now's time zone when both are aware."""
    if dt.tzinfo is not None and now.tzinfo is not None:
        return dt.astimezone(now.tzinfo).date()
    return dt.date()


def filter_by_status(tasks: list[Task], mode: "StatusMode | str") -> list[Task]:
    """Keep active or completed tasks. ALL keeps everything."""
    match StatusMode.parse(mode):
        case StatusMode.ACTIVE:
            return [t for t in tasks if not t.completed]
        case StatusMode.COMPLETED:
            return [t for t in tasks if t.completed]
        case StatusMode.ALL:
            return list(tasks)


def filter_by_priority(tasks: list[Task], priority: "Priority | str | None") -> list[Task]:
    """Keep tasks of exactly one priority. None keeps everything."""
    if priority is None:
        return list(tasks)
    priority = Priority.parse(priority)
    return [t for t in tasks if t.priority is priority]


def _matches_date_mode(task: Task, mode: DateMode, now: datetime) -> bool:
    """Whether a single task belongs in the given date window."""
    if mode is DateMode.ALL:
        return True
    if not task.has_due_date:
        return False

    today = now.date()
    due = _calendar_date(task.due_date, now)

    match mode:
        case DateMode.TODAY:
            return due == today
        case DateMode.WEEK:
            return today - timedelta(days=1) < due < today + timedelta(days=7)
        case DateMode.OVERDUE:
            return due < today and not task.completed
        case DateMode.ALL:
            return True


def filter_by_date(
    tasks: list[Task],
    mode: "DateMode | str",
    now: datetime,
) -> list[Task]:
    """
    Keep tasks whose due date falls in the requested window.

    today:   due on the calendar date of `now`
    week:    due after yesterday and before seven days from today
    overdue: due before today and not completed

    Tasks without a due date only survive under ALL.
    """
    mode = DateMode.parse(mode)
    return [t for t in tasks if _matches_date_mode(t, mode, now)]


def _sort_key(field: SortField):
    match field:
        case SortField.DATE:
            return lambda t: _instant(t.created_at)
        case SortField.PRIORITY:
            return lambda t: t.priority.ordinal
        case SortField.DUE_DATE:
            return lambda t: _instant(t.due_date)
        case SortField.NONE:
            return None


def sort_tasks(
    tasks: list[Task],
    field: "SortField | str",
    ascending: bool = True,
) -> list[Task]:
    """
    Stable sort by the given field.

    Descending order flips the comparison, so tasks with equal keys keep
    their input order either way. Under DUE_DATE, tasks without a due date
    stay at their positions and only the dated tasks are reordered among
    the remaining slots.
    """
    field = SortField.parse(field)
    key = _sort_key(field)
    if key is None:
        return list(tasks)

    if field is not SortField.DUE_DATE:
        return sorted(tasks, key=key, reverse=not ascending)

    result = list(tasks)
    slots = [i for i, t in enumerate(result) if t.has_due_date]
    dated = sorted((result[i] for i in slots), key=key, reverse=not ascending)
    for slot, task in zip(slots, dated):
        result[slot] = task
    return result


def query(
    tasks: list[Task],
    status: "StatusMode | str" = StatusMode.ALL,
    date_mode: "DateMode | str" = DateMode.ALL,
    sort: "SortField | str" = SortField.NONE,
    ascending: bool = True,
    now: datetime | None = None,
    priority: "Priority | str | None" = None,
) -> list[Task]:
    """
    Filter by status, priority and due date, then sort.

    `now` anchors the date windows and must be given for any date mode
    other than ALL. Without it no task can be placed in a window, so the
    date filter keeps nothing.

    Pure function - no I/O. The input list is never modified.
    """
    task_query = TaskQuery.from_strings(status, date_mode, sort, ascending, priority)
    return task_query.apply(tasks, now)


@dataclass(frozen=True)
class TaskQuery:
    """A complete query descriptor. A priority of None matches every task."""

    status: StatusMode = StatusMode.ALL
    date_mode: DateMode = DateMode.ALL
    sort: SortField = SortField.NONE
    ascending: bool = True
    priority: Priority | None = None

    @classmethod
    def from_strings(
        cls,
        status: "StatusMode | str | None" = None,
        date_mode: "DateMode | str | None" = None,
        sort: "SortField | str | None" = None,
        ascending: bool = True,
        priority: "Priority | str | None" = None,
    ) -> "TaskQuery":
        return cls(
            status=StatusMode.parse(status),
            date_mode=DateMode.parse(date_mode),
            sort=SortField.parse(sort),
            ascending=ascending,
            priority=Priority.parse(priority) if priority is not None else None,
        )

    def apply(self, tasks: list[Task], now: datetime | None = None) -> list[Task]:
        result = filter_by_status(tasks, self.status)
        if self.priority is not None:
            result = filter_by_priority(result, self.priority)
        if self.date_mode is not DateMode.ALL:
            result = filter_by_date(result, self.date_mode, now) if now is not None else []
        if self.sort is not SortField.NONE:
            result = sort_tasks(result, self.sort, self.ascending)
        return result
