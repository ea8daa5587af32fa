"""Pure task domain logic - no I/O dependencies."""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

# Zero timestamp written by the desktop app for "no due date"
ZERO_TIMESTAMP = "0001-01-01T00:00:00Z"

# Fractional seconds may carry anywhere from 1 to 9 digits
_FRACTION = re.compile(r"\.(\d+)")


class Priority(Enum):
    """Task priority, ordered from unspecified to high."""

    NONE = ""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def ordinal(self) -> int:
        """Integer rank used for comparisons (none=0 ... high=3)."""
        match self:
            case Priority.NONE:
                return 0
            case Priority.LOW:
                return 1
            case Priority.MEDIUM:
                return 2
            case Priority.HIGH:
                return 3

    @classmethod
    def parse(cls, value: "str | Priority | None") -> "Priority":
        """Parse a priority label. Anything unrecognized is NONE."""
        if isinstance(value, Priority):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.NONE


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp, treating empty and zero values as absent."""
    if not value or value == ZERO_TIMESTAMP:
        return None
    value = _FRACTION.sub(lambda m: "." + (m.group(1) + "000000")[:6], value, count=1)
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.year == 1:
        return None
    return parsed


@dataclass(frozen=True)
class Task:
    """A to-do item."""

    id: int
    title: str
    created_at: datetime
    description: str = ""
    completed: bool = False
    priority: Priority = Priority.NONE
    due_date: datetime | None = None

    @property
    def has_due_date(self) -> bool:
        return self.due_date is not None

    def to_dict(self) -> dict:
        """Serialize to the JSON shape used by the tasks file."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "priority": self.priority.value,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from a tasks-file record."""
        return cls(
            id=int(data["id"]),
            title=data["title"],
            description=data.get("description", "") or "",
            completed=bool(data.get("completed", False)),
            priority=Priority.parse(data.get("priority")),
            due_date=parse_timestamp(data.get("due_date")),
            created_at=parse_timestamp(data.get("created_at")) or datetime.min.replace(tzinfo=timezone.utc),
        )
