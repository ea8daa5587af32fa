"""Clock interface."""

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Source of the reference instant for date filters."""

    def now(self) -> datetime:
        """Current time, timezone-aware."""
        ...
