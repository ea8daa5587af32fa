"""Adapters - I/O implementations of ports."""

from .json_store import JsonTaskStore, TaskFileError
from .system_clock import FixedClock, SystemClock

__all__ = [
    "JsonTaskStore",
    "TaskFileError",
    "SystemClock",
    "FixedClock",
]
