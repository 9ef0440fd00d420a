# src/task_tracker/tasks/task_errors.py

"""
Typed errors raised by the task store.

The presentation layer is the only place that turns these into user-facing text.
"""

from __future__ import annotations


class TaskStoreError(Exception):
    """Base class for all task store errors."""


class ValidationError(TaskStoreError, ValueError):
    """A supplied field failed its format or enumeration constraint."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class TaskNotFoundError(TaskStoreError, LookupError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task ID #{task_id} not found.")
        self.task_id = task_id


class MalformedRecordError(TaskStoreError, ValueError):
    """A persisted line does not parse into five well-formed fields."""

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"{reason}: {line!r}")
        self.line = line
        self.reason = reason
