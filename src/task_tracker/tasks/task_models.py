# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TaskStatus(StrEnum):
    """
    Task workflow status.

    Notes:
    - UNKNOWN only appears when a persisted line carries a value we do not know
      (file edited by hand). Validators never accept it for new writes.
    """

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    DONE = "done"
    UNKNOWN = "unknown"

    @classmethod
    def known(cls) -> tuple[TaskStatus, ...]:
        return (cls.PENDING, cls.IN_PROGRESS, cls.DONE)

    @classmethod
    def from_raw(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.UNKNOWN
        try:
            value = cls(raw.strip().lower())
        except ValueError:
            return cls.UNKNOWN
        return value


class TaskPriority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"

    @classmethod
    def known(cls) -> tuple[TaskPriority, ...]:
        return (cls.HIGH, cls.MEDIUM, cls.LOW)

    @classmethod
    def from_raw(cls, raw: str | None) -> TaskPriority:
        if not raw:
            return cls.UNKNOWN
        try:
            value = cls(raw.strip().lower())
        except ValueError:
            return cls.UNKNOWN
        return value

    @property
    def rank(self) -> int:
        # high=1, medium=2, anything else sorts last
        return _PRIORITY_RANK.get(self, 3)


_PRIORITY_RANK = {TaskPriority.HIGH: 1, TaskPriority.MEDIUM: 2, TaskPriority.LOW: 3}


class SortKey(StrEnum):
    DUE_DATE = "due_date"
    PRIORITY = "priority"
    STATUS = "status"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(slots=True)
class Task:
    id: int
    title: str
    status: TaskStatus
    priority: TaskPriority
    due_date: str  # YYYY-MM-DD

    def is_overdue(self, today: str) -> bool:
        """Not done and due strictly before `today` (both YYYY-MM-DD)."""
        return self.status != TaskStatus.DONE and self.due_date < today


@dataclass(frozen=True, slots=True)
class StatusSummary:
    pending: int = 0
    in_progress: int = 0
    done: int = 0
    total: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "pending": self.pending,
            "in_progress": self.in_progress,
            "done": self.done,
            "total": self.total,
        }
