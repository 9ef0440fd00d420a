# src/task_tracker/tasks/task_validation.py

"""
Field validators shared by the store and the interactive prompts.

Each validator returns the normalized value or raises ValidationError.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from .task_errors import ValidationError
from .task_models import SortDirection, SortKey, TaskPriority, TaskStatus

DEFAULT_DELIMITER = "|"
DATE_FORMAT = "%Y-%m-%d"
DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def is_usable_delimiter(delimiter: str) -> bool:
    """
    One character that never occurs inside a stored id, status, priority or date.

    Titles are safe regardless: the delimiter is stripped from them on write.
    """
    if len(delimiter) != 1 or delimiter.isspace() or delimiter == "-":
        return False
    return not (delimiter.isascii() and delimiter.isalnum())


def clean_title(raw: str | None, *, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Strip delimiter characters and line breaks; reject an empty result."""
    text = (raw or "").replace(delimiter, "")
    text = text.replace("\r", "").replace("\n", "").strip()
    if not text:
        raise ValidationError("title", "Title cannot be empty.")
    return text


def parse_priority(raw: str | TaskPriority | None) -> TaskPriority:
    value = str(raw or "").strip().lower()
    try:
        priority = TaskPriority(value)
    except ValueError:
        priority = TaskPriority.UNKNOWN
    if priority not in TaskPriority.known():
        raise ValidationError("priority", "Priority must be: high, medium, or low.")
    return priority


def parse_status(raw: str | TaskStatus | None) -> TaskStatus:
    value = str(raw or "").strip().lower()
    try:
        status = TaskStatus(value)
    except ValueError:
        status = TaskStatus.UNKNOWN
    if status not in TaskStatus.known():
        raise ValidationError("status", "Status must be: pending, in-progress, or done.")
    return status


def parse_due_date(raw: str | date | None, *, field: str = "due_date") -> str:
    """
    Validate a YYYY-MM-DD date and return it as a string.

    The pattern check comes first so that formats strptime would tolerate
    (single-digit month, etc.) are still rejected.
    """
    if isinstance(raw, datetime):
        raw = raw.date()
    if isinstance(raw, date):
        return raw.strftime(DATE_FORMAT)

    value = str(raw or "").strip()
    message = "Invalid date. Please use the format YYYY-MM-DD (e.g. 2025-12-31)."
    if not DATE_RE.match(value):
        raise ValidationError(field, message)
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        raise ValidationError(field, message) from None
    return value


def parse_sort_key(raw: str | SortKey) -> SortKey:
    try:
        return SortKey(str(raw).strip().lower())
    except ValueError:
        raise ValidationError("key", f"Unknown sort key: {raw!r}.") from None


def parse_sort_direction(raw: str | SortDirection | None) -> SortDirection:
    if raw is None:
        return SortDirection.ASC
    try:
        return SortDirection(str(raw).strip().lower())
    except ValueError:
        raise ValidationError("direction", f"Unknown sort direction: {raw!r}.") from None
