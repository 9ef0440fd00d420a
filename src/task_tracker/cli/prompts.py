# src/task_tracker/cli/prompts.py

"""
Interactive field prompts.

Each ask_* helper re-prompts until the validator accepts the answer, printing
the validator's message as a warning in between. A blank answer means "keep
current" when a current value is given.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from ..core.ports import Console
from ..tasks.task_errors import ValidationError
from ..tasks.task_models import TaskPriority, TaskStatus
from ..tasks.task_validation import (
    DEFAULT_DELIMITER,
    clean_title,
    parse_due_date,
    parse_priority,
    parse_status,
)
from .render import warn
from .theme import Theme

T = TypeVar("T")


def ask_until_valid(
    console: Console,
    theme: Theme,
    prompt: str,
    parse: Callable[[str], T],
    *,
    current: str | None = None,
) -> T:
    while True:
        raw = console.ask(prompt).strip()
        if not raw and current is not None:
            raw = current
        try:
            return parse(raw)
        except ValidationError as e:
            console.say(warn(theme, e.message))


def ask_title(
    console: Console,
    theme: Theme,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    current: str | None = None,
) -> str:
    if current is None:
        return ask_until_valid(
            console, theme, "  Title: ", lambda s: clean_title(s, delimiter=delimiter)
        )

    # Update flow: blank, or a title that is empty once delimiters are removed, keeps the old one.
    raw = console.ask(f"  New title       [{current}]: ")
    try:
        return clean_title(raw, delimiter=delimiter)
    except ValidationError:
        return current


def ask_priority(console: Console, theme: Theme, *, current: str | None = None) -> TaskPriority:
    if current is None:
        prompt = "  Priority (high/medium/low): "
    else:
        prompt = f"  New priority    [{current}] (high/medium/low): "
    return ask_until_valid(console, theme, prompt, parse_priority, current=current)


def ask_status(console: Console, theme: Theme, *, current: str) -> TaskStatus:
    prompt = f"  New status      [{current}] (pending/in-progress/done): "
    return ask_until_valid(console, theme, prompt, parse_status, current=current)


def ask_due_date(console: Console, theme: Theme, *, current: str | None = None) -> str:
    if current is None:
        prompt = "  Due Date (YYYY-MM-DD): "
    else:
        prompt = f"  New due date    [{current}] (YYYY-MM-DD): "
    return ask_until_valid(console, theme, prompt, parse_due_date, current=current)


def ask_task_id(console: Console, prompt: str) -> tuple[str, int | None]:
    """Returns the raw answer and the parsed id (None when not a number)."""
    raw = console.ask(prompt).strip().lstrip("#")
    if not raw.isascii() or not raw.isdigit():
        return raw, None
    return raw, int(raw)


def confirm(console: Console, prompt: str) -> bool:
    return console.ask(prompt).strip().lower() == "yes"
