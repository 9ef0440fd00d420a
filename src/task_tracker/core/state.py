# src/task_tracker/core/state.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from .ports import TaskRepo


@dataclass
class AppState:
    # Settings are kept on the state so menu actions never read global config.
    settings: object

    task_store: TaskRepo
    color_enabled: bool = False

    # Source of "today" for the overdue report; swapped out in tests.
    today: Callable[[], date] = field(default=date.today)
