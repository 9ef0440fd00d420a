# src/task_tracker/tasks/task_api.py

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from ..core.state import AppState
from .task_export import export_csv
from .task_models import StatusSummary, Task

logger = logging.getLogger(__name__)


def quick_stats(state: AppState) -> StatusSummary | None:
    """
    Counts for the main-menu stats bar.
    Returns None when the store is empty (bar is hidden then).
    """
    summary = state.task_store.summary_report()
    if summary.total == 0:
        return None
    return summary


def overdue_today(state: AppState, today: date | None = None) -> list[Task]:
    """Overdue tasks relative to state.today() unless a date is given."""
    if today is None:
        today = state.today()
    return state.task_store.overdue_report(today)


def export_tasks(state: AppState, path: str | Path | None = None) -> tuple[Path, int]:
    """
    Export all well-formed tasks in file order.
    Uses settings.export_file unless a path is given.
    """
    target = Path(path) if path is not None else Path(state.settings.export_file)
    n = export_csv(state.task_store.list_tasks(), target)
    return target, n
