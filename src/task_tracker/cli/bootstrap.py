# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local directories exist,
- wires the concrete TaskStore into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings, rejected_delimiter
from ..core.state import AppState
from ..tasks.task_store import TaskStore
from .theme import color_enabled

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_file.parent.mkdir(parents=True, exist_ok=True)
    settings.export_file.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    bad = rejected_delimiter(settings)
    if bad is not None:
        logger.warning(
            "Ignoring TASKTRACK_DELIMITER=%r (must be one character, not a letter, digit, '-' or whitespace); using %r.",
            bad,
            settings.delimiter,
        )

    state = AppState(
        settings=settings,
        task_store=TaskStore(settings.tasks_file, delimiter=settings.delimiter),
        color_enabled=color_enabled(getattr(settings, "color", "auto")),
    )
    return state
