# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.core.state import AppState
from task_tracker.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the menu layer.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment and .env.
    """
    return SimpleNamespace(
        app_name="task-tracker",
        log_level="WARNING",
        log_to_file=False,
        data_dir=tmp_path,
        tasks_file=tmp_path / "tasks.txt",
        export_file=tmp_path / "tasks_export.csv",
        delimiter="|",
        color="never",
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_file, delimiter=settings.delimiter)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """
    AppState wired with a real file-backed store and a pinned "today".
    """
    return AppState(
        settings=settings,
        task_store=store,
        color_enabled=False,
        today=lambda: date(2025, 6, 15),
    )
