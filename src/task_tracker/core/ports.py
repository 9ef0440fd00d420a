# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the menu layer.

Menu actions depend on Protocols instead of the terminal and the concrete store.
This keeps the prompt flows testable with scripted input.
"""

from datetime import date
from typing import Any, Protocol


class Console(Protocol):
    """Line-oriented terminal: read one answer, print text."""

    def ask(self, prompt: str) -> str: ...
    def say(self, text: str = "") -> None: ...
    def pause(self) -> None: ...
    def clear(self) -> None: ...


class TaskRepo(Protocol):
    # CRUD
    def add_task(self, *, title: str, priority: Any, due_date: Any) -> Any: ...
    def get_task(self, task_id: int) -> Any: ...
    def update_task(
            self,
            task_id: int,
            *,
            title: str | None = None,
            status: Any | None = None,
            priority: Any | None = None,
            due_date: Any | None = None,
    ) -> Any: ...
    def delete_task(self, task_id: int) -> None: ...

    # Queries
    def list_tasks(self, *, status: Any | None = None, priority: Any | None = None) -> list[Any]: ...
    def search_tasks(self, pattern: str) -> list[Any]: ...
    def sort_tasks(self, key: Any, direction: Any | None = None) -> list[Any]: ...
    def count_tasks(self) -> int: ...

    # Reports
    def summary_report(self) -> Any: ...
    def overdue_report(self, today: str | date) -> list[Any]: ...
    def priority_report(self) -> dict[Any, list[Any]]: ...
