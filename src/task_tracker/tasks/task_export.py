# src/task_tracker/tasks/task_export.py

"""
CSV export: a one-way projection for spreadsheet tools.

Header row is plain; every data field is double-quoted (quotes inside titles
are doubled by the csv module). The store never reads this format back.
"""

from __future__ import annotations

import csv
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from .task_models import Task

logger = logging.getLogger(__name__)

CSV_HEADER = ("ID", "Title", "Status", "Priority", "DueDate")


def task_to_row(task: Task) -> list[str]:
    return [str(task.id), task.title, task.status.value, task.priority.value, task.due_date]


def write_csv(tasks: Iterable[Task], fh) -> int:
    """Write header + rows to an open text stream. Returns the number of rows."""
    csv.writer(fh, lineterminator="\n").writerow(CSV_HEADER)
    writer = csv.writer(fh, quoting=csv.QUOTE_ALL, lineterminator="\n")
    n = 0
    for task in tasks:
        writer.writerow(task_to_row(task))
        n += 1
    return n


def export_csv(tasks: Iterable[Task], path: str | Path) -> int:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    with tmp.open("w", encoding="utf-8", newline="") as f:
        n = write_csv(tasks, f)
    os.replace(tmp, path)
    logger.info("Exported %d tasks to %s", n, path)
    return n
