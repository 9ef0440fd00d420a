# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import logging
import os
import re
from collections import Counter
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from .task_errors import MalformedRecordError, TaskNotFoundError, ValidationError
from .task_models import (
    SortDirection,
    SortKey,
    StatusSummary,
    Task,
    TaskPriority,
    TaskStatus,
)
from .task_validation import (
    DEFAULT_DELIMITER,
    clean_title,
    is_usable_delimiter,
    parse_due_date,
    parse_priority,
    parse_sort_direction,
    parse_sort_key,
    parse_status,
)

logger = logging.getLogger(__name__)

ID_RE = re.compile(r"^[0-9]+$")

# Field positions in a persisted line: id|title|status|priority|due_date
F_ID, F_TITLE, F_STATUS, F_PRIORITY, F_DUE = range(5)
FIELD_COUNT = 5


@dataclass(slots=True)
class _Line:
    """One physical line of the store file; task is None for malformed lines."""

    raw: str
    task: Task | None
    eol: str = "\n"


class TaskStore:
    """
    Flat-file task store.

    File format:
    - one record per line: id|title|status|priority|due_date
    - no header, no escaping (the delimiter is stripped from titles on write)

    Persistence:
    - add appends a single line
    - update/delete read the whole file, change one line, rewrite the whole file
    - lines that fail to parse are skipped by queries but written back verbatim

    Ids:
    - next id = 1 + the largest id seen by this instance (file max or anything
      allocated/seen earlier), so deleted ids are never handed out again
    """

    def __init__(self, path: str | Path = "tasks.txt", *, delimiter: str = DEFAULT_DELIMITER) -> None:
        if not is_usable_delimiter(delimiter):
            raise ValueError(
                f"delimiter must be one character that cannot occur in ids, statuses or dates, got {delimiter!r}"
            )

        self._path = Path(path)
        self._delimiter = delimiter
        self._max_id_seen = 0
        self._init_file()

        try:
            total = self.count_tasks()
        except OSError:
            total = -1
        logger.info("TaskStore ready path=%s total=%s", self._path, total)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def delimiter(self) -> str:
        return self._delimiter

    # ---- low-level helpers ----

    def _init_file(self) -> None:
        if self._path.exists():
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.touch()
        logger.info("Created new task file: %s", self._path)

    def _read_text(self) -> str:
        if not self._path.exists():
            return ""
        # newline="": CRLF endings are kept as stored
        with self._path.open(encoding="utf-8", newline="") as f:
            return f.read()

    def _split_lines(self, text: str) -> list[_Line]:
        raw_lines = text.split("\n")
        if raw_lines and raw_lines[-1] == "":
            raw_lines.pop()

        lines: list[_Line] = []
        skipped = 0
        for raw in raw_lines:
            eol = "\n"
            if raw.endswith("\r"):
                raw, eol = raw[:-1], "\r\n"
            try:
                task = self._parse_line(raw)
            except MalformedRecordError as e:
                logger.debug("Skipping malformed record: %s", e)
                task = None
                skipped += 1
            lines.append(_Line(raw=raw, task=task, eol=eol))

            line_id = self._line_id(raw)
            if line_id is not None and line_id > self._max_id_seen:
                self._max_id_seen = line_id

        if skipped:
            logger.debug("TaskStore read path=%s skipped=%s", self._path, skipped)
        return lines

    def _read_lines(self) -> list[_Line]:
        return self._split_lines(self._read_text())

    def _write_lines(self, lines: list[_Line]) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        payload = "".join(line.raw + line.eol for line in lines)
        tmp.write_text(payload, encoding="utf-8", newline="")
        os.replace(tmp, self._path)

    def _tasks(self) -> list[Task]:
        return [line.task for line in self._read_lines() if line.task is not None]

    def _line_id(self, raw: str) -> int | None:
        """Id used for allocation; any line with a numeric first field counts."""
        head = raw.split(self._delimiter, 1)[0]
        if not ID_RE.match(head):
            return None
        return int(head)

    def _parse_line(self, raw: str) -> Task:
        fields = raw.split(self._delimiter)
        if len(fields) != FIELD_COUNT:
            raise MalformedRecordError(raw, f"expected {FIELD_COUNT} fields, got {len(fields)}")
        if not ID_RE.match(fields[F_ID]):
            raise MalformedRecordError(raw, "id is not a non-negative integer")
        if not fields[F_TITLE].strip():
            raise MalformedRecordError(raw, "title is empty")
        try:
            due_ok = parse_due_date(fields[F_DUE]) == fields[F_DUE]
        except ValidationError:
            due_ok = False
        if not due_ok:
            raise MalformedRecordError(raw, "due date is not a valid YYYY-MM-DD date")

        return Task(
            id=int(fields[F_ID]),
            title=fields[F_TITLE],
            status=TaskStatus.from_raw(fields[F_STATUS]),
            priority=TaskPriority.from_raw(fields[F_PRIORITY]),
            due_date=fields[F_DUE],
        )

    def _format_task(self, task: Task) -> str:
        return self._delimiter.join(
            [str(task.id), task.title, task.status.value, task.priority.value, task.due_date]
        )

    @staticmethod
    def _find(lines: list[_Line], task_id: int) -> tuple[int, Task]:
        for i, line in enumerate(lines):
            if line.task is not None and line.task.id == task_id:
                return i, line.task
        raise TaskNotFoundError(task_id)

    # ---- public API: CRUD ----

    def count_tasks(self) -> int:
        return len(self._tasks())

    def add_task(self, *, title: str, priority: str | TaskPriority, due_date: str | date) -> Task:
        clean = clean_title(title, delimiter=self._delimiter)
        prio = parse_priority(priority)
        due = parse_due_date(due_date)

        text = self._read_text()
        self._split_lines(text)  # refreshes the id high-water mark

        task = Task(
            id=self._max_id_seen + 1,
            title=clean,
            status=TaskStatus.PENDING,
            priority=prio,
            due_date=due,
        )

        prefix = "\n" if text and not text.endswith("\n") else ""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8", newline="") as f:
            f.write(f"{prefix}{self._format_task(task)}\n")

        self._max_id_seen = task.id
        logger.debug(
            "Task added id=%s priority=%s due_date=%s", task.id, task.priority.value, task.due_date
        )
        return task

    def get_task(self, task_id: int) -> Task:
        for task in self._tasks():
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def update_task(
        self,
        task_id: int,
        *,
        title: str | None = None,
        status: str | TaskStatus | None = None,
        priority: str | TaskPriority | None = None,
        due_date: str | date | None = None,
    ) -> Task:
        """
        Partial update: fields left as None keep their current value.

        All supplied fields are validated before the file is touched. Fields
        that are not supplied are carried over verbatim from the stored line.
        """
        changes: dict[int, str] = {}
        if title is not None:
            changes[F_TITLE] = clean_title(title, delimiter=self._delimiter)
        if status is not None:
            changes[F_STATUS] = parse_status(status).value
        if priority is not None:
            changes[F_PRIORITY] = parse_priority(priority).value
        if due_date is not None:
            changes[F_DUE] = parse_due_date(due_date)

        lines = self._read_lines()
        idx, current = self._find(lines, task_id)
        if not changes:
            return current

        fields = lines[idx].raw.split(self._delimiter)
        for pos, value in changes.items():
            fields[pos] = value
        raw = self._delimiter.join(fields)
        task = self._parse_line(raw)
        lines[idx] = _Line(raw=raw, task=task, eol=lines[idx].eol)

        self._write_lines(lines)
        logger.debug("Task updated id=%s fields=%s", task_id, sorted(changes))
        return task

    def delete_task(self, task_id: int) -> None:
        lines = self._read_lines()
        idx, _ = self._find(lines, task_id)
        del lines[idx]
        self._write_lines(lines)
        logger.debug("Task deleted id=%s", task_id)

    # ---- public API: queries ----

    def list_tasks(
        self,
        *,
        status: str | TaskStatus | None = None,
        priority: str | TaskPriority | None = None,
    ) -> list[Task]:
        """
        All tasks in file order, optionally filtered on one field.

        The comparison value is case-insensitive and is not validated: a value
        outside the known statuses/priorities (including "unknown") returns nothing.
        """
        if status and priority:
            raise ValidationError("filter", "Filter by status or by priority, not both.")

        tasks = self._tasks()
        if status:
            wanted = str(status).strip().lower()
            if wanted not in {s.value for s in TaskStatus.known()}:
                return []
            return [t for t in tasks if t.status.value == wanted]
        if priority:
            wanted = str(priority).strip().lower()
            if wanted not in {p.value for p in TaskPriority.known()}:
                return []
            return [t for t in tasks if t.priority.value == wanted]
        return tasks

    def search_tasks(self, pattern: str) -> list[Task]:
        """Case-insensitive regex search on titles; an invalid regex matches nothing."""
        if not pattern:
            raise ValidationError("pattern", "Search keyword cannot be empty.")
        try:
            rx = re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            logger.debug("Invalid search pattern %r: %s", pattern, e)
            return []
        return [t for t in self._tasks() if rx.search(t.title)]

    def sort_tasks(
        self,
        key: str | SortKey,
        direction: str | SortDirection | None = None,
    ) -> list[Task]:
        """
        Sorted copy of all tasks.

        - due_date: string order on YYYY-MM-DD, asc or desc
        - priority: high, medium, then everything else (asc only)
        - status: alphabetical on the status string (asc only)

        All sorts are stable with respect to file order.
        """
        sort_key = parse_sort_key(key)
        sort_dir = parse_sort_direction(direction)
        tasks = self._tasks()

        if sort_key == SortKey.DUE_DATE:
            return sorted(tasks, key=lambda t: t.due_date, reverse=sort_dir == SortDirection.DESC)
        if sort_key == SortKey.PRIORITY:
            return sorted(tasks, key=lambda t: t.priority.rank)
        return sorted(tasks, key=lambda t: t.status.value)

    # ---- public API: reports ----

    def summary_report(self) -> StatusSummary:
        tasks = self._tasks()
        counts = Counter(t.status for t in tasks)
        return StatusSummary(
            pending=counts[TaskStatus.PENDING],
            in_progress=counts[TaskStatus.IN_PROGRESS],
            done=counts[TaskStatus.DONE],
            total=len(tasks),
        )

    def overdue_report(self, today: str | date) -> list[Task]:
        today_s = parse_due_date(today, field="today")
        return [t for t in self._tasks() if t.is_overdue(today_s)]

    def priority_report(self) -> dict[TaskPriority, list[Task]]:
        groups: dict[TaskPriority, list[Task]] = {p: [] for p in TaskPriority.known()}
        for task in self._tasks():
            if task.priority in groups:
                groups[task.priority].append(task)
        return groups
