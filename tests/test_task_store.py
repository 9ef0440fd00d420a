# tests/test_task_store.py

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from task_tracker.tasks.task_errors import TaskNotFoundError, ValidationError
from task_tracker.tasks.task_models import (
    SortDirection,
    SortKey,
    StatusSummary,
    TaskPriority,
    TaskStatus,
)
from task_tracker.tasks.task_store import TaskStore


def _titles(tasks) -> list[str]:
    return [t.title for t in tasks]


def test_add_then_get_returns_pending_task(store: TaskStore) -> None:
    task = store.add_task(title="Write report", priority="high", due_date="2025-01-31")

    assert task.id == 1
    assert task.status == TaskStatus.PENDING
    assert task.priority == TaskPriority.HIGH
    assert store.get_task(task.id) == task
    assert store.path.read_text("utf-8") == "1|Write report|pending|high|2025-01-31\n"


def test_add_normalizes_priority_and_strips_delimiter(store: TaskStore) -> None:
    task = store.add_task(title="  a|b|c  ", priority="MEDIUM", due_date=date(2025, 3, 1))
    assert task.title == "abc"
    assert task.priority == TaskPriority.MEDIUM
    assert task.due_date == "2025-03-01"


@pytest.mark.parametrize(
    ("title", "priority", "due_date", "field"),
    [
        ("", "high", "2025-01-01", "title"),
        ("|||", "high", "2025-01-01", "title"),
        ("x", "urgent", "2025-01-01", "priority"),
        ("x", "high", "2025-02-30", "due_date"),
        ("x", "high", "2025-04-31", "due_date"),
        ("x", "high", "2025-1-01", "due_date"),
    ],
)
def test_add_rejects_invalid_fields(store: TaskStore, title, priority, due_date, field) -> None:
    with pytest.raises(ValidationError) as exc:
        store.add_task(title=title, priority=priority, due_date=due_date)
    assert exc.value.field == field
    assert store.path.read_text("utf-8") == ""


def test_ids_are_not_reused_after_delete(store: TaskStore) -> None:
    for title in ("a", "b", "c"):
        store.add_task(title=title, priority="low", due_date="2025-01-01")

    store.delete_task(2)
    assert store.add_task(title="d", priority="low", due_date="2025-01-01").id == 4

    # deleting the current maximum does not free it for this instance either
    store.delete_task(4)
    assert store.add_task(title="e", priority="low", due_date="2025-01-01").id == 5


def test_next_id_follows_file_maximum_for_new_instance(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text("3|a|pending|low|2025-01-01\n10|b|done|high|2025-01-02\n", "utf-8")

    store = TaskStore(path)
    assert store.add_task(title="c", priority="low", due_date="2025-01-03").id == 11


def test_id_allocation_ignores_non_numeric_ids(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text("abc|a|pending|low|2025-01-01\n-4|b|pending|low|2025-01-01\n", "utf-8")

    store = TaskStore(path)
    assert store.add_task(title="c", priority="low", due_date="2025-01-03").id == 1


def test_id_allocation_counts_numeric_head_of_malformed_line(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text("1|a|pending|low|2025-01-01\n7|truncated\n", "utf-8")

    store = TaskStore(path)
    assert [t.id for t in store.list_tasks()] == [1]
    assert store.add_task(title="c", priority="low", due_date="2025-01-03").id == 8


def test_records_survive_reopen_in_order(store: TaskStore) -> None:
    created = [
        store.add_task(title=f"task {i}", priority=p, due_date=f"2025-0{i}-01")
        for i, p in enumerate(["high", "low", "medium", "low"], start=1)
    ]

    reopened = TaskStore(store.path)
    assert reopened.list_tasks() == created


def test_add_terminates_last_line_without_newline(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text("1|a|pending|low|2025-01-01", "utf-8")

    store = TaskStore(path)
    store.add_task(title="b", priority="high", due_date="2025-01-02")

    assert path.read_text("utf-8") == (
        "1|a|pending|low|2025-01-01\n2|b|pending|high|2025-01-02\n"
    )


def test_constructor_creates_missing_file(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "tasks.txt"
    store = TaskStore(path)
    assert path.exists()
    assert store.count_tasks() == 0


@pytest.mark.parametrize("delimiter", ["", "||", "\n", "-", "7", "a", "P", " ", "\t"])
def test_constructor_rejects_bad_delimiter(tmp_path: Path, delimiter: str) -> None:
    with pytest.raises(ValueError):
        TaskStore(tmp_path / "tasks.txt", delimiter=delimiter)


def test_custom_delimiter(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.txt", delimiter=";")
    task = store.add_task(title="a;b|c", priority="low", due_date="2025-01-01")

    assert task.title == "ab|c"
    assert store.path.read_text("utf-8") == "1;ab|c;pending;low;2025-01-01\n"
    assert store.get_task(1) == task


def test_get_unknown_id_raises(store: TaskStore) -> None:
    with pytest.raises(TaskNotFoundError) as exc:
        store.get_task(42)
    assert exc.value.task_id == 42


def test_update_partial_keeps_other_fields(store: TaskStore) -> None:
    task = store.add_task(title="Fix login", priority="high", due_date="2025-05-01")

    updated = store.update_task(task.id, status="in-progress")

    assert updated.status == TaskStatus.IN_PROGRESS
    assert (updated.title, updated.priority, updated.due_date) == (
        "Fix login",
        TaskPriority.HIGH,
        "2025-05-01",
    )
    assert store.get_task(task.id) == updated


def test_update_replaces_in_place(store: TaskStore) -> None:
    for title in ("a", "b", "c"):
        store.add_task(title=title, priority="low", due_date="2025-01-01")

    store.update_task(2, title="B!", priority="high", due_date="2025-12-31", status="DONE")

    assert store.path.read_text("utf-8").splitlines() == [
        "1|a|pending|low|2025-01-01",
        "2|B!|done|high|2025-12-31",
        "3|c|pending|low|2025-01-01",
    ]


def test_update_without_fields_returns_current(store: TaskStore) -> None:
    task = store.add_task(title="a", priority="low", due_date="2025-01-01")
    assert store.update_task(task.id) == task


def test_update_validates_before_writing(store: TaskStore) -> None:
    store.add_task(title="a", priority="low", due_date="2025-01-01")
    before = store.path.read_text("utf-8")

    with pytest.raises(ValidationError):
        store.update_task(1, title="ok", status="blocked")
    with pytest.raises(ValidationError):
        store.update_task(1, due_date="2025-13-01")
    with pytest.raises(ValidationError):
        store.update_task(1, title="|")

    assert store.path.read_text("utf-8") == before


def test_update_unknown_id_raises(store: TaskStore) -> None:
    with pytest.raises(TaskNotFoundError):
        store.update_task(7, status="done")


def test_delete_then_get_and_delete_again_raise(store: TaskStore) -> None:
    task = store.add_task(title="a", priority="low", due_date="2025-01-01")
    store.delete_task(task.id)

    with pytest.raises(TaskNotFoundError):
        store.get_task(task.id)
    with pytest.raises(TaskNotFoundError):
        store.delete_task(task.id)


def test_malformed_lines_are_skipped_and_preserved(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text(
        "1|Alpha|pending|high|2025-01-01\n"
        "garbage line\n"
        "x|Bad id|pending|low|2025-01-01\n"
        "\n"
        "2|Beta|done|low|2025-02-01\n"
        "3|Gamma|pending|medium|2025-03-01\n",
        "utf-8",
    )
    store = TaskStore(path)

    assert [t.id for t in store.list_tasks()] == [1, 2, 3]
    assert store.summary_report().total == 3

    store.update_task(1, status="done")
    store.delete_task(3)

    assert path.read_text("utf-8") == (
        "1|Alpha|done|high|2025-01-01\n"
        "garbage line\n"
        "x|Bad id|pending|low|2025-01-01\n"
        "\n"
        "2|Beta|done|low|2025-02-01\n"
    )


def test_lines_with_bad_title_or_due_date_are_malformed(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text(
        "1|Empty due|pending|high|\n"
        "2|Junk due|pending|low|soon\n"
        "3||pending|low|2025-01-01\n"
        "4|Feb 30|pending|low|2025-02-30\n"
        "5|Padded| pending|low| 2025-01-01\n"
        "6|Fine|pending|low|2025-06-01\n",
        "utf-8",
    )
    store = TaskStore(path)

    assert [t.id for t in store.list_tasks()] == [6]
    assert [t.id for t in store.overdue_report("2025-06-15")] == [6]
    assert [t.id for t in store.sort_tasks("due_date")] == [6]
    with pytest.raises(TaskNotFoundError):
        store.get_task(1)

    # malformed lines still reserve their ids and survive rewrites
    assert store.add_task(title="new", priority="low", due_date="2025-07-01").id == 7
    store.delete_task(6)
    assert path.read_text("utf-8") == (
        "1|Empty due|pending|high|\n"
        "2|Junk due|pending|low|soon\n"
        "3||pending|low|2025-01-01\n"
        "4|Feb 30|pending|low|2025-02-30\n"
        "5|Padded| pending|low| 2025-01-01\n"
        "7|new|pending|low|2025-07-01\n"
    )


def test_crlf_line_endings_survive_rewrite(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_bytes(
        b"1|Alpha|pending|high|2025-01-01\r\n"
        b"garbage line\r\n"
        b"2|Beta|pending|low|2025-02-01\r\n"
    )
    store = TaskStore(path)

    assert _titles(store.list_tasks()) == ["Alpha", "Beta"]
    store.update_task(1, status="done")
    store.delete_task(2)

    assert path.read_bytes() == b"1|Alpha|done|high|2025-01-01\r\ngarbage line\r\n"


def test_filters_never_match_the_unknown_sentinel(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text(
        "1|Odd|blocked|urgent|2025-01-01\n2|Normal|pending|low|2025-01-01\n", "utf-8"
    )
    store = TaskStore(path)

    assert store.list_tasks(status="unknown") == []
    assert store.list_tasks(priority="UNKNOWN") == []
    assert _titles(store.list_tasks(status="pending")) == ["Normal"]


def test_unrecognized_values_are_tolerated_and_kept(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text("1|Odd|blocked|urgent|2025-01-01\n", "utf-8")
    store = TaskStore(path)

    task = store.get_task(1)
    assert task.status == TaskStatus.UNKNOWN
    assert task.priority == TaskPriority.UNKNOWN
    assert store.summary_report() == StatusSummary(pending=0, in_progress=0, done=0, total=1)

    store.update_task(1, title="Renamed")
    assert path.read_text("utf-8") == "1|Renamed|blocked|urgent|2025-01-01\n"


def test_list_filters_are_case_insensitive(store: TaskStore) -> None:
    store.add_task(title="a", priority="high", due_date="2025-01-01")
    store.add_task(title="b", priority="low", due_date="2025-01-01")
    store.add_task(title="c", priority="high", due_date="2025-01-01")
    store.update_task(2, status="done")

    assert _titles(store.list_tasks()) == ["a", "b", "c"]
    assert _titles(store.list_tasks(priority="HIGH")) == ["a", "c"]
    assert _titles(store.list_tasks(status="Done")) == ["b"]
    assert _titles(store.list_tasks(status="")) == ["a", "b", "c"]
    assert store.list_tasks(status="nope") == []


def test_list_rejects_two_filters(store: TaskStore) -> None:
    with pytest.raises(ValidationError):
        store.list_tasks(status="done", priority="high")


def test_search_is_case_insensitive_regex(store: TaskStore) -> None:
    for title in ("Login Error", "Fix bug", "Deploy release"):
        store.add_task(title=title, priority="low", due_date="2025-01-01")

    assert _titles(store.search_tasks("bug|error")) == ["Login Error", "Fix bug"]
    assert _titles(store.search_tasks("^deploy")) == ["Deploy release"]


def test_search_invalid_regex_matches_nothing(store: TaskStore) -> None:
    store.add_task(title="a(b", priority="low", due_date="2025-01-01")
    assert store.search_tasks("a(") == []


def test_search_empty_pattern_rejected(store: TaskStore) -> None:
    with pytest.raises(ValidationError):
        store.search_tasks("")


def test_sort_by_priority_is_stable(store: TaskStore) -> None:
    for title, prio in [("A", "low"), ("B", "high"), ("C", "medium"), ("D", "high")]:
        store.add_task(title=title, priority=prio, due_date="2025-01-01")

    assert _titles(store.sort_tasks("priority")) == ["B", "D", "C", "A"]
    # direction only applies to due_date
    assert _titles(store.sort_tasks(SortKey.PRIORITY, SortDirection.DESC)) == ["B", "D", "C", "A"]


def test_sort_by_due_date_both_directions(store: TaskStore) -> None:
    for title, due in [("mid", "2025-06-01"), ("late", "2025-12-01"), ("early", "2024-01-31")]:
        store.add_task(title=title, priority="low", due_date=due)

    assert _titles(store.sort_tasks("due_date")) == ["early", "mid", "late"]
    assert _titles(store.sort_tasks("due_date", "desc")) == ["late", "mid", "early"]


def test_sort_by_status_is_alphabetical(store: TaskStore) -> None:
    for title in ("p", "d", "i"):
        store.add_task(title=title, priority="low", due_date="2025-01-01")
    store.update_task(2, status="done")
    store.update_task(3, status="in-progress")

    assert _titles(store.sort_tasks("status")) == ["d", "i", "p"]


def test_sort_rejects_unknown_key_or_direction(store: TaskStore) -> None:
    with pytest.raises(ValidationError):
        store.sort_tasks("title")
    with pytest.raises(ValidationError):
        store.sort_tasks("due_date", "sideways")


def test_summary_report_counts(store: TaskStore) -> None:
    assert store.summary_report().as_dict() == {
        "pending": 0,
        "in_progress": 0,
        "done": 0,
        "total": 0,
    }

    for title in ("a", "b", "c", "d"):
        store.add_task(title=title, priority="low", due_date="2025-01-01")
    store.update_task(2, status="in-progress")
    store.update_task(3, status="done")

    assert store.summary_report() == StatusSummary(pending=2, in_progress=1, done=1, total=4)


def test_overdue_report(store: TaskStore) -> None:
    store.add_task(title="finished", priority="low", due_date="2025-06-10")
    store.add_task(title="late", priority="low", due_date="2025-06-01")
    store.add_task(title="upcoming", priority="low", due_date="2025-06-20")
    store.add_task(title="due today", priority="low", due_date="2025-06-15")
    store.update_task(1, status="done")

    assert _titles(store.overdue_report("2025-06-15")) == ["late"]
    assert _titles(store.overdue_report(date(2025, 6, 16))) == ["late", "due today"]


def test_overdue_report_rejects_bad_today(store: TaskStore) -> None:
    with pytest.raises(ValidationError) as exc:
        store.overdue_report("15/06/2025")
    assert exc.value.field == "today"


def test_priority_report_groups_in_fixed_order(store: TaskStore) -> None:
    for title, prio in [("a", "low"), ("b", "high"), ("c", "low"), ("d", "high")]:
        store.add_task(title=title, priority=prio, due_date="2025-01-01")

    report = store.priority_report()

    assert list(report) == [TaskPriority.HIGH, TaskPriority.MEDIUM, TaskPriority.LOW]
    assert _titles(report[TaskPriority.HIGH]) == ["b", "d"]
    assert report[TaskPriority.MEDIUM] == []
    assert _titles(report[TaskPriority.LOW]) == ["a", "c"]
