# src/task_tracker/cli/render.py

"""
Text rendering for the menu: tables, report blocks, status messages.

Every function returns lines (no printing) so menu actions decide where output goes.
Cells are padded on the plain text first and colored afterwards; padding a
colored string would count the escape codes as visible characters.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from ..tasks.task_models import StatusSummary, Task, TaskPriority, TaskStatus
from .theme import BBLUE, BCYAN, BGREEN, BLUE, BRED, BYELLOW, DIM, GREEN, WHITE, YELLOW, Theme

W_ID = 5
W_TITLE = 28
W_STATUS = 12
W_PRIORITY = 9
RULE = "─" * 72
BANNER_RULE = "═" * 42


def _cell(plain: str, width: int, colored: str | None = None) -> str:
    pad = " " * max(0, width - len(plain))
    return (colored if colored is not None else plain) + pad


# ---- messages ----

def info(theme: Theme, text: str) -> str:
    return theme.color(f"ℹ  {text}", BCYAN)


def success(theme: Theme, text: str) -> str:
    return theme.color(f"✔  {text}", BGREEN)


def warn(theme: Theme, text: str) -> str:
    return theme.color(f"⚠  {text}", BYELLOW)


def error(theme: Theme, text: str) -> str:
    return theme.color(f"✖  {text}", BRED)


def header(theme: Theme, title: str) -> list[str]:
    return [
        "",
        theme.color(BANNER_RULE, BBLUE),
        theme.color(f"   {title}", WHITE),
        theme.color(BANNER_RULE, BBLUE),
    ]


# ---- task tables ----

def table_header(theme: Theme) -> list[str]:
    head = (
        _cell("ID", W_ID) + "  "
        + _cell("TITLE", W_TITLE) + "  "
        + _cell("STATUS", W_STATUS) + "  "
        + _cell("PRIORITY", W_PRIORITY) + "  "
        + "DUE DATE"
    )
    return ["", "  " + theme.color(head, BBLUE), "  " + theme.color(RULE, DIM)]


def task_row(theme: Theme, task: Task, *, overdue: bool = False, show_priority: bool = True) -> str:
    status = task.status.value
    priority = task.priority.value
    due = theme.color(task.due_date, BRED) if overdue else task.due_date

    parts = [
        _cell(str(task.id), W_ID, theme.color(str(task.id), WHITE)),
        _cell(task.title, W_TITLE),
        _cell(status, W_STATUS, theme.status(status)),
    ]
    if show_priority:
        parts.append(_cell(priority, W_PRIORITY, theme.priority(priority)))
    parts.append(due)
    return "  " + "  ".join(parts)


def rule(theme: Theme) -> str:
    return "  " + theme.color(RULE, DIM)


def table_footer(theme: Theme, text: str) -> list[str]:
    return [rule(theme), "  " + theme.color(text, DIM)]


def task_table(theme: Theme, tasks: Iterable[Task], *, footer: str = "{n} task(s) displayed.") -> list[str]:
    lines = table_header(theme)
    n = 0
    for task in tasks:
        lines.append(task_row(theme, task))
        n += 1
    lines.extend(table_footer(theme, footer.replace("{n}", str(n))))
    return lines


# ---- reports ----

def summary_block(theme: Theme, summary: StatusSummary) -> list[str]:
    rows = [
        (TaskStatus.PENDING.value, summary.pending, YELLOW),
        (TaskStatus.IN_PROGRESS.value, summary.in_progress, BLUE),
        (TaskStatus.DONE.value, summary.done, GREEN),
    ]
    lines = ["", "  " + theme.color("Status Breakdown", WHITE), "  " + theme.color("─" * 30, DIM)]
    for name, count, style in rows:
        lines.append("  " + _cell(name, 14, theme.status(name)) + "  " + theme.color(str(count), style))
    lines.append("  " + theme.color("─" * 30, DIM))
    lines.append("  " + theme.color(_cell("Total:", 14) + "  " + str(summary.total), WHITE))
    return lines


def priority_block(theme: Theme, groups: Mapping[TaskPriority, list[Task]]) -> list[str]:
    lines: list[str] = []
    for prio, tasks in groups.items():
        lines.append("")
        lines.append("  " + theme.priority(prio.value) + " " + theme.color("─" * 33, DIM))
        if not tasks:
            lines.append("  " + theme.color("No tasks with this priority.", DIM))
            continue
        for task in tasks:
            lines.append(task_row(theme, task, show_priority=False))
    return lines


def stats_bar(theme: Theme, summary: StatusSummary) -> str:
    return (
        "  "
        + theme.color(f"Tasks: {summary.total} total  │  ", DIM)
        + theme.color(f"{summary.pending} pending", YELLOW)
        + theme.color("  │  ", DIM)
        + theme.color(f"{summary.done} done", GREEN)
    )
