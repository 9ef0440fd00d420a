# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..core.ports import Console
from ..core.state import AppState
from ..tasks import task_api
from ..tasks.task_errors import TaskNotFoundError, ValidationError
from ..tasks.task_models import SortDirection, SortKey, Task
from ..tasks.task_validation import DEFAULT_DELIMITER
from . import prompts
from .render import (
    error,
    header,
    info,
    priority_block,
    rule,
    success,
    summary_block,
    table_footer,
    table_header,
    task_row,
    task_table,
    warn,
)
from .theme import BCYAN, BRED, WHITE, Theme

MenuHandler = Callable[[AppState, Console], None]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MenuItem:
    key: str
    label: str
    handler: MenuHandler
    section: str | None = None


class MenuRegistry:
    """Numbered-choice registry used by the console menus (1 = Add, 2 = List, ...)."""

    def __init__(self, title: str) -> None:
        self.title = title
        self._items: dict[str, MenuItem] = {}

    def register(
        self,
        key: str,
        label: str,
        handler: MenuHandler,
        *,
        section: str | None = None,
    ) -> None:
        self._items[key.strip()] = MenuItem(key=key.strip(), label=label, handler=handler, section=section)

    def keys(self) -> list[str]:
        return list(self._items)

    def handle(self, state: AppState, choice: str, console: Console) -> bool:
        """
        Run the handler registered for `choice`.
        Returns False if the choice is unknown (nothing was run).
        """
        item = self._items.get(choice.strip())
        if item is None:
            return False
        logger.debug("Menu %r choice=%s (%s)", self.title, item.key, item.label)
        item.handler(state, console)
        return True

    def build_menu(self, theme: Theme) -> list[str]:
        lines: list[str] = []
        section: str | None = None
        for item in self._items.values():
            if item.section and item.section != section:
                section = item.section
                banner = f"── {section} ".ljust(44, "─")
                lines.append("  " + theme.color(banner, BCYAN))
            lines.append(f"  {theme.color(item.key, WHITE)}. {item.label}")
        return lines


main_menu = MenuRegistry("Main Menu")
reports_menu = MenuRegistry("Reports")


# ---- helpers ----

def _theme(state: AppState) -> Theme:
    return Theme(enabled=bool(getattr(state, "color_enabled", False)))


def _say_all(console: Console, lines: list[str]) -> None:
    for line in lines:
        console.say(line)


def _delimiter(state: AppState) -> str:
    return str(getattr(state.settings, "delimiter", DEFAULT_DELIMITER) or DEFAULT_DELIMITER)


def _lookup(state: AppState, console: Console, theme: Theme, prompt: str) -> Task | None:
    raw, task_id = prompts.ask_task_id(console, prompt)
    if task_id is None:
        console.say(error(theme, f"Invalid task ID: {raw!r}."))
        return None
    try:
        return state.task_store.get_task(task_id)
    except TaskNotFoundError as e:
        console.say(error(theme, str(e)))
        return None


# ---- main menu actions ----

def cmd_add(state: AppState, console: Console) -> None:
    theme = _theme(state)
    _say_all(console, header(theme, "Add New Task"))

    title = prompts.ask_title(console, theme, delimiter=_delimiter(state))
    priority = prompts.ask_priority(console, theme)
    due_date = prompts.ask_due_date(console, theme)

    task = state.task_store.add_task(title=title, priority=priority, due_date=due_date)
    console.say(success(theme, f'Task #{task.id} "{task.title}" added successfully.'))
    console.pause()


def cmd_list(state: AppState, console: Console) -> None:
    theme = _theme(state)
    _say_all(console, header(theme, "List Tasks"))

    if state.task_store.count_tasks() == 0:
        console.say(warn(theme, "No tasks found."))
        console.pause()
        return

    console.say(
        f"  Filter by:  {theme.color('1', WHITE)} Status   "
        f"{theme.color('2', WHITE)} Priority   {theme.color('3', WHITE)} All"
    )
    choice = console.ask("  Choice [3]: ").strip() or "3"

    status: str | None = None
    priority: str | None = None
    if choice == "1":
        status = console.ask("  Status (pending/in-progress/done): ").strip()
    elif choice == "2":
        priority = console.ask("  Priority (high/medium/low): ").strip()

    tasks = state.task_store.list_tasks(status=status or None, priority=priority or None)
    _say_all(console, task_table(theme, tasks))
    console.pause()


def cmd_update(state: AppState, console: Console) -> None:
    theme = _theme(state)
    _say_all(console, header(theme, "Update Task"))

    task = _lookup(state, console, theme, "  Enter Task ID to update: ")
    if task is None:
        console.pause()
        return

    console.say("")
    console.say("  Current values:")
    _say_all(console, table_header(theme))
    console.say(task_row(theme, task))
    console.say("")

    title = prompts.ask_title(console, theme, delimiter=_delimiter(state), current=task.title)
    status = prompts.ask_status(console, theme, current=task.status.value)
    priority = prompts.ask_priority(console, theme, current=task.priority.value)
    due_date = prompts.ask_due_date(console, theme, current=task.due_date)

    try:
        state.task_store.update_task(
            task.id, title=title, status=status, priority=priority, due_date=due_date
        )
    except TaskNotFoundError as e:
        # file changed under us between lookup and write
        console.say(error(theme, str(e)))
    else:
        console.say(success(theme, f"Task #{task.id} updated successfully."))
    console.pause()


def cmd_delete(state: AppState, console: Console) -> None:
    theme = _theme(state)
    _say_all(console, header(theme, "Delete Task"))

    task = _lookup(state, console, theme, "  Enter Task ID to delete: ")
    if task is None:
        console.pause()
        return

    _say_all(console, table_header(theme))
    console.say(task_row(theme, task))
    console.say("")

    question = theme.color("Are you sure you want to delete this task? (yes/no):", BRED)
    if prompts.confirm(console, f"  {question} "):
        try:
            state.task_store.delete_task(task.id)
        except TaskNotFoundError as e:
            console.say(error(theme, str(e)))
        else:
            console.say(success(theme, f"Task #{task.id} deleted."))
    else:
        console.say(info(theme, "Deletion cancelled."))
    console.pause()


def cmd_search(state: AppState, console: Console) -> None:
    theme = _theme(state)
    _say_all(console, header(theme, "Search Tasks"))

    keyword = console.ask("  Enter keyword (supports regex): ").strip()
    try:
        tasks = state.task_store.search_tasks(keyword)
    except ValidationError as e:
        console.say(warn(theme, e.message))
        console.pause()
        return

    _say_all(console, task_table(theme, tasks, footer=f'{{n}} task(s) found for "{keyword}".'))
    console.pause()


def cmd_reports(state: AppState, console: Console) -> None:
    theme = _theme(state)
    while True:
        _say_all(console, header(theme, "Reports"))
        _say_all(console, reports_menu.build_menu(theme))
        console.say(f"  {theme.color('0', WHITE)}. Back to Main Menu")
        console.say("")
        choice = console.ask("  Choice: ").strip()
        if choice == "0":
            return
        if not reports_menu.handle(state, choice, console):
            console.say(warn(theme, "Invalid choice. Please try again."))


SORT_CHOICES: dict[str, tuple[SortKey, SortDirection]] = {
    "1": (SortKey.DUE_DATE, SortDirection.ASC),
    "2": (SortKey.DUE_DATE, SortDirection.DESC),
    "3": (SortKey.PRIORITY, SortDirection.ASC),
    "4": (SortKey.STATUS, SortDirection.ASC),
}


def cmd_sort(state: AppState, console: Console) -> None:
    theme = _theme(state)
    _say_all(console, header(theme, "Sort Tasks"))
    one, two, three, four = (theme.color(k, WHITE) for k in SORT_CHOICES)
    console.say(f"  Sort by:  {one} Due Date (asc)   {two} Due Date (desc)")
    console.say(f"            {three} Priority         {four} Status")

    choice = console.ask("  Choice: ").strip()
    picked = SORT_CHOICES.get(choice)
    if picked is None:
        console.say(warn(theme, "Invalid choice."))
        console.pause()
        return

    key, direction = picked
    _say_all(console, task_table(theme, state.task_store.sort_tasks(key, direction)))
    console.pause()


def cmd_export(state: AppState, console: Console) -> None:
    theme = _theme(state)
    _say_all(console, header(theme, "Export to CSV"))
    try:
        path, n = task_api.export_tasks(state)
    except OSError as e:
        logger.exception("CSV export failed.")
        console.say(error(theme, f"Export failed: {e}"))
    else:
        console.say(success(theme, f"{n} task(s) exported to {path}"))
    console.pause()


# ---- reports sub-menu actions ----

def report_summary(state: AppState, console: Console) -> None:
    theme = _theme(state)
    _say_all(console, header(theme, "Report: Task Summary"))
    _say_all(console, summary_block(theme, state.task_store.summary_report()))
    console.pause()


def report_overdue(state: AppState, console: Console) -> None:
    theme = _theme(state)
    _say_all(console, header(theme, "Report: Overdue Tasks"))

    tasks = task_api.overdue_today(state)
    _say_all(console, table_header(theme))
    for task in tasks:
        console.say(task_row(theme, task, overdue=True))
    console.say(rule(theme))

    if not tasks:
        console.say(success(theme, "No overdue tasks!"))
    else:
        console.say(warn(theme, f"{len(tasks)} overdue task(s) found."))
    console.pause()


def report_priority(state: AppState, console: Console) -> None:
    theme = _theme(state)
    _say_all(console, header(theme, "Report: Tasks by Priority"))
    _say_all(console, priority_block(theme, state.task_store.priority_report()))
    console.pause()


main_menu.register("1", "Add Task", cmd_add, section="TASKS")
main_menu.register("2", "List Tasks", cmd_list, section="TASKS")
main_menu.register("3", "Update Task", cmd_update, section="TASKS")
main_menu.register("4", "Delete Task", cmd_delete, section="TASKS")
main_menu.register("5", "Search Tasks", cmd_search, section="TASKS")
main_menu.register("6", "Reports", cmd_reports, section="TOOLS")
main_menu.register("7", "Sort Tasks", cmd_sort, section="TOOLS")
main_menu.register("8", "Export to CSV", cmd_export, section="TOOLS")

reports_menu.register("1", "Task Summary (counts per status)", report_summary)
reports_menu.register("2", "Overdue Tasks", report_overdue)
reports_menu.register("3", "Priority Report", report_priority)
