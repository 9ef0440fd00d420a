# src/task_tracker/connectors/console_connector.py

from __future__ import annotations

import logging
import sys

from ..cli.commands import main_menu
from ..cli.render import error, stats_bar, warn
from ..cli.theme import BBLUE, BCYAN, BGREEN, DIM, RESET, WHITE, Theme
from ..core.ports import Console
from ..core.state import AppState
from ..tasks import task_api
from ..tasks.task_errors import TaskStoreError

logger = logging.getLogger(__name__)

BOX_WIDTH = 42


class TerminalConsole:
    """Console port over stdin/stdout."""

    def __init__(self, theme: Theme | None = None) -> None:
        self.theme = theme or Theme(enabled=False)

    def ask(self, prompt: str) -> str:
        return input(prompt)

    def say(self, text: str = "") -> None:
        print(text)

    def pause(self) -> None:
        print()
        input(self.theme.color("  Press [Enter] to continue...", DIM))

    def clear(self) -> None:
        # Best-effort: only clear a real terminal.
        if sys.stdout.isatty():
            sys.stdout.write("\033[H\033[2J")
            sys.stdout.flush()


def _pause(console: Console) -> bool:
    """Pause; False if the user closed input (EOF / Ctrl+C)."""
    try:
        console.pause()
    except (EOFError, KeyboardInterrupt):
        return False
    return True


def main_screen(state: AppState, theme: Theme) -> list[str]:
    app_name = str(getattr(state.settings, "app_name", "task-tracker")).upper()
    title = app_name.center(BOX_WIDTH)
    lines = [
        "",
        theme.color("  ╔" + "═" * BOX_WIDTH + "╗", BBLUE),
        theme.color("  ║" + title + "║", BBLUE),
        theme.color("  ╚" + "═" * BOX_WIDTH + "╝", BBLUE),
        "",
    ]
    lines.extend(main_menu.build_menu(theme))
    lines.append("  " + theme.color("─" * (BOX_WIDTH + 2), BCYAN))
    lines.append(f"  {theme.color('0', WHITE)}. Exit")
    lines.append("")

    summary = task_api.quick_stats(state)
    if summary is not None:
        lines.append(stats_bar(theme, summary))
        lines.append("")
    return lines


def run_console_loop(state: AppState, console: Console | None = None) -> None:
    """
    Main menu loop. Returns on "0", EOF or Ctrl+C.

    Menu actions handle store errors themselves; anything that still escapes is
    logged and reported, and the loop carries on.
    """
    theme = Theme(enabled=state.color_enabled)
    if console is None:
        console = TerminalConsole(theme)

    logger.info("Console menu started (tasks_file=%s).", getattr(state.settings, "tasks_file", "?"))
    choices = "0–" + main_menu.keys()[-1] if main_menu.keys() else "0"

    while True:
        console.clear()
        for line in main_screen(state, theme):
            console.say(line)

        try:
            choice = console.ask("  " + theme.color("Enter choice:", WHITE) + " ").strip()
            if choice == "0":
                console.say(f"\n  {theme.color('Goodbye!', BGREEN)}\n")
                logger.info("Console exit command received.")
                break

            if not main_menu.handle(state, choice, console):
                console.say(warn(theme, f"Invalid choice. Please select {choices}."))
                console.pause()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            console.say(RESET if theme.enabled else "")
            break
        except TaskStoreError as e:
            logger.warning("Menu action failed: %s", e)
            console.say(error(theme, str(e)))
        except OSError as e:
            logger.exception("File access failed.")
            console.say(error(theme, f"File error: {e}"))
        except Exception:
            logger.exception("Menu action crashed.")
            console.say(error(theme, "Internal error while handling that choice."))
        else:
            continue

        # An action failed: keep the message on screen before the menu redraws.
        if not _pause(console):
            break

    logger.info("Console menu finished.")
