# src/task_tracker/cli/theme.py

"""Color & style helpers.

Decisions:
- Plain 16-color ANSI codes; nothing fancier is needed for a task table.
- "auto" mode enables color only on a TTY, unless FORCE_COLOR is set.
- NO_COLOR always wins in "auto" mode.
"""

from __future__ import annotations

import os
import sys
from typing import TextIO

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[0;33m"
BLUE = "\033[0;34m"
CYAN = "\033[0;36m"

BRED = "\033[1;31m"
BGREEN = "\033[1;32m"
BYELLOW = "\033[1;33m"
BBLUE = "\033[1;34m"
BCYAN = "\033[1;36m"
WHITE = "\033[1;37m"

STATUS_STYLE = {
    "pending": YELLOW,
    "in-progress": BLUE,
    "done": GREEN,
}

PRIORITY_STYLE = {
    "high": BRED,
    "medium": BYELLOW,
    "low": GREEN,
}


def color_enabled(mode: str = "auto", stream: TextIO | None = None) -> bool:
    """Resolve a TASKTRACK_COLOR mode (auto/always/never) to on/off."""
    if mode == "always":
        return True
    if mode == "never":
        return False
    if os.environ.get("NO_COLOR") is not None:
        return False
    if os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}:
        return True
    stream = stream or sys.stdout
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


class Theme:
    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled

    def color(self, text: str, *styles: str) -> str:
        """Apply ANSI styles to a given text."""
        if not self.enabled or not any(styles):
            return text
        return "".join(styles) + text + RESET

    def status(self, value: str) -> str:
        return self.color(value, STATUS_STYLE.get(value, ""))

    def priority(self, value: str) -> str:
        return self.color(value, PRIORITY_STYLE.get(value, ""))
