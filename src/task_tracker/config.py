# src/task_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- File paths are configuration, never command-line flags.
- Values are parsed leniently: a bad value falls back to the default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .tasks.task_validation import is_usable_delimiter

ENV_PREFIX = "TASKTRACK"

DEFAULT_DELIMITER = "|"
COLOR_MODES = ("auto", "always", "never")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    return value if value in choices else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_to_file: bool

    # ---- Local data paths ----
    data_dir: Path
    tasks_file: Path
    export_file: Path

    # ---- Storage format ----
    delimiter: str

    # ---- Terminal ----
    color: str  # auto | always | never

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "task-tracker") or "task-tracker"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")
        log_to_file = _env_bool(_k("LOG_FILE"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path("."))
        tasks_file = _env_path(_k("TASKS_FILE"), data_dir / "tasks.txt")
        export_file = _env_path(_k("EXPORT_FILE"), data_dir / "tasks_export.csv")

        delimiter = _env(_k("DELIMITER"), DEFAULT_DELIMITER)
        if not is_usable_delimiter(delimiter):
            # Logging is not configured at import time; bootstrap warns via rejected_delimiter().
            delimiter = DEFAULT_DELIMITER

        color = _env_choice(_k("COLOR"), COLOR_MODES, "auto")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_to_file=log_to_file,
            data_dir=data_dir,
            tasks_file=tasks_file,
            export_file=export_file,
            delimiter=delimiter,
            color=color,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS


def rejected_delimiter(settings: Settings | None = None) -> str | None:
    """Raw TASKTRACK_DELIMITER value when it was set but not usable, else None."""
    settings = settings or SETTINGS
    raw = os.getenv(_k("DELIMITER"))
    if raw is None or raw == settings.delimiter:
        return None
    return raw
