# src/todo_reminder/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every value has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO_REMINDER"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    sweep_log_level: str
    data_dir: Path

    # ---- Storage ----
    repository_kind: str

    # ---- Reminder sweeps ----
    reminder_task_name: str
    reminder_interval_seconds: float

    # ---- Connectors ----
    console_enabled: bool

    @staticmethod
    def from_env() -> "Settings":
        interval = _env_float(_k("REMINDER_INTERVAL_SECONDS"), 60.0)
        if interval <= 0:
            interval = 60.0

        return Settings(
            app_name=_env(_k("APP_NAME"), "todo-reminder") or "todo-reminder",
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
            sweep_log_level=_env(_k("SWEEP_LOG_LEVEL"), "WARNING"),
            data_dir=_env_path(_k("DATA_DIR"), Path(".local/todo_reminder")),
            repository_kind=_env(_k("REPOSITORY_KIND"), "memory").strip().lower() or "memory",
            reminder_task_name=_env(_k("REMINDER_TASK_NAME"), "reminder-check") or "reminder-check",
            reminder_interval_seconds=interval,
            console_enabled=_env_bool(_k("CONSOLE_ENABLED"), True),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
