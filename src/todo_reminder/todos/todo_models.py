# src/todo_reminder/todos/todo_models.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum

Clock = Callable[[], datetime]


class TodoStatus(StrEnum):
    """
    Todo lifecycle status.

    PENDING -> REMINDER_DUE only through a reminder sweep.
    PENDING / REMINDER_DUE -> DONE through an explicit completion.
    Nothing leaves DONE. Soft deletion is tracked separately (deleted_at).
    """

    PENDING = "PENDING"
    REMINDER_DUE = "REMINDER_DUE"
    DONE = "DONE"


@dataclass(slots=True)
class Todo:
    id: str
    user_id: str
    title: str
    description: str | None
    status: TodoStatus
    remind_at: datetime | None
    deleted_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass(slots=True)
class User:
    id: str
    email: str
    name: str
    created_at: datetime


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_instant(value: datetime | str) -> datetime:
    """
    Normalize a datetime or ISO-8601 string to an aware UTC instant.

    Naive datetimes are treated as UTC. Raises ValueError for anything
    that does not describe a valid instant.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        raw = value.strip()
        if not raw:
            raise ValueError("empty datetime string")
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        parsed = datetime.fromisoformat(raw)
    else:
        raise ValueError(f"unsupported instant type: {type(value).__name__}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
