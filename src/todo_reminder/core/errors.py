# src/todo_reminder/core/errors.py

from __future__ import annotations


class TodoReminderError(Exception):
    """Base class for errors raised by the service layer."""


class ValidationError(TodoReminderError):
    """Caller-supplied input failed a precondition (empty field, malformed date)."""


class NotFoundError(TodoReminderError):
    """A referenced entity does not exist."""
