# src/todo_reminder/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta

from ..core.errors import NotFoundError, ValidationError
from ..core.state import AppState
from ..todos.todo_models import Todo, utc_now

CommandHandler = Callable[[AppState, list[str]], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Service errors are turned into client-facing replies here; anything
        else propagates to the connector.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return await handler(state, args)
        except ValidationError as e:
            return f"Invalid request: {e}"
        except NotFoundError as e:
            return f"Not found: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def format_todo(todo: Todo) -> str:
    parts = [f"{todo.id} [{todo.status.value}] {todo.title}"]
    if todo.description:
        parts.append(f"- {todo.description}")
    if todo.remind_at is not None:
        parts.append(f"(remind at {todo.remind_at.isoformat()})")
    if todo.deleted_at is not None:
        parts.append("(deleted)")
    return " ".join(parts)


def _parse_remind_token(token: str) -> datetime | str:
    """
    "@now"      -> current time
    "@+15"      -> 15 minutes from now
    "@<iso>"    -> passed through for the service to validate
    """
    raw = token[1:]
    if raw.lower() == "now":
        return utc_now()
    if raw.startswith("+") and raw[1:].isdigit():
        return utc_now() + timedelta(minutes=int(raw[1:]))
    return raw


async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    scheduled = ", ".join(state.scheduler.names()) or "none"
    return (
        "Status:\n"
        f"  Storage: {getattr(settings, 'repository_kind', 'memory')} "
        f"({state.todo_store.count_todos()} todos)\n"
        f"  Reminder interval: {getattr(settings, 'reminder_interval_seconds', '?')}s\n"
        f"  Recurring tasks: {scheduled}"
    )


async def cmd_user(state: AppState, args: list[str]) -> str:
    """/user <email> <name...> -> create a user"""
    if len(args) < 2:
        return "Usage: /user <email> <name>"
    try:
        user = await state.user_store.create(email=args[0], name=" ".join(args[1:]))
    except ValueError as e:
        raise ValidationError(str(e)) from e
    return f"User created: {user.id} ({user.name} <{user.email}>)"


async def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <user_id> <title...> [@now | @+<minutes> | @<iso datetime>]
    """
    if len(args) < 2:
        return "Usage: /add <user_id> <title> [@now | @+<minutes> | @<iso datetime>]"

    user_id = args[0]
    remind_at: datetime | str | None = None
    title_words: list[str] = []
    for token in args[1:]:
        if token.startswith("@") and len(token) > 1:
            remind_at = _parse_remind_token(token)
        else:
            title_words.append(token)

    todo = await state.service.create_todo(user_id, " ".join(title_words), remind_at=remind_at)
    return f"Todo created: {format_todo(todo)}"


async def cmd_todos(state: AppState, args: list[str]) -> str:
    """/todos <user_id> [all] [limit] [offset]"""
    if not args:
        return "Usage: /todos <user_id> [all] [limit] [offset]"

    user_id = args[0]
    rest = args[1:]
    include_deleted = bool(rest) and rest[0].lower() == "all"
    if include_deleted:
        rest = rest[1:]

    try:
        limit = int(rest[0]) if len(rest) > 0 else None
        offset = int(rest[1]) if len(rest) > 1 else 0
    except ValueError:
        return "limit and offset must be integers."

    if await state.user_store.find_by_id(user_id) is None:
        raise NotFoundError(f"User with id {user_id} not found")

    todos = await state.service.get_todos_by_user(
        user_id, limit=limit, offset=offset, include_deleted=include_deleted
    )
    if not todos:
        return f"No todos for user {user_id}."
    lines = [f"Todos for user {user_id}:"]
    lines.extend(f"  {format_todo(t)}" for t in todos)
    return "\n".join(lines)


async def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <todo_id>"
    todo = await state.service.complete_todo(args[0])
    return f"Completed: {format_todo(todo)}"


async def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /delete <todo_id>"
    todo = await state.service.delete_todo(args[0])
    return f"Deleted: {format_todo(todo)}"


async def cmd_sweep(state: AppState, args: list[str]) -> str:
    summary = await state.service.process_reminders()
    return (
        f"Reminder sweep: {summary.transitioned} of {summary.candidates} due todos "
        f"moved to REMINDER_DUE ({summary.duration_ms:.1f} ms)."
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show storage and scheduler status.")
registry.register("user", cmd_user, help_text="Create a user: /user <email> <name>.")
registry.register(
    "add",
    cmd_add,
    help_text="Create a todo: /add <user_id> <title> [@now | @+<minutes> | @<iso datetime>].",
)
registry.register(
    "todos", cmd_todos, help_text="List todos: /todos <user_id> [all] [limit] [offset].", aliases=["ls"]
)
registry.register("done", cmd_done, help_text="Complete a todo: /done <todo_id>.")
registry.register("delete", cmd_delete, help_text="Soft-delete a todo: /delete <todo_id>.", aliases=["rm"])
registry.register("sweep", cmd_sweep, help_text="Run a reminder sweep now.")
