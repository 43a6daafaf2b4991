# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
See src/todo_reminder/config.py for parsing and defaults.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODO_REMINDER_APP_NAME": "App display name (default: todo-reminder).",
    "TODO_REMINDER_LOG_LEVEL": "Console logging level (default: INFO).",
    "TODO_REMINDER_SWEEP_LOG_LEVEL": (
        "Console level for scheduler chatter and sweeps that changed nothing (default: WARNING)."
    ),
    "TODO_REMINDER_DATA_DIR": "Local data directory for logs (default: .local/todo_reminder).",
    # Storage
    "TODO_REMINDER_REPOSITORY_KIND": "Repository implementation (default: memory; only memory exists).",
    # Reminder sweeps
    "TODO_REMINDER_REMINDER_TASK_NAME": "Recurring task name (default: reminder-check).",
    "TODO_REMINDER_REMINDER_INTERVAL_SECONDS": "Seconds between reminder sweeps (default: 60).",
    # Connectors
    "TODO_REMINDER_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
}
