"""
Todo subsystem.

Components:
- todo_models.py: data structures (Todo, TodoStatus, User) and time helpers
- todo_store.py: in-memory todo storage with monotonic updated_at
- user_store.py: in-memory user storage (lookup used by the service)
- todo_scheduler.py: asyncio recurring scheduler that drives reminder sweeps
"""
