from __future__ import annotations


class TaskError(Exception):
    """Base class for failures the HTTP layer knows how to report."""


class InvalidInput(TaskError):
    """Malformed id or request body. Raised before any store access."""

    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message)
        self.errors = errors or []


class NotFound(TaskError):
    def __init__(self, task_id: int):
        super().__init__(f"Task with id {task_id} not found")
        self.task_id = task_id


class PersistenceError(TaskError):
    """A storage write failed. The message is safe to show to clients."""
