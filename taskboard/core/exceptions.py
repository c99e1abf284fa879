"""
FILE: taskboard/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - TaskboardError (base exception)
  - TaskNotFoundError
  - ColumnNotFoundError
  - ValidationError
  - ColumnInUseError
  - InvalidInputError
  - PersistenceError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from TaskboardError for easy catching
  - Exceptions include context (IDs, field errors) for helpful error messages
  - Board layer raises these, CLI/REPL layers catch and display
"""

from typing import Dict, List


class TaskboardError(Exception):
    """Base exception for all Taskboard errors."""
    pass


class TaskNotFoundError(TaskboardError):
    """Task with given ID doesn't exist."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class ColumnNotFoundError(TaskboardError):
    """Column with given ID doesn't exist."""

    def __init__(self, column_id: str):
        self.column_id = column_id
        super().__init__(f"Column {column_id} not found")


class ValidationError(TaskboardError):
    """One or more fields failed validation.

    ``errors`` maps field name to a message that can be shown to the user.
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        details = "; ".join(f"{field}: {message}" for field, message in self.errors.items())
        super().__init__(f"Validation failed ({details})")


class ColumnInUseError(TaskboardError):
    """Column still has tasks pointing at it and cannot be deleted."""

    def __init__(self, column_id: str, task_ids: List[str]):
        self.column_id = column_id
        self.task_ids = list(task_ids)
        super().__init__(
            f"Column {column_id} still has {len(self.task_ids)} task(s): "
            f"{', '.join(self.task_ids)}"
        )


class InvalidInputError(TaskboardError):
    """Input could not be parsed."""

    def __init__(self, message: str):
        super().__init__(message)


class PersistenceError(TaskboardError):
    """Board snapshot could not be read or written."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not access board file {path}: {reason}")
