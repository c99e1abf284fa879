"""
FILE: taskboard/core/validation.py
PURPOSE: Acceptance rules for tasks and columns before they enter the board
EXPORTS:
  - validate_column_title(title, columns, exclude_id) -> Optional[str]
  - validate_task_fields(data, categories, partial) -> Dict[str, str]
DEPENDENCIES:
  - taskboard.core.constants (limits, priorities)
  - taskboard.core.models (parse_date)
NOTES:
  - Validators never raise; they return messages the caller can render
  - The board turns a non-empty result into ValidationError
  - Status is checked by the board, which knows the live column set
"""

from datetime import date
from typing import Any, Dict, Iterable, Optional

from .constants import (
    COLUMN_TITLE_MAX,
    COLUMN_TITLE_MIN,
    TASK_DESCRIPTION_MIN,
    TASK_TITLE_MIN,
    VALID_PRIORITIES,
)
from .models import Column, parse_date


def validate_column_title(
    title: Optional[str],
    columns: Iterable[Column],
    exclude_id: Optional[str] = None,
) -> Optional[str]:
    """
    Check a column title against length and uniqueness rules.

    Args:
        title: Proposed title (surrounding whitespace is ignored)
        columns: Current column set
        exclude_id: Column being renamed, skipped in the duplicate check

    Returns:
        Error message, or None if the title is acceptable
    """
    title = (title or "").strip()
    if not title:
        return "Column title is required"
    if len(title) < COLUMN_TITLE_MIN:
        return f"Column title must be at least {COLUMN_TITLE_MIN} characters"
    if len(title) > COLUMN_TITLE_MAX:
        return f"Column title must be at most {COLUMN_TITLE_MAX} characters"
    if not title.isprintable():
        return "Column title must contain printable characters only"

    # Case-insensitive duplicate check
    lowered = title.lower()
    for column in columns:
        if column.id != exclude_id and column.title.strip().lower() == lowered:
            return "A column with this name already exists"

    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_task_fields(
    data: Dict[str, Any],
    categories: Optional[Iterable[str]] = None,
    partial: bool = False,
) -> Dict[str, str]:
    """
    Check task fields and collect every violation.

    Args:
        data: Field values keyed by Task attribute name
        categories: Allow-list for category; None or empty skips the check
        partial: Only check the fields present in data (updates)

    Returns:
        Mapping of field name to message; empty when everything is valid
    """
    errors: Dict[str, str] = {}

    def supplied(name: str) -> bool:
        return not partial or name in data

    if supplied("title"):
        title = (data.get("title") or "").strip()
        if not title:
            errors["title"] = "Title is required"
        elif len(title) < TASK_TITLE_MIN:
            errors["title"] = f"Title must be at least {TASK_TITLE_MIN} characters"

    if supplied("description"):
        description = (data.get("description") or "").strip()
        if not description:
            errors["description"] = "Description is required"
        elif len(description) < TASK_DESCRIPTION_MIN:
            errors["description"] = (
                f"Description must be at least {TASK_DESCRIPTION_MIN} characters"
            )

    if supplied("category"):
        category = (data.get("category") or "").strip()
        allowed = list(categories or [])
        if not category:
            errors["category"] = "Category is required"
        elif allowed and category not in allowed:
            errors["category"] = f"Unknown category '{category}'"

    if supplied("priority"):
        if data.get("priority") not in VALID_PRIORITIES:
            errors["priority"] = f"Priority must be one of: {', '.join(VALID_PRIORITIES)}"

    if supplied("due_date"):
        due = data.get("due_date")
        if due is None or due == "":
            errors["due_date"] = "Due date is required"
        elif not isinstance(due, date):
            try:
                parse_date(due)
            except (TypeError, ValueError):
                errors["due_date"] = "Due date must be a calendar date (YYYY-MM-DD)"

    if "estimated_hours" in data and data["estimated_hours"] is not None:
        hours = data["estimated_hours"]
        if not _is_number(hours) or hours <= 0:
            errors["estimated_hours"] = "Estimated hours must be a positive number"

    if "actual_hours" in data and data["actual_hours"] is not None:
        hours = data["actual_hours"]
        if not _is_number(hours) or hours < 0:
            errors["actual_hours"] = "Actual hours must be a non-negative number"

    for name in ("assignees", "tags", "attachments"):
        if isinstance(data.get(name), str):
            errors[name] = "Must be a list of values, not a single string"

    if supplied("assignees") and "assignees" not in errors:
        if not [a for a in data.get("assignees") or [] if str(a).strip()]:
            errors["assignees"] = "At least one assignee is required"

    return errors
