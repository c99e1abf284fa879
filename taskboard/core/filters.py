"""
FILE: taskboard/core/filters.py
PURPOSE: Reduce the task set to a view given filter criteria
EXPORTS:
  - matches(task, criteria) -> bool
  - apply_filters(tasks, criteria) -> List[Task]
  - group_by_status(tasks, columns) -> Dict[str, List[Task]]
DEPENDENCIES:
  - taskboard.core.models (Task, Column, FilterCriteria)
  - taskboard.core.constants (ALL_COLUMN_ID)
NOTES:
  - Pure functions: no side effects, input order preserved
  - Criteria are ANDed; each set criterion is ORed over its members
  - Empty dimensions match everything
"""

from typing import Dict, Iterable, List

from .constants import ALL_COLUMN_ID
from .models import Column, FilterCriteria, Task


def _matches_search(task: Task, search: str) -> bool:
    needle = search.lower()
    if needle in task.title.lower() or needle in task.description.lower():
        return True
    return any(needle in tag.lower() for tag in task.tags)


def matches(task: Task, criteria: FilterCriteria) -> bool:
    """Return True if the task survives every set criterion."""
    if criteria.search and not _matches_search(task, criteria.search):
        return False

    if criteria.categories and task.category not in criteria.categories:
        return False

    if criteria.priorities and task.priority not in criteria.priorities:
        return False

    if criteria.assignees and criteria.assignees.isdisjoint(task.assignees):
        return False

    # Inclusive bounds, compared as calendar dates
    start, end = criteria.date_range.start, criteria.date_range.end
    if start is not None and task.due_date < start:
        return False
    if end is not None and task.due_date > end:
        return False

    return True


def apply_filters(tasks: Iterable[Task], criteria: FilterCriteria) -> List[Task]:
    """
    Filter tasks by criteria.

    Args:
        tasks: Tasks in board insertion order
        criteria: Filter criteria (FilterCriteria() matches all)

    Returns:
        New list with the matching tasks, order preserved
    """
    return [task for task in tasks if matches(task, criteria)]


def group_by_status(tasks: Iterable[Task], columns: Iterable[Column]) -> Dict[str, List[Task]]:
    """
    Bucket already-filtered tasks by column.

    Every column id gets a list, empty if nothing sits there. The reserved
    "all" column, when present, holds every task; it overlaps the others.
    Tasks whose status matches no column only show up under "all".
    """
    tasks = list(tasks)
    by_status: Dict[str, List[Task]] = {column.id: [] for column in columns}

    for task in tasks:
        if task.status != ALL_COLUMN_ID and task.status in by_status:
            by_status[task.status].append(task)

    if ALL_COLUMN_ID in by_status:
        by_status[ALL_COLUMN_ID] = tasks

    return by_status
