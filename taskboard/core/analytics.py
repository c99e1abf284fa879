"""
FILE: taskboard/core/analytics.py
PURPOSE: Summary statistics over the full (unfiltered) task set
EXPORTS:
  - TaskAnalytics (dataclass)
  - compute_analytics(tasks, now) -> TaskAnalytics
  - is_overdue(task, now) -> bool
DEPENDENCIES:
  - collections.Counter (stdlib)
  - datetime (stdlib)
  - taskboard.core.models (Task)
NOTES:
  - Always computed live, never cached
  - "now" is passed in once per call so every task sees the same instant
  - Due dates count as UTC midnight of that day
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta, timezone
from typing import Dict, Iterable

from .constants import COMPLETED_COLUMN_ID, COMPLETED_WINDOW_DAYS
from .models import Task


@dataclass(frozen=True)
class TaskAnalytics:
    """Derived counts for the board."""

    total: int = 0
    by_status: Dict[str, int] = field(default_factory=dict)
    by_priority: Dict[str, int] = field(default_factory=dict)
    by_category: Dict[str, int] = field(default_factory=dict)
    overdue: int = 0
    completed_this_week: int = 0

    def to_dict(self) -> Dict:
        return {
            "total": self.total,
            "by_status": dict(self.by_status),
            "by_priority": dict(self.by_priority),
            "by_category": dict(self.by_category),
            "overdue": self.overdue,
            "completed_this_week": self.completed_this_week,
        }


def _due_moment(task: Task) -> datetime:
    return datetime.combine(task.due_date, time.min, tzinfo=timezone.utc)


def is_overdue(task: Task, now: datetime) -> bool:
    """Open task whose due date has already started."""
    return task.status != COMPLETED_COLUMN_ID and _due_moment(task) < now


def compute_analytics(tasks: Iterable[Task], now: datetime) -> TaskAnalytics:
    """
    Aggregate counts for a task set.

    Args:
        tasks: All tasks on the board (filters do not apply)
        now: Aware datetime sampled once by the caller

    Returns:
        TaskAnalytics snapshot
    """
    tasks = list(tasks)
    week_ago = now - timedelta(days=COMPLETED_WINDOW_DAYS)

    overdue = 0
    completed_this_week = 0
    for task in tasks:
        if is_overdue(task, now):
            overdue += 1
        if (
            task.status == COMPLETED_COLUMN_ID
            and task.updated_at is not None
            and task.updated_at > week_ago
        ):
            completed_this_week += 1

    return TaskAnalytics(
        total=len(tasks),
        by_status=dict(Counter(t.status for t in tasks)),
        by_priority=dict(Counter(t.priority for t in tasks)),
        by_category=dict(Counter(t.category for t in tasks)),
        overdue=overdue,
        completed_this_week=completed_this_week,
    )
