"""Tests for board analytics."""

from datetime import datetime, timedelta, timezone

from taskboard.core.analytics import compute_analytics, is_overdue
from taskboard.core.models import Task
from taskboard.core.seed import sample_tasks

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def make_task(task_id, status="to-do", due="2024-07-01", updated_at=None,
              priority="Medium", category="Structural"):
    return Task.from_dict({
        "id": task_id,
        "title": f"Task {task_id}",
        "description": "Plain description text",
        "status": status,
        "priority": priority,
        "category": category,
        "due_date": due,
        "assignees": ["1"],
        "updated_at": updated_at,
    })


def test_open_task_past_due_is_overdue():
    """An open task due on 2024-01-01 is overdue on 2024-06-01."""
    analytics = compute_analytics([make_task("a", due="2024-01-01")], NOW)
    assert analytics.overdue == 1


def test_completed_task_is_never_overdue():
    task = make_task("a", status="completed", due="2024-01-01")
    assert not is_overdue(task, NOW)


def test_due_today_counts_from_midnight_utc():
    """Due date is read as the start of that day."""
    task = make_task("a", due="2024-06-01")
    assert not is_overdue(task, datetime(2024, 6, 1, tzinfo=timezone.utc))
    assert is_overdue(task, datetime(2024, 6, 1, 0, 0, 1, tzinfo=timezone.utc))


def test_completed_this_week_window():
    tasks = [
        make_task("recent", status="completed", updated_at=(NOW - timedelta(days=2)).isoformat()),
        make_task("old", status="completed", updated_at=(NOW - timedelta(days=8)).isoformat()),
        make_task("open", status="to-do", updated_at=NOW.isoformat()),
    ]
    assert compute_analytics(tasks, NOW).completed_this_week == 1


def test_counts_by_dimension():
    tasks = [
        make_task("a", status="to-do", priority="High", category="MEP"),
        make_task("b", status="to-do", priority="Low", category="MEP"),
        make_task("c", status="completed", priority="High", category="Civil"),
    ]
    analytics = compute_analytics(tasks, NOW)

    assert analytics.total == 3
    assert analytics.by_status == {"to-do": 2, "completed": 1}
    assert analytics.by_priority == {"High": 2, "Low": 1}
    assert analytics.by_category == {"MEP": 2, "Civil": 1}


def test_every_breakdown_sums_to_total():
    analytics = compute_analytics(sample_tasks(), NOW)

    assert analytics.total == 8
    assert sum(analytics.by_status.values()) == analytics.total
    assert sum(analytics.by_priority.values()) == analytics.total
    assert sum(analytics.by_category.values()) == analytics.total
    assert analytics.overdue == 7, "Every open sample task is past due by June 2024"
    assert analytics.completed_this_week == 0


def test_empty_board():
    analytics = compute_analytics([], NOW)
    assert analytics.to_dict() == {
        "total": 0,
        "by_status": {},
        "by_priority": {},
        "by_category": {},
        "overdue": 0,
        "completed_this_week": 0,
    }
