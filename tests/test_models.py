"""Tests for model parsing and serialization."""

import json
from datetime import date, datetime, timezone

from taskboard.core.models import (
    Column,
    FilterCriteria,
    Task,
    parse_date,
    parse_datetime,
    unique,
)


def test_parse_datetime_accepts_z_suffix():
    """Trailing Z is read as UTC."""
    parsed = parse_datetime("2024-01-20T10:30:00Z")
    assert parsed == datetime(2024, 1, 20, 10, 30, tzinfo=timezone.utc)


def test_parse_datetime_naive_values_become_utc():
    assert parse_datetime("2024-01-20").tzinfo == timezone.utc
    assert parse_datetime(date(2024, 1, 20)) == datetime(2024, 1, 20, tzinfo=timezone.utc)
    assert parse_datetime(None) is None
    assert parse_datetime("") is None


def test_parse_date_variants():
    assert parse_date("2024-02-15") == date(2024, 2, 15)
    assert parse_date("2024-02-15T23:00:00+00:00") == date(2024, 2, 15)
    assert parse_date(datetime(2024, 2, 15, 8, 0)) == date(2024, 2, 15)
    assert parse_date(None) is None


def test_unique_keeps_first_seen_order():
    assert unique(["1", " 3 ", "1", "", "2"]) == ("1", "3", "2")


def test_task_from_dict_defaults():
    """Optional fields fall back to sensible defaults."""
    task = Task.from_dict({
        "id": 7,
        "title": "Survey",
        "status": "to-do",
        "due_date": "2024-03-01",
    })

    assert task.id == "7"
    assert task.priority == "Medium"
    assert task.assignees == ()
    assert task.actual_hours == 0
    assert task.estimated_hours is None
    assert task.project_id is None
    assert task.created_at is None


def test_task_to_dict_is_json_ready():
    task = Task.from_dict({
        "id": "t1",
        "title": "Survey",
        "description": "Topographic survey of the site",
        "status": "to-do",
        "priority": "High",
        "category": "Civil Infrastructure",
        "due_date": "2024-03-01",
        "assignees": ["4", "4", "5"],
        "tags": ["site"],
        "estimated_hours": "12",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-02T00:00:00Z",
    })

    data = json.loads(task.to_json())
    assert data["due_date"] == "2024-03-01"
    assert data["assignees"] == ["4", "5"], "Duplicate assignees should be dropped"
    assert data["estimated_hours"] == 12.0
    assert data["updated_at"] == "2024-01-02T00:00:00+00:00"
    assert Task.from_dict(data) == task


def test_column_serialization():
    column = Column.from_dict({"id": "qa", "title": "QA", "order": "3"})
    assert column.order == 3
    assert column.to_dict()["created_at"] is None
    assert json.loads(column.to_json())["title"] == "QA"


def test_filter_criteria_empty_by_default():
    assert FilterCriteria().is_empty()
    assert FilterCriteria.from_dict(None).is_empty()
    assert not FilterCriteria.build(search="metro").is_empty()
    assert not FilterCriteria.build(end="2024-03-01").is_empty()


def test_filter_criteria_dict_form():
    """Sets serialize as sorted lists, open date bounds as None."""
    criteria = FilterCriteria.build(
        categories=["MEP Systems", "Civil Infrastructure"],
        priorities=["High"],
        start="2024-02-01",
    )
    data = criteria.to_dict()

    assert data["categories"] == ["Civil Infrastructure", "MEP Systems"]
    assert data["date_range"] == {"start": "2024-02-01", "end": None}
    assert FilterCriteria.from_dict(data) == criteria
