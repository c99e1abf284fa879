"""Tests for task and column acceptance rules."""

from datetime import date

from taskboard.core.models import Column
from taskboard.core.validation import validate_column_title, validate_task_fields

COLUMNS = [
    Column(id="to-do", title="To-do", order=0),
    Column(id="review", title="Review", order=1),
]

VALID_TASK = {
    "title": "Bridge load review",
    "description": "Check the load tables for span 3",
    "category": "Structural Engineering",
    "priority": "High",
    "due_date": "2024-07-01",
    "assignees": ["1"],
}


def test_column_title_accepts_new_title():
    assert validate_column_title("Site Visit", COLUMNS) is None


def test_column_title_length_limits():
    assert validate_column_title("", COLUMNS) == "Column title is required"
    assert validate_column_title("   ", COLUMNS) == "Column title is required"
    assert "at least 2" in validate_column_title("A", COLUMNS)
    assert "at most 50" in validate_column_title("x" * 51, COLUMNS)
    assert validate_column_title("x" * 50, COLUMNS) is None


def test_column_title_duplicate_ignores_case_and_whitespace():
    message = validate_column_title("review ", COLUMNS)
    assert message == "A column with this name already exists"


def test_column_title_rename_to_itself_is_allowed():
    assert validate_column_title("REVIEW", COLUMNS, exclude_id="review") is None


def test_column_title_rejects_control_characters():
    assert "printable" in validate_column_title("Bad\ttitle", COLUMNS)


def test_valid_task_has_no_errors():
    assert validate_task_fields(VALID_TASK, categories=["Structural Engineering"]) == {}
    assert validate_task_fields({**VALID_TASK, "due_date": date(2024, 7, 1)}) == {}


def test_task_errors_are_collected_per_field():
    """Every failing field is reported at once."""
    errors = validate_task_fields({
        "title": "ab",
        "description": "short",
        "category": "",
        "priority": "Urgent",
        "due_date": "next week",
        "assignees": [],
    })

    assert set(errors) == {"title", "description", "category", "priority", "due_date", "assignees"}
    assert errors["title"] == "Title must be at least 3 characters"
    assert errors["description"] == "Description must be at least 10 characters"
    assert errors["assignees"] == "At least one assignee is required"


def test_task_category_allow_list():
    errors = validate_task_fields({**VALID_TASK, "category": "Astrology"}, categories=["MEP Systems"])
    assert errors == {"category": "Unknown category 'Astrology'"}


def test_task_hours():
    assert "estimated_hours" in validate_task_fields({**VALID_TASK, "estimated_hours": 0})
    assert "estimated_hours" in validate_task_fields({**VALID_TASK, "estimated_hours": "ten"})
    assert "actual_hours" in validate_task_fields({**VALID_TASK, "actual_hours": -1})
    assert validate_task_fields({**VALID_TASK, "estimated_hours": 1.5, "actual_hours": 0}) == {}


def test_partial_checks_only_supplied_fields():
    assert validate_task_fields({"priority": "Low"}, partial=True) == {}
    assert validate_task_fields({"title": ""}, partial=True) == {"title": "Title is required"}
