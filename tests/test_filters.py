"""Tests for the filter engine and per-column grouping."""

from taskboard.core.filters import apply_filters, group_by_status, matches
from taskboard.core.models import Column, FilterCriteria, Task
from taskboard.core.seed import sample_tasks


def make_task(task_id, category="Structural", priority="Medium", status="to-do",
              due="2024-03-01", assignees=("1",), tags=(), title=None):
    return Task.from_dict({
        "id": task_id,
        "title": title or f"Task {task_id}",
        "description": "Plain description text",
        "status": status,
        "priority": priority,
        "category": category,
        "due_date": due,
        "assignees": list(assignees),
        "tags": list(tags),
    })


def test_category_filter_excludes_other_categories():
    """Only tasks in the selected categories survive."""
    structural = make_task("s", category="Structural")
    mep = make_task("m", category="MEP")

    result = apply_filters([structural, mep], FilterCriteria.build(categories=["MEP"]))

    assert result == [mep]


def test_empty_criteria_match_everything():
    tasks = sample_tasks()
    assert apply_filters(tasks, FilterCriteria()) == tasks


def test_search_is_case_insensitive_over_title_description_and_tags():
    tasks = sample_tasks()

    by_title = apply_filters(tasks, FilterCriteria.build(search="riyadh METRO"))
    assert [t.id for t in by_title] == ["3"]

    by_tag = apply_filters(tasks, FilterCriteria.build(search="hvac"))
    assert [t.id for t in by_tag] == ["7"]

    assert apply_filters(tasks, FilterCriteria.build(search="no such text")) == []


def test_assignee_filter_matches_any_member():
    tasks = [make_task("a", assignees=["1", "2"]), make_task("b", assignees=["3"])]
    result = apply_filters(tasks, FilterCriteria.build(assignees=["2", "9"]))
    assert [t.id for t in result] == ["a"]


def test_date_range_is_inclusive():
    tasks = [make_task("early", due="2024-02-01"),
             make_task("mid", due="2024-02-15"),
             make_task("late", due="2024-03-01")]

    result = apply_filters(tasks, FilterCriteria.build(start="2024-02-01", end="2024-02-15"))
    assert [t.id for t in result] == ["early", "mid"]

    open_start = apply_filters(tasks, FilterCriteria.build(end="2024-02-01"))
    assert [t.id for t in open_start] == ["early"]


def test_criteria_are_anded():
    task = make_task("x", category="MEP", priority="High")
    assert matches(task, FilterCriteria.build(categories=["MEP"], priorities=["High"]))
    assert not matches(task, FilterCriteria.build(categories=["MEP"], priorities=["Low"]))


def test_adding_criteria_never_grows_the_result():
    tasks = sample_tasks()
    loose = FilterCriteria.build(priorities=["High", "Medium"])
    strict = FilterCriteria.build(priorities=["High", "Medium"], categories=["MEP Systems"])

    loose_ids = {t.id for t in apply_filters(tasks, loose)}
    strict_ids = {t.id for t in apply_filters(tasks, strict)}

    assert strict_ids <= loose_ids


def test_filtering_twice_changes_nothing():
    tasks = sample_tasks()
    criteria = FilterCriteria.build(priorities=["High"])
    once = apply_filters(tasks, criteria)
    assert apply_filters(once, criteria) == once


def test_filtering_keeps_input_order_and_input_untouched():
    tasks = sample_tasks()
    before = list(tasks)
    result = apply_filters(tasks, FilterCriteria.build(priorities=["Medium"]))

    assert [t.id for t in result] == ["2", "5", "6"]
    assert tasks == before


def test_group_by_status_buckets_every_column():
    columns = [
        Column(id="all-jobs", title="All Jobs", order=0),
        Column(id="to-do", title="To-do", order=1),
        Column(id="done", title="Done", order=2),
        Column(id="empty", title="Empty", order=3),
    ]
    tasks = [make_task("a", status="to-do"), make_task("b", status="done"),
             make_task("c", status="ghost")]

    grouped = group_by_status(tasks, columns)

    assert list(grouped) == ["all-jobs", "to-do", "done", "empty"]
    assert [t.id for t in grouped["to-do"]] == ["a"]
    assert [t.id for t in grouped["done"]] == ["b"]
    assert grouped["empty"] == []
    assert [t.id for t in grouped["all-jobs"]] == ["a", "b", "c"], "Orphans only appear under all"
