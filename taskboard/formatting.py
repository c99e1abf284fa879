"""
FILE: taskboard/formatting.py
PURPOSE: Shared formatting utilities for CLI and REPL output
EXPORTS:
  - TaskFormatter: Class for formatting tasks
  - ColumnFormatter: Class for formatting columns
  - analytics_table(analytics) -> Table
  - board_tables(columns, by_status, now) -> List[Table]
  - describe_filters(criteria) -> List[str]
  - error_lines(error) -> List[str]
  - parse_ids(id_string) -> List[str]
  - split_values(value) -> List[str]
  - build_criteria(search, categories, ...) -> FilterCriteria
DEPENDENCIES:
  - rich (for table formatting)
  - json (for JSON serialization)
  - taskboard.core.models (Task, Column, FilterCriteria)
NOTES:
  - Centralized formatting logic for consistency
  - Used by both CLI and REPL
"""

import json
from typing import Dict, List, Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .core.analytics import TaskAnalytics, is_overdue
from .core.constants import ALL_COLUMN_ID, COMPLETED_COLUMN_ID
from .core.exceptions import ColumnInUseError, InvalidInputError, ValidationError
from .core.models import Column, FilterCriteria, Task

PRIORITY_STYLES = {
    "High": "red",
    "Medium": "yellow",
    "Low": "dim",
}


class TaskFormatter:
    """Centralized task display formatting."""

    @staticmethod
    def create_table(
        tasks: List[Task],
        title: str = "Tasks",
        show_status: bool = True,
        now=None,
    ) -> Table:
        """
        Create Rich table for tasks.

        Args:
            tasks: List of tasks to display
            title: Table title
            show_status: Whether to show the status column
            now: Reference time for overdue highlighting (None disables it)

        Returns:
            Rich Table object ready for display
        """
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Title", style="white")
        if show_status:
            table.add_column("Status", style="magenta")
        table.add_column("Priority")
        table.add_column("Category", style="blue")
        table.add_column("Due", no_wrap=True)
        table.add_column("Assignees", style="yellow")

        for task in tasks:
            row = [task.id, task.title]
            if show_status:
                status_style = "green" if task.status == COMPLETED_COLUMN_ID else "magenta"
                row.append(f"[{status_style}]{task.status}[/{status_style}]")

            priority_style = PRIORITY_STYLES.get(task.priority, "white")
            row.append(f"[{priority_style}]{task.priority}[/{priority_style}]")
            row.append(task.category)

            due = task.due_date.isoformat()
            if now is not None and is_overdue(task, now):
                due = f"[bold red]{due}[/bold red]"
            row.append(due)
            row.append(", ".join(task.assignees))

            table.add_row(*row)

        return table

    @staticmethod
    def to_json_array(tasks: List[Task]) -> str:
        """Convert task list to JSON array string."""
        return json.dumps([t.to_dict() for t in tasks], indent=2)

    @staticmethod
    def to_raw_lines(tasks: List[Task]) -> List[str]:
        """
        Convert task list to plain text lines.

        Returns:
            One "id: [x] title (status)" line per task
        """
        lines = []
        for task in tasks:
            status_marker = "x" if task.status == COMPLETED_COLUMN_ID else " "
            lines.append(f"{task.id}: [{status_marker}] {task.title} ({task.status})")
        return lines

    @staticmethod
    def details_panel(task: Task, assignee_names: Optional[Dict[str, str]] = None) -> Panel:
        """Full task details for `show`."""
        assignee_names = assignee_names or {}

        details = Text()
        details.append(f"Task {task.id}\n", style="bold cyan")
        details.append(f"{task.title}\n\n", style="bold white")
        details.append("Description:\n", style="dim")
        details.append(f"{task.description}\n\n", style="white")

        rows = [
            ("Status", task.status),
            ("Priority", task.priority),
            ("Category", task.category),
            ("Due", task.due_date.isoformat()),
            ("Assignees", ", ".join(assignee_names.get(a, a) for a in task.assignees)),
        ]
        if task.project_id:
            rows.append(("Project", task.project_id))
        if task.estimated_hours is not None:
            rows.append(("Estimated", f"{task.estimated_hours:g}h"))
        rows.append(("Actual", f"{task.actual_hours:g}h"))
        if task.tags:
            rows.append(("Tags", ", ".join(task.tags)))
        if task.attachments:
            rows.append(("Attachments", ", ".join(task.attachments)))
        if task.created_at:
            rows.append(("Created", task.created_at.isoformat(timespec="seconds")))
        if task.updated_at:
            rows.append(("Updated", task.updated_at.isoformat(timespec="seconds")))

        for label, value in rows:
            details.append(f"{label}: ", style="dim")
            details.append(f"{value}\n", style="white")

        return Panel(details, border_style="blue", padding=(1, 2))


class ColumnFormatter:
    """Column display formatting."""

    @staticmethod
    def create_table(columns: List[Column], counts: Optional[Dict[str, int]] = None) -> Table:
        counts = counts or {}
        table = Table(title="Columns", show_header=True, header_style="bold cyan")
        table.add_column("Order", style="dim", no_wrap=True)
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Tasks", justify="right")

        for column in columns:
            count = "-" if column.id == ALL_COLUMN_ID else str(counts.get(column.id, 0))
            table.add_row(str(column.order), column.id, column.title, count)

        return table

    @staticmethod
    def to_json_array(columns: List[Column]) -> str:
        return json.dumps([c.to_dict() for c in columns], indent=2)

    @staticmethod
    def to_raw_lines(columns: List[Column]) -> List[str]:
        return [f"{c.order}: {c.id} ({c.title})" for c in columns]


def analytics_table(analytics: TaskAnalytics) -> Table:
    """Summary table for `stats`."""
    table = Table(title="Board analytics", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="dim")
    table.add_column("Value", style="white")

    table.add_row("Total", str(analytics.total))
    table.add_row("Overdue", f"[red]{analytics.overdue}[/red]" if analytics.overdue else "0")
    table.add_row("Completed (7 days)", str(analytics.completed_this_week))

    for label, counts in (
        ("Status", analytics.by_status),
        ("Priority", analytics.by_priority),
        ("Category", analytics.by_category),
    ):
        for key, value in sorted(counts.items()):
            table.add_row(f"{label}: {key}", str(value))

    return table


def board_tables(columns: List[Column], by_status: Dict[str, List[Task]], now=None) -> List[Table]:
    """One task table per column, in column order."""
    tables = []
    for column in columns:
        tasks = by_status.get(column.id, [])
        tables.append(TaskFormatter.create_table(
            tasks,
            title=f"{column.title} ({len(tasks)})",
            show_status=column.id == ALL_COLUMN_ID,
            now=now,
        ))
    return tables


def describe_filters(criteria: FilterCriteria) -> List[str]:
    """Human-readable lines for the active filters."""
    if criteria.is_empty():
        return ["No filters active"]
    lines = []
    if criteria.search:
        lines.append(f"search: {criteria.search}")
    if criteria.categories:
        lines.append(f"categories: {', '.join(sorted(criteria.categories))}")
    if criteria.priorities:
        lines.append(f"priorities: {', '.join(sorted(criteria.priorities))}")
    if criteria.assignees:
        lines.append(f"assignees: {', '.join(sorted(criteria.assignees))}")
    if criteria.date_range.is_set():
        start = criteria.date_range.start.isoformat() if criteria.date_range.start else "..."
        end = criteria.date_range.end.isoformat() if criteria.date_range.end else "..."
        lines.append(f"due: {start} to {end}")
    return lines


def error_lines(error: Exception) -> List[str]:
    """
    Render an error as user-facing lines.

    Validation errors get one line per field, ColumnInUseError names the
    blocking tasks.
    """
    if isinstance(error, ValidationError):
        return [f"{field}: {message}" for field, message in error.errors.items()]
    if isinstance(error, ColumnInUseError):
        return [
            f"Column {error.column_id} still has {len(error.task_ids)} task(s); "
            f"move or delete them first: {', '.join(error.task_ids)}"
        ]
    return [str(error)]


def parse_ids(id_string: str) -> List[str]:
    """
    Parse comma-separated ids.

    Args:
        id_string: Comma-separated string of IDs (e.g., "task-1,task-2")

    Returns:
        List of non-empty ids, whitespace stripped, repeats dropped
    """
    return list(dict.fromkeys(id.strip() for id in id_string.split(",") if id.strip()))


def split_values(value: Optional[str]) -> List[str]:
    """Split a comma-separated option value ("a, b") into a list."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def build_criteria(
    search: Optional[str] = None,
    categories: Optional[str] = None,
    priorities: Optional[str] = None,
    assignees: Optional[str] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> FilterCriteria:
    """
    Build FilterCriteria from raw option strings.

    Raises:
        InvalidInputError: If a date bound is not YYYY-MM-DD
    """
    try:
        return FilterCriteria.build(
            categories=split_values(categories),
            priorities=split_values(priorities),
            assignees=split_values(assignees),
            search=(search or "").strip(),
            start=start,
            end=end,
        )
    except ValueError:
        raise InvalidInputError(f"Invalid date range '{start or ''}'..'{end or ''}', expected YYYY-MM-DD")

