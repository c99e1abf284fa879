"""
FILE: taskboard/core/service.py
PURPOSE: Board state container - single point of write access to tasks and columns
EXPORTS:
  - KanbanBoard (class)
      Task commands:   add_task, update_task, move_task, complete_task, delete_task
      Column commands: add_column, update_column, delete_column, reorder_columns
      Filters:         set_filters, clear_filters
      Queries:         get_sorted_columns, get_filtered_tasks, get_tasks_by_status,
                       get_task_analytics, get_task, get_column, find_column_by_title,
                       resolve_column
      Load/save:       from_snapshot, with_seed_data, empty, snapshot
  - utc_now() -> datetime
  - new_id(prefix) -> str
DEPENDENCIES:
  - taskboard.core.models (Task, Column, Assignee, FilterCriteria)
  - taskboard.core.validation (field and title rules)
  - taskboard.core.filters (apply_filters, group_by_status)
  - taskboard.core.analytics (compute_analytics)
  - taskboard.core.exceptions (ValidationError, ColumnInUseError, not-found errors)
  - logging (audit records)
NOTES:
  - No module-level board: callers construct one and pass it around
  - Clock and id factory are injectable for tests
  - Every mutation replaces records and lists instead of editing them in place
  - Task status must name a live, non-reserved column
  - Unknown ids raise TaskNotFoundError / ColumnNotFoundError
  - Filtering and analytics are recomputed on every query
"""

import logging
import uuid
from dataclasses import fields, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

from . import seed
from .analytics import TaskAnalytics, compute_analytics
from .constants import (
    ALL_COLUMN_ID,
    COLUMN_ID_PREFIX,
    COMPLETED_COLUMN_ID,
    DEFAULT_PRIORITY,
    TASK_ID_PREFIX,
)
from .exceptions import (
    ColumnInUseError,
    ColumnNotFoundError,
    TaskNotFoundError,
    ValidationError,
)
from .filters import apply_filters, group_by_status
from .models import Assignee, Column, FilterCriteria, Task, parse_date, unique
from .validation import validate_column_title, validate_task_fields

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("taskboard.audit")

TASK_FIELDS = {f.name for f in fields(Task)}
IMMUTABLE_TASK_FIELDS = {"id", "created_at", "updated_at"}


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_id(prefix: str) -> str:
    """Process-generated unique id, e.g. 'task-3f9a1c2b7d4e'."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def _as_values(value) -> Any:
    # A bare string is kept whole so validation can reject it
    if isinstance(value, str):
        return value
    return tuple(value or ())


class KanbanBoard:
    """
    Owns the tasks, columns and active filters of one board.

    Args:
        tasks: Initial tasks, in display (insertion) order
        columns: Initial columns
        filters: Active filter criteria
        categories: Category allow-list checked when tasks are created
        assignees: Assignee directory (read-only reference data)
        clock: Zero-argument callable returning an aware datetime
        id_factory: Callable taking an id prefix and returning a fresh id
    """

    def __init__(
        self,
        tasks: Optional[Iterable[Task]] = None,
        columns: Optional[Iterable[Column]] = None,
        filters: Optional[FilterCriteria] = None,
        categories: Optional[Iterable[str]] = None,
        assignees: Optional[Iterable[Assignee]] = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[str], str] = new_id,
    ):
        self._tasks: List[Task] = list(tasks or [])
        self._columns: List[Column] = list(columns or [])
        self._filters = filters or FilterCriteria()
        self._categories: List[str] = list(categories or [])
        self._assignees: List[Assignee] = list(assignees or [])
        self._clock = clock
        self._id_factory = id_factory

    # --- Construction / load-save contract ---

    @classmethod
    def empty(cls, **kwargs) -> "KanbanBoard":
        """Board with the default columns and no tasks."""
        kwargs.setdefault("categories", seed.SAMPLE_CATEGORIES)
        kwargs.setdefault("assignees", seed.sample_assignees())
        return cls(columns=seed.default_columns(), **kwargs)

    @classmethod
    def with_seed_data(cls, **kwargs) -> "KanbanBoard":
        """Board pre-filled with the sample engineering tasks."""
        kwargs.setdefault("categories", seed.SAMPLE_CATEGORIES)
        kwargs.setdefault("assignees", seed.sample_assignees())
        return cls(tasks=seed.sample_tasks(), columns=seed.default_columns(), **kwargs)

    @classmethod
    def from_snapshot(cls, snapshot: Dict[str, Any], **kwargs) -> "KanbanBoard":
        """
        Rebuild a board from a snapshot produced by snapshot().

        Args:
            snapshot: Mapping with "tasks", "columns" and optional "filters"
            **kwargs: Extra constructor arguments (clock, categories, ...)

        Notes:
            - Tasks whose status names no column are kept, and logged
            - Categories default to the sample list when the snapshot has none
            - Assignees always come from the sample directory
        """
        categories = snapshot["categories"] if "categories" in snapshot else seed.SAMPLE_CATEGORIES
        kwargs.setdefault("categories", categories)
        kwargs.setdefault("assignees", seed.sample_assignees())
        board = cls(
            tasks=[Task.from_dict(t) for t in snapshot.get("tasks", [])],
            columns=[Column.from_dict(c) for c in snapshot.get("columns", [])],
            filters=FilterCriteria.from_dict(snapshot.get("filters")),
            **kwargs,
        )
        column_ids = {c.id for c in board._columns}
        for task in board._tasks:
            if task.status not in column_ids or task.status == ALL_COLUMN_ID:
                logger.warning(f"Task {task.id} has status '{task.status}' with no matching column")
        return board

    def snapshot(self) -> Dict[str, Any]:
        """Plain, JSON-serializable view of the persisted state."""
        return {
            "tasks": [t.to_dict() for t in self._tasks],
            "columns": [c.to_dict() for c in self._columns],
            "filters": self._filters.to_dict(),
            "categories": list(self._categories),
        }

    # --- Read-only state ---

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    @property
    def columns(self) -> List[Column]:
        return list(self._columns)

    @property
    def filters(self) -> FilterCriteria:
        return self._filters

    @property
    def categories(self) -> List[str]:
        return list(self._categories)

    @property
    def assignees(self) -> List[Assignee]:
        return list(self._assignees)

    def now(self) -> datetime:
        return self._clock()

    # --- Internal helpers ---

    def _next_timestamp(self, previous: Optional[datetime] = None) -> datetime:
        # updated_at never goes backwards, even with a coarse or frozen clock
        now = self._clock()
        if previous is not None and now <= previous:
            return previous + timedelta(microseconds=1)
        return now

    def _find_task(self, task_id: str) -> Task:
        task = self.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def _find_column(self, column_id: str) -> Column:
        column = self.get_column(column_id)
        if column is None:
            raise ColumnNotFoundError(column_id)
        return column

    def _status_error(self, status: Optional[str]) -> Optional[str]:
        if not status:
            return "Status is required"
        if status == ALL_COLUMN_ID:
            return f"'{ALL_COLUMN_ID}' is a view, tasks cannot be placed in it"
        if self.get_column(status) is None:
            available = ", ".join(c.id for c in self.get_sorted_columns() if c.id != ALL_COLUMN_ID)
            return f"Column '{status}' does not exist. Available columns: {available}"
        return None

    def _replace_task(self, task: Task) -> None:
        self._tasks = [task if t.id == task.id else t for t in self._tasks]

    def _replace_column(self, column: Column) -> None:
        self._columns = [column if c.id == column.id else c for c in self._columns]

    @staticmethod
    def _normalize_task_fields(data: Dict[str, Any]) -> Dict[str, Any]:
        normalized = dict(data)
        for name in ("title", "description", "category"):
            if name in normalized and normalized[name] is not None:
                normalized[name] = normalized[name].strip()
        if "due_date" in normalized:
            normalized["due_date"] = parse_date(normalized["due_date"])
        if "assignees" in normalized:
            normalized["assignees"] = unique(normalized["assignees"] or [])
        if "tags" in normalized:
            normalized["tags"] = unique(normalized["tags"] or [])
        if "attachments" in normalized:
            normalized["attachments"] = tuple(normalized["attachments"] or ())
        if "project_id" in normalized:
            normalized["project_id"] = (normalized["project_id"] or "").strip() or None
        if normalized.get("actual_hours") is None and "actual_hours" in normalized:
            normalized["actual_hours"] = 0
        return normalized

    # --- Task commands ---

    def add_task(
        self,
        title: str,
        description: str,
        status: str,
        category: str,
        due_date,
        assignees: Iterable[str],
        priority: str = DEFAULT_PRIORITY,
        project_id: Optional[str] = None,
        estimated_hours: Optional[float] = None,
        actual_hours: float = 0,
        tags: Iterable[str] = (),
        attachments: Iterable[str] = (),
    ) -> Task:
        """
        Create a new task with validation.

        Args:
            title: Task title (at least 3 characters)
            description: Task description (at least 10 characters)
            status: Id of the column the task starts in
            category: Category from the board's allow-list
            due_date: Calendar date or 'YYYY-MM-DD'
            assignees: Assignee ids (at least one)
            priority: High, Medium or Low
            project_id: Optional external project reference
            estimated_hours: Optional positive estimate
            actual_hours: Hours logged so far (non-negative)
            tags: Free-form tags, duplicates dropped
            attachments: Opaque attachment references

        Returns:
            Newly created Task

        Raises:
            ValidationError: With every failing field, nothing is stored

        Notes:
            - Titles may repeat across tasks
            - created_at == updated_at == now
        """
        data = {
            "title": title,
            "description": description,
            "category": category,
            "priority": priority,
            "due_date": due_date,
            "assignees": _as_values(assignees),
            "tags": _as_values(tags),
            "attachments": _as_values(attachments),
            "estimated_hours": estimated_hours,
            "actual_hours": actual_hours,
        }
        errors = validate_task_fields(data, categories=self._categories)
        status_error = self._status_error(status)
        if status_error:
            errors["status"] = status_error
        if errors:
            raise ValidationError(errors)

        data.update(status=status, project_id=project_id)
        now = self._clock()
        task = Task(
            id=self._id_factory(TASK_ID_PREFIX),
            created_at=now,
            updated_at=now,
            **self._normalize_task_fields(data),
        )
        self._tasks = self._tasks + [task]

        audit_logger.info(f"Task created: {task.id} '{task.title}' in {task.status}")
        return task

    def update_task(self, task_id: str, **changes) -> Task:
        """
        Merge field changes into an existing task.

        Args:
            task_id: ID of task to update
            **changes: Task fields to overwrite

        Returns:
            The new Task record

        Raises:
            TaskNotFoundError: If task_id doesn't exist
            ValidationError: If a field is unknown, immutable, or invalid

        Notes:
            - Only supplied fields are validated
            - Always bumps updated_at, even when values are unchanged
        """
        return self._apply_task_changes(task_id, changes, "Task updated")

    def _apply_task_changes(self, task_id: str, changes: Dict[str, Any], event: str) -> Task:
        task = self._find_task(task_id)
        changes = {
            k: _as_values(v) if k in ("assignees", "tags", "attachments") else v
            for k, v in changes.items()
        }

        errors: Dict[str, str] = {}
        for name in changes:
            if name in IMMUTABLE_TASK_FIELDS:
                errors[name] = "Field cannot be changed"
            elif name not in TASK_FIELDS:
                errors[name] = "Unknown field"
        errors.update(validate_task_fields(
            {k: v for k, v in changes.items() if k in TASK_FIELDS},
            partial=True,
        ))
        if "status" in changes:
            status_error = self._status_error(changes["status"])
            if status_error:
                errors["status"] = status_error
        if errors:
            raise ValidationError(errors)

        updated = replace(
            task,
            updated_at=self._next_timestamp(task.updated_at),
            **self._normalize_task_fields(changes),
        )
        self._replace_task(updated)

        audit_logger.info(f"{event}: {task_id} {sorted(changes)}")
        return updated

    def move_task(self, task_id: str, new_status: str) -> Task:
        """Move a task to another column. Same as update_task(id, status=...)."""
        return self._apply_task_changes(task_id, {"status": new_status}, "Task moved")

    def complete_task(self, task_id: str) -> Task:
        """Move a task to the completed column."""
        return self._apply_task_changes(task_id, {"status": COMPLETED_COLUMN_ID}, "Task completed")

    def delete_task(self, task_id: str) -> Task:
        """
        Delete a task permanently.

        Returns:
            The removed Task

        Raises:
            TaskNotFoundError: If task_id doesn't exist
        """
        task = self._find_task(task_id)
        self._tasks = [t for t in self._tasks if t.id != task_id]

        audit_logger.info(f"Task deleted: {task_id}")
        return task

    # --- Column commands ---

    def add_column(self, title: str, order: Optional[int] = None) -> Column:
        """
        Create a new column.

        Args:
            title: Column title (2-50 characters, unique ignoring case)
            order: Position; defaults to the end (number of columns)

        Returns:
            Newly created Column

        Raises:
            ValidationError: If the title or order is invalid
        """
        errors = {}
        title_error = validate_column_title(title, self._columns)
        if title_error:
            errors["title"] = title_error
        if order is None:
            order = len(self._columns)
        elif not isinstance(order, int) or isinstance(order, bool) or order < 0:
            errors["order"] = "Order must be a non-negative integer"
        if errors:
            raise ValidationError(errors)

        now = self._clock()
        column = Column(
            id=self._id_factory(COLUMN_ID_PREFIX),
            title=title.strip(),
            order=order,
            created_at=now,
            updated_at=now,
        )
        self._columns = self._columns + [column]

        audit_logger.info(f"Column created: {column.id} '{column.title}'")
        return column

    def update_column(
        self,
        column_id: str,
        title: Optional[str] = None,
        order: Optional[int] = None,
    ) -> Column:
        """
        Rename and/or reposition a column.

        Raises:
            ColumnNotFoundError: If column_id doesn't exist
            ValidationError: If the new title clashes or order is negative
        """
        column = self._find_column(column_id)

        errors = {}
        changes: Dict[str, Any] = {}
        if title is not None:
            title_error = validate_column_title(title, self._columns, exclude_id=column_id)
            if title_error:
                errors["title"] = title_error
            changes["title"] = title.strip()
        if order is not None:
            if not isinstance(order, int) or isinstance(order, bool) or order < 0:
                errors["order"] = "Order must be a non-negative integer"
            changes["order"] = order
        if errors:
            raise ValidationError(errors)

        updated = replace(column, updated_at=self._next_timestamp(column.updated_at), **changes)
        self._replace_column(updated)

        audit_logger.info(f"Column updated: {column_id} {sorted(changes)}")
        return updated

    def delete_column(self, column_id: str) -> Column:
        """
        Delete an empty column.

        Returns:
            The removed Column

        Raises:
            ColumnNotFoundError: If column_id doesn't exist
            ColumnInUseError: If any task still has this column as status

        Notes:
            - Never deletes tasks; move or delete them first
        """
        column = self._find_column(column_id)

        blocking = [t.id for t in self._tasks if t.status == column_id]
        if blocking:
            logger.warning(f"Refusing to delete column {column_id}: {len(blocking)} task(s) in it")
            raise ColumnInUseError(column_id, blocking)

        self._columns = [c for c in self._columns if c.id != column_id]

        audit_logger.info(f"Column deleted: {column_id}")
        return column

    def reorder_columns(self, column_ids: Iterable[str]) -> List[Column]:
        """
        Reassign column order from a list of ids.

        Args:
            column_ids: Column ids in the desired left-to-right order

        Returns:
            All columns, sorted by their new order

        Notes:
            - Unknown ids and repeats are ignored
            - Columns left out keep their relative order after the listed ones
            - Only columns whose position changed get a new updated_at
        """
        known = {c.id: c for c in self._columns}
        listed: List[str] = []
        for column_id in column_ids:
            if column_id in known and column_id not in listed:
                listed.append(column_id)
        omitted = [c.id for c in self.get_sorted_columns() if c.id not in listed]

        reordered = []
        for position, column_id in enumerate(listed + omitted):
            column = known[column_id]
            if column.order != position:
                column = replace(
                    column,
                    order=position,
                    updated_at=self._next_timestamp(column.updated_at),
                )
            reordered.append(column)
        self._columns = reordered

        audit_logger.info(f"Columns reordered: {listed + omitted}")
        return list(reordered)

    # --- Filters ---

    def set_filters(self, criteria: FilterCriteria) -> FilterCriteria:
        """Replace the active filter criteria."""
        self._filters = criteria
        return criteria

    def clear_filters(self) -> FilterCriteria:
        self._filters = FilterCriteria()
        return self._filters

    # --- Queries ---

    def get_task(self, task_id: str) -> Optional[Task]:
        """Task by id, or None."""
        return next((t for t in self._tasks if t.id == task_id), None)

    def get_column(self, column_id: str) -> Optional[Column]:
        """Column by id, or None."""
        return next((c for c in self._columns if c.id == column_id), None)

    def find_column_by_title(self, title: str) -> Optional[Column]:
        """Column by title (case-insensitive), or None."""
        wanted = title.strip().lower()
        return next((c for c in self._columns if c.title.strip().lower() == wanted), None)

    def resolve_column(self, ref: str) -> str:
        """
        Turn a column id or title (case-insensitive) into a column id.

        Unknown references are returned unchanged so the command that
        uses them reports the error.
        """
        if self.get_column(ref):
            return ref
        column = self.find_column_by_title(ref)
        return column.id if column else ref

    def get_sorted_columns(self) -> List[Column]:
        """Columns ordered by `order` ascending (stable for ties)."""
        return sorted(self._columns, key=lambda c: c.order)

    def get_filtered_tasks(self, criteria: Optional[FilterCriteria] = None) -> List[Task]:
        """Tasks matching criteria (defaults to the active filters)."""
        return apply_filters(self._tasks, criteria if criteria is not None else self._filters)

    def get_tasks_by_status(self, criteria: Optional[FilterCriteria] = None) -> Dict[str, List[Task]]:
        """Filtered tasks bucketed per column, in column order."""
        return group_by_status(self.get_filtered_tasks(criteria), self.get_sorted_columns())

    def get_task_analytics(self) -> TaskAnalytics:
        """Counts over every task; active filters are ignored."""
        return compute_analytics(self._tasks, self._clock())
