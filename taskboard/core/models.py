"""
FILE: taskboard/core/models.py
PURPOSE: Domain models for tasks, columns, assignees and filter criteria
EXPORTS:
  - Task (dataclass)
  - Column (dataclass)
  - Assignee (dataclass)
  - DateRange (dataclass)
  - FilterCriteria (dataclass)
  - parse_date(value) -> date | None
  - parse_datetime(value) -> datetime | None
DEPENDENCIES:
  - dataclasses (stdlib)
  - datetime (stdlib)
  - json (stdlib)
  - typing (stdlib)
NOTES:
  - Models are frozen: mutations build a new record with dataclasses.replace()
  - All models have from_dict() for snapshot conversion
  - All models have to_dict()/to_json() for serialization
  - Timestamps are timezone-aware UTC datetimes, stored as ISO-8601 strings
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple
import json


def parse_datetime(value) -> Optional[datetime]:
    """Parse an ISO-8601 string (or date/datetime) into an aware UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        # fromisoformat() on older interpreters rejects the Z suffix
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_date(value) -> Optional[date]:
    """Parse a calendar date from 'YYYY-MM-DD', a date, or a datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if "T" in text:
        return parse_datetime(text).date()
    return date.fromisoformat(text)


def _required_date(data: Dict[str, Any], key: str) -> date:
    value = parse_date(data[key])
    if value is None:
        raise ValueError(f"'{key}' must not be empty")
    return value


def unique(values: Iterable[str]) -> Tuple[str, ...]:
    """Drop blanks and repeats while keeping first-seen order."""
    seen = []
    for value in values:
        value = str(value).strip()
        if value and value not in seen:
            seen.append(value)
    return tuple(seen)


@dataclass(frozen=True)
class Column:
    """A named status bucket (e.g., To-do, In Progress, Completed)."""

    id: str
    title: str
    order: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Column":
        """Convert a snapshot entry to a Column object."""
        return cls(
            id=str(data["id"]),
            title=data["title"],
            order=int(data.get("order", 0)),
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "order": self.order,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def to_json(self) -> str:
        """Serialize column to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


@dataclass(frozen=True)
class Task:
    """A unit of work on the board."""

    id: str
    title: str
    description: str
    status: str
    priority: str
    category: str
    due_date: date
    assignees: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    attachments: Tuple[str, ...] = ()
    project_id: Optional[str] = None
    estimated_hours: Optional[float] = None
    actual_hours: float = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Convert a snapshot entry to a Task object."""
        estimated = data.get("estimated_hours")
        return cls(
            id=str(data["id"]),
            title=data["title"],
            description=data.get("description", ""),
            status=data["status"],
            priority=data.get("priority", "Medium"),
            category=data.get("category", ""),
            due_date=_required_date(data, "due_date"),
            assignees=unique(data.get("assignees", [])),
            tags=unique(data.get("tags", [])),
            attachments=tuple(data.get("attachments") or ()),
            project_id=data.get("project_id") or None,
            estimated_hours=float(estimated) if estimated is not None else None,
            actual_hours=float(data.get("actual_hours") or 0),
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "priority": self.priority,
            "category": self.category,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "assignees": list(self.assignees),
            "tags": list(self.tags),
            "attachments": list(self.attachments),
            "project_id": self.project_id,
            "estimated_hours": self.estimated_hours,
            "actual_hours": self.actual_hours,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def to_json(self) -> str:
        """Serialize task to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


@dataclass(frozen=True)
class Assignee:
    """A person tasks can be assigned to. Owned outside the board."""

    id: str
    name: str
    initials: str
    role: str = ""
    department: str = ""
    avatar: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Assignee":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            initials=data.get("initials", ""),
            role=data.get("role", ""),
            department=data.get("department", ""),
            avatar=data.get("avatar"),
        )


@dataclass(frozen=True)
class DateRange:
    """Inclusive bounds on a task's due date. Either side may be open."""

    start: Optional[date] = None
    end: Optional[date] = None

    def is_set(self) -> bool:
        return self.start is not None or self.end is not None


@dataclass(frozen=True)
class FilterCriteria:
    """
    Query descriptor used to derive a view over tasks.

    Empty sets and blank search mean "match everything" for that dimension.
    """

    categories: FrozenSet[str] = frozenset()
    priorities: FrozenSet[str] = frozenset()
    assignees: FrozenSet[str] = frozenset()
    search: str = ""
    date_range: DateRange = DateRange()

    @classmethod
    def build(
        cls,
        categories: Iterable[str] = (),
        priorities: Iterable[str] = (),
        assignees: Iterable[str] = (),
        search: str = "",
        start=None,
        end=None,
    ) -> "FilterCriteria":
        """Build criteria from loose values (lists, strings, ISO dates)."""
        return cls(
            categories=frozenset(categories or ()),
            priorities=frozenset(priorities or ()),
            assignees=frozenset(assignees or ()),
            search=search or "",
            date_range=DateRange(start=parse_date(start), end=parse_date(end)),
        )

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "FilterCriteria":
        if not data:
            return cls()
        date_range = data.get("date_range") or {}
        return cls.build(
            categories=data.get("categories", ()),
            priorities=data.get("priorities", ()),
            assignees=data.get("assignees", ()),
            search=data.get("search", ""),
            start=date_range.get("start"),
            end=date_range.get("end"),
        )

    def is_empty(self) -> bool:
        return not (
            self.categories
            or self.priorities
            or self.assignees
            or self.search
            or self.date_range.is_set()
        )

    def to_dict(self) -> Dict[str, Any]:
        start, end = self.date_range.start, self.date_range.end
        return {
            "categories": sorted(self.categories),
            "priorities": sorted(self.priorities),
            "assignees": sorted(self.assignees),
            "search": self.search,
            "date_range": {
                "start": start.isoformat() if start else None,
                "end": end.isoformat() if end else None,
            },
        }
