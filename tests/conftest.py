"""Shared pytest configuration and fixtures for tests."""

import sys
import io
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from taskboard.core import repository  # noqa: E402
from taskboard.core.service import KanbanBoard  # noqa: E402


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


@pytest.fixture
def clock():
    """Clock frozen at 2024-06-01 12:00 UTC."""
    return FakeClock(datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def board(clock):
    """Sample board on the frozen clock."""
    return KanbanBoard.with_seed_data(clock=clock)


@pytest.fixture
def empty_board(clock):
    """Default columns, no tasks, frozen clock."""
    return KanbanBoard.empty(clock=clock)


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the repository at a temporary directory."""
    monkeypatch.setattr(repository, "DATA_DIR", tmp_path)
    monkeypatch.setattr(repository, "BOARD_PATH", tmp_path / "board.json")
    monkeypatch.setattr(repository, "SEED_SAMPLE_DATA", True)
    return tmp_path


@pytest.fixture
def task_fields():
    """Factory for valid add_task keyword arguments on the sample board."""
    def make(**overrides):
        fields = {
            "title": "Bridge load review",
            "description": "Check the load tables for span 3",
            "status": "to-do",
            "category": "Structural Engineering",
            "due_date": "2024-07-01",
            "assignees": ["1"],
        }
        fields.update(overrides)
        return fields
    return make
