"""Tests for JSON persistence of the board."""

import json

import pytest

from taskboard.core import repository
from taskboard.core.config import load_settings
from taskboard.core.exceptions import PersistenceError
from taskboard.core.models import FilterCriteria
from taskboard.core.service import KanbanBoard


def test_first_load_uses_sample_data(data_dir):
    board = repository.load_board()
    assert len(board.tasks) == 8
    assert not (data_dir / "board.json").exists(), "Loading never writes"


def test_first_load_without_seed_is_empty(data_dir, monkeypatch):
    monkeypatch.setattr(repository, "SEED_SAMPLE_DATA", False)
    board = repository.load_board()
    assert board.tasks == []
    assert len(board.columns) == 8


def test_save_then_load(data_dir, task_fields):
    board = repository.load_board()
    task = board.add_task(**task_fields())
    board.set_filters(FilterCriteria.build(priorities=["High"]))

    path = repository.save_board(board)
    assert path == data_dir / "board.json"

    reloaded = repository.load_board()
    assert reloaded.get_task(task.id) == task
    assert reloaded.filters == board.filters
    assert reloaded.columns == board.columns


def test_saved_file_is_plain_json(data_dir):
    repository.save_board(repository.load_board())
    data = json.loads((data_dir / "board.json").read_text(encoding="utf-8"))

    assert set(data) == {"tasks", "columns", "filters", "categories"}
    assert data["tasks"][0]["due_date"] == "2024-02-15"
    assert not list(data_dir.glob(".board-*")), "Temp files are cleaned up"


def test_corrupt_file_raises(data_dir):
    (data_dir / "board.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(PersistenceError):
        repository.load_board()


def test_non_object_file_raises(data_dir):
    (data_dir / "board.json").write_text("[]", encoding="utf-8")
    with pytest.raises(PersistenceError) as exc_info:
        repository.load_board()
    assert "expected a JSON object" in str(exc_info.value)


def test_malformed_snapshot_raises(data_dir):
    (data_dir / "board.json").write_text(json.dumps({"tasks": [{"title": "no id"}]}), encoding="utf-8")
    with pytest.raises(PersistenceError):
        repository.load_board()


def test_unwritable_location_raises(tmp_path, monkeypatch):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    monkeypatch.setattr(repository, "DATA_DIR", blocker / "data")
    monkeypatch.setattr(repository, "BOARD_PATH", blocker / "data" / "board.json")

    with pytest.raises(PersistenceError):
        repository.save_snapshot({"tasks": [], "columns": [], "filters": {}})


def test_settings_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("TASKBOARD_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKBOARD_LOG_LEVEL", "debug")
    monkeypatch.setenv("TASKBOARD_SEED", "0")

    settings = load_settings()

    assert settings.board_path == tmp_path / "board.json"
    assert settings.log_level == 10
    assert settings.seed_sample_data is False


def test_settings_defaults(monkeypatch):
    for name in ("TASKBOARD_DATA_DIR", "TASKBOARD_LOG_LEVEL", "TASKBOARD_SEED"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.data_dir.name == ".taskboard"
    assert settings.log_level == 30
    assert settings.seed_sample_data is True


@pytest.mark.parametrize("due_date", [None, ""])
def test_task_without_due_date_is_rejected_at_load(data_dir, due_date):
    snapshot = repository.load_board().snapshot()
    snapshot["tasks"][0]["due_date"] = due_date
    del snapshot["tasks"][1]["due_date"]
    (data_dir / "board.json").write_text(json.dumps(snapshot), encoding="utf-8")

    with pytest.raises(PersistenceError) as exc_info:
        repository.load_board()
    assert "malformed snapshot" in str(exc_info.value)


def test_custom_categories_survive_save_and_load(data_dir):
    board = KanbanBoard.empty(categories=["Surveying", "Geotechnical"])
    repository.save_board(board)

    reloaded = repository.load_board()
    assert reloaded.categories == ["Surveying", "Geotechnical"]
