"""
FILE: taskboard/core/repository.py
PURPOSE: Board snapshot persistence (JSON file)
EXPORTS:
  - load_snapshot() -> dict | None
  - save_snapshot(snapshot) -> Path
  - load_board(**kwargs) -> KanbanBoard
  - save_board(board) -> Path
DEPENDENCIES:
  - json (stdlib)
  - pathlib (stdlib)
  - tempfile / os (atomic writes)
  - taskboard.core.service (KanbanBoard)
  - taskboard.core.config (load_settings)
NOTES:
  - Board stored at ~/.taskboard/board.json (TASKBOARD_DATA_DIR overrides)
  - DATA_DIR / BOARD_PATH are module attributes so tests can monkeypatch them
  - Auto-creates directory on first save
  - Missing file -> sample board (or empty board when seeding is off)
  - Read/write failures raise PersistenceError; the board in memory is untouched
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from .config import load_settings
from .exceptions import PersistenceError
from .service import KanbanBoard

logger = logging.getLogger(__name__)

_settings = load_settings()

# Board file location (cross-platform)
DATA_DIR = _settings.data_dir
BOARD_PATH = _settings.board_path
SEED_SAMPLE_DATA = _settings.seed_sample_data


def load_snapshot() -> Optional[Dict[str, Any]]:
    """
    Read the stored snapshot.

    Returns:
        Snapshot dict, or None if no board has been saved yet

    Raises:
        PersistenceError: If the file exists but can't be read or parsed
    """
    if not BOARD_PATH.exists():
        return None

    try:
        with open(BOARD_PATH, "r", encoding="utf-8") as f:
            snapshot = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise PersistenceError(BOARD_PATH, str(e)) from e

    if not isinstance(snapshot, dict):
        raise PersistenceError(BOARD_PATH, "expected a JSON object")
    return snapshot


def save_snapshot(snapshot: Dict[str, Any]) -> Path:
    """
    Write a snapshot atomically (temp file + rename).

    Returns:
        Path written

    Raises:
        PersistenceError: If the directory or file can't be written
    """
    try:
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=DATA_DIR, prefix=".board-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(snapshot, f, indent=2)
            os.replace(tmp_path, BOARD_PATH)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise PersistenceError(BOARD_PATH, str(e)) from e

    logger.debug(f"Saved board to {BOARD_PATH}")
    return BOARD_PATH


def load_board(**kwargs) -> KanbanBoard:
    """
    Load the stored board, falling back to built-in data on first run.

    Args:
        **kwargs: Passed to the KanbanBoard constructor (clock, id_factory, ...)

    Raises:
        PersistenceError: If a stored board exists but is unreadable
    """
    snapshot = load_snapshot()
    if snapshot is None:
        logger.info(f"No board at {BOARD_PATH}, starting from built-in data")
        if SEED_SAMPLE_DATA:
            return KanbanBoard.with_seed_data(**kwargs)
        return KanbanBoard.empty(**kwargs)

    try:
        return KanbanBoard.from_snapshot(snapshot, **kwargs)
    except (KeyError, TypeError, ValueError) as e:
        raise PersistenceError(BOARD_PATH, f"malformed snapshot ({e})") from e


def save_board(board: KanbanBoard) -> Path:
    """Persist the board's current snapshot."""
    return save_snapshot(board.snapshot())
