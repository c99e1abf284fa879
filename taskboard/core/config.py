"""
FILE: taskboard/core/config.py
PURPOSE: Environment-driven settings
EXPORTS:
  - Settings (frozen dataclass)
  - load_settings() -> Settings
ENVIRONMENT:
  - TASKBOARD_DATA_DIR: Directory holding board.json (default ~/.taskboard)
  - TASKBOARD_LOG_LEVEL: Logging level name (default WARNING)
  - TASKBOARD_SEED: "1" to fall back to sample data on first run, "0" for an empty board
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

BOARD_FILENAME = "board.json"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    log_level: int
    seed_sample_data: bool

    @property
    def board_path(self) -> Path:
        return self.data_dir / BOARD_FILENAME


def load_settings() -> Settings:
    data_dir = os.getenv("TASKBOARD_DATA_DIR", "").strip()
    level_name = os.getenv("TASKBOARD_LOG_LEVEL", "WARNING").strip().upper()
    seed_raw = os.getenv("TASKBOARD_SEED", "1").strip().lower()

    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING

    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else Path.home() / ".taskboard",
        log_level=level,
        seed_sample_data=seed_raw not in ("0", "false", "no", "off"),
    )
