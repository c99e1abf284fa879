"""
FILE: taskboard/repl/session.py
PURPOSE: Per-session REPL state shared by the loop and the command handlers
EXPORTS:
  - REPLSession (board + console + save helper)
DEPENDENCIES:
  - rich (console output)
  - taskboard.core.repository (persisting the board)
NOTES:
  - Kept apart from repl.main to avoid circular imports with the handlers
  - The board lives for the whole session; every mutation is saved right away
"""

import logging
from dataclasses import dataclass, field

from rich.console import Console

from ..core import repository
from ..core.exceptions import PersistenceError
from ..core.service import KanbanBoard
from ..formatting import error_lines

logger = logging.getLogger(__name__)


@dataclass
class REPLSession:
    """
    State for one interactive session.

    Attributes:
        board: The board every command works on
        console: Where command output goes
        autosave: Save after each mutating command (off in tests)
    """
    board: KanbanBoard
    console: Console = field(default_factory=Console)
    autosave: bool = True

    def commit(self) -> bool:
        """
        Save the board after a mutation.

        Returns:
            False if saving failed. The change stays in memory.
        """
        if not self.autosave:
            return True
        try:
            repository.save_board(self.board)
            return True
        except PersistenceError as e:
            logger.warning(f"Save failed: {e}")
            self.console.print(
                f"[yellow]Warning:[/yellow] changes kept in this session but not saved: {e.reason}"
            )
            return False

    def report(self, error: Exception) -> None:
        """Print an error, one line per invalid field."""
        for line in error_lines(error):
            self.console.print(f"[red]Error:[/red] {line}")

    def get_prompt(self) -> str:
        """Plain prompt, e.g. "taskboard> " or "taskboard:[filtered]> "."""
        if self.board.filters.is_empty():
            return "taskboard> "
        return "taskboard:[filtered]> "
