"""
FILE: taskboard/repl/completer.py
PURPOSE: Autocomplete logic for REPL commands and arguments
EXPORTS:
  - TaskboardCompleter (Completer for command/arg completion)
  - create_completer(board) -> TaskboardCompleter
DEPENDENCIES:
  - prompt_toolkit.completion (Completer, Completion)
  - taskboard.core.service (KanbanBoard, for live task/column ids)
NOTES:
  - Suggests command names when at start of line
  - Suggests subcommands after "column" and "filter"
  - Suggests task IDs for commands expecting IDs; column ids for mv
  - Suggests priorities after --priority and categories after --category
  - Case-insensitive matching
"""

from typing import Iterable, List

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from ..core.constants import ALL_COLUMN_ID, VALID_PRIORITIES
from ..core.service import KanbanBoard


class TaskboardCompleter(Completer):
    """
    Context-aware completer bound to one board.

    Task and column ids are read from the board on every keystroke, so
    completions follow mutations made during the session.
    """

    COMMANDS = [
        "add", "ls", "show", "edit", "mv", "done", "rm", "board", "stats",
        "column", "filter", "help", "clear", "exit", "quit",
    ]

    SUBCOMMANDS = {
        "column": ["add", "ls", "rename", "rm", "reorder"],
        "filter": ["set", "clear", "show"],
    }

    COMMAND_FLAGS = {
        "add": ["--description", "--category", "--due", "--assignee", "--status",
                "--priority", "--project", "--estimate", "--actual", "--tag"],
        "edit": ["--title", "--description", "--category", "--due", "--assignee",
                 "--priority", "--project", "--estimate", "--actual", "--tag"],
        "ls": ["--status", "--search", "--category", "--priority", "--assignee",
               "--from", "--to", "--json"],
        "filter": ["--search", "--category", "--priority", "--assignee", "--from", "--to"],
        "board": ["--no-filters"],
        "rm": ["--yes"],
        "stats": ["--json"],
    }

    TASK_ID_COMMANDS = {"show", "edit", "mv", "done", "rm"}

    def __init__(self, board: KanbanBoard):
        self.board = board

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on current input.

        Logic:
            1. First word -> commands
            2. "column"/"filter" second word -> subcommands
            3. After --priority / --category / --status -> values
            4. Task id position -> task ids; mv target -> column ids
            5. Otherwise "--" prefix -> flags for the command
        """
        text = document.text_before_cursor
        words = text.split()
        at_new_word = text.endswith(" ")
        current = "" if at_new_word or not words else words[-1]

        if not words or (len(words) == 1 and not at_new_word):
            yield from self._matching(self.COMMANDS, current)
            return

        command = words[0].lower()
        position = len(words) if at_new_word else len(words) - 1

        if command in self.SUBCOMMANDS and position == 1:
            yield from self._matching(self.SUBCOMMANDS[command], current)
            return

        previous = words[-1] if at_new_word else (words[-2] if len(words) > 1 else "")
        if previous == "--priority":
            yield from self._matching(VALID_PRIORITIES, current)
            return
        if previous == "--category":
            yield from self._matching(self.board.categories, current)
            return
        if previous == "--status":
            yield from self._matching(self._column_ids(), current)
            return

        if current.startswith("--"):
            yield from self._matching(self.COMMAND_FLAGS.get(command, []), current)
            return

        if command in self.TASK_ID_COMMANDS and position == 1:
            yield from self._matching([t.id for t in self.board.tasks], current)
            return

        if command == "mv" and position == 2:
            yield from self._matching(self._column_ids(), current)
            return

        if command == "column" and len(words) > 1 and words[1] in ("rename", "rm") and position == 2:
            yield from self._matching(self._column_ids(), current)

    def _column_ids(self) -> List[str]:
        return [c.id for c in self.board.get_sorted_columns() if c.id != ALL_COLUMN_ID]

    @staticmethod
    def _matching(candidates: Iterable[str], word: str) -> Iterable[Completion]:
        word_lower = word.lower()
        for candidate in candidates:
            if candidate.lower().startswith(word_lower):
                yield Completion(candidate, start_position=-len(word), display=candidate)


def create_completer(board: KanbanBoard) -> TaskboardCompleter:
    """Create completer instance for REPL."""
    return TaskboardCompleter(board)
