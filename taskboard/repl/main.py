"""
FILE: taskboard/repl/main.py
PURPOSE: Interactive REPL for board management with prompt-toolkit
EXPORTS:
  - main() - Entry point for REPL mode
  - run_repl(session) - Main REPL loop
  - execute_command(result, session) - Dispatch one parsed command
DEPENDENCIES:
  - prompt_toolkit (REPL interface, history, completion)
  - rich (formatted output)
  - taskboard.core.repository (load the board once per session)
  - taskboard.repl.parser (command parsing)
  - taskboard.repl.completer (autocomplete)
NOTES:
  - Command history automatic with PromptSession
  - Bottom toolbar shows task counts; right prompt shows filtered count
  - Ctrl+D or "exit"/"quit" to exit
  - Calls the board directly (not the CLI layer)
  - Non-TTY input (pipes, tests) falls back to plain input()
"""

import logging
import sys
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console

from ..core import repository
from ..core.analytics import is_overdue
from .completer import create_completer
from .parser import ParseResult, parse_command
from .session import REPLSession
from .commands import (
    # Task handlers
    handle_add_command,
    handle_ls_command,
    handle_show_command,
    handle_edit_command,
    handle_mv_command,
    handle_done_command,
    handle_rm_command,
    # Board handlers
    handle_column_command,
    handle_filter_command,
    handle_board_command,
    handle_stats_command,
    # System handlers
    handle_help_command,
    handle_clear_command,
)

logger = logging.getLogger(__name__)

# Rich console for formatted output
console = Console()

HANDLERS = {
    "add": handle_add_command,
    "ls": handle_ls_command,
    "show": handle_show_command,
    "view": handle_show_command,
    "edit": handle_edit_command,
    "mv": handle_mv_command,
    "done": handle_done_command,
    "rm": handle_rm_command,
    "column": handle_column_command,
    "filter": handle_filter_command,
    "board": handle_board_command,
    "stats": handle_stats_command,
    "help": handle_help_command,
    "clear": handle_clear_command,
}


def format_prompt(session: REPLSession) -> HTML:
    """Prompt text; shows a marker while saved filters are active."""
    if session.board.filters.is_empty():
        return HTML("<b>taskboard&gt; </b>")
    return HTML("<b>taskboard:[<cyan>filtered</cyan>]&gt; </b>")


def get_bottom_toolbar(session: REPLSession) -> HTML:
    """Task total, overdue count and column count."""
    board = session.board
    now = board.now()
    overdue = sum(1 for t in board.tasks if is_overdue(t, now))
    text = (
        f"{len(board.tasks)} tasks | {overdue} overdue | "
        f"{len(board.columns)} columns | Type 'help' for commands"
    )
    return HTML(f"<style bg='#444444' fg='#ffffff'> {text} </style>")


def get_right_prompt(session: REPLSession) -> HTML:
    """Number of tasks visible under the saved filters."""
    board = session.board
    if board.filters.is_empty():
        return HTML(f"<style fg='#888888'>[{len(board.tasks)} total]</style>")
    return HTML(f"<style fg='#888888'>[{len(board.get_filtered_tasks())} in view]</style>")


def execute_command(result: ParseResult, session: REPLSession) -> bool:
    """
    Execute a parsed command.

    Args:
        result: Parsed command from parser
        session: Current REPL session

    Returns:
        True to continue REPL loop, False to exit
    """
    command = result.command.lower()

    # Exit commands
    if command in ("exit", "quit"):
        session.console.print("[dim]Goodbye![/dim]")
        return False

    # Empty command (just Enter pressed)
    if not command:
        return True

    handler = HANDLERS.get(command)
    if handler:
        handler(result, session)
    else:
        session.console.print(f"[red]Unknown command:[/red] {command}")
        session.console.print("[dim]Type 'help' for available commands[/dim]")

    # Add whitespace after command output for readability
    session.console.print()
    return True


def run_repl(session: REPLSession) -> None:
    """
    Main REPL loop.

    Sets up prompt_toolkit session with:
    - Command history (in-memory, not persisted)
    - Autocomplete (commands, ids, flags, values)
    - Toolbar and right prompt bound to the live board

    Exits on:
    - Ctrl+D (EOFError)
    - "exit" or "quit" commands
    """
    prompt_session: Optional[PromptSession] = None
    if sys.stdin.isatty() and sys.stdout.isatty():
        prompt_session = PromptSession(
            history=InMemoryHistory(),
            completer=create_completer(session.board),
            complete_while_typing=True,
            bottom_toolbar=lambda: get_bottom_toolbar(session),
            rprompt=lambda: get_right_prompt(session),
        )

    session.console.print("[bold cyan]Taskboard REPL[/bold cyan] - Type 'help' for commands, 'exit' to quit")
    if prompt_session is None:
        session.console.print("[dim](Running in simple mode - no autocomplete)[/dim]")
    session.console.print()

    while True:
        try:
            if prompt_session is None:
                user_input = input(session.get_prompt())
            else:
                user_input = prompt_session.prompt(format_prompt(session))

            if not execute_command(parse_command(user_input), session):
                break

        except KeyboardInterrupt:
            # Ctrl+C - show message and continue
            session.console.print("[dim]^C (Press Ctrl+D or type 'exit' to quit)[/dim]")
            continue
        except EOFError:
            # Ctrl+D or end of input - exit cleanly
            session.console.print()
            session.console.print("[dim]Goodbye![/dim]")
            break


def main() -> None:
    """
    Entry point for REPL mode.

    Called when user runs: taskboard repl (or taskboard with no command)

    Raises:
        PersistenceError: If the stored board cannot be read
    """
    board = repository.load_board()
    logger.info(f"REPL started with {len(board.tasks)} tasks from {repository.BOARD_PATH}")
    run_repl(REPLSession(board=board, console=console))


if __name__ == "__main__":
    main()
