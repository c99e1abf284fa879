"""
FILE: taskboard/cli/main.py
PURPOSE: Typer-based CLI for one-shot board commands
EXPORTS:
  - app (Typer application)
  - main() (entry point)
  - open_board() / persist(board) - load/save helpers shared by commands
  - fail(error) - print a TaskboardError and exit 1
  - emit_json(text) - print JSON output verbatim
  - version(), help(), stats(), repl()       - system commands
  - add(), ls(), show(), edit(), mv(), done(), rm()  - task commands
  - column add|ls|rename|rm|reorder          - column commands
  - filter set|clear|show, board()           - filter commands and board view
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - taskboard.core.repository (load/save the board)
  - taskboard.core.exceptions (error handling)
  - taskboard.repl (interactive mode)
NOTES:
  - Listing commands support --json and --raw flags
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error
  - Each command loads the board, runs, and saves if it changed anything
  - A failed save is a warning: the command itself succeeded
"""

import logging
import sys

import typer
from rich.console import Console

from ..core import repository
from ..core.config import load_settings
from ..core.exceptions import PersistenceError, TaskboardError
from ..core.service import KanbanBoard
from ..formatting import error_lines

# Typer app setup
app = typer.Typer(
    name="taskboard",
    help="Kanban task board for engineering jobs",
    add_completion=False,
)

# Column sub-command group
column_app = typer.Typer(
    name="column",
    help="Column management commands",
)
app.add_typer(column_app, name="column")

# Filter sub-command group
filter_app = typer.Typer(
    name="filter",
    help="Saved filter commands",
)
app.add_typer(filter_app, name="filter")

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)

# Version
__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Send log records (including audit records) to stderr."""
    level = logging.INFO if verbose else load_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def emit_json(text: str) -> None:
    """Print JSON verbatim (no markup, highlighting or wrapping)."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def fail(error: Exception) -> None:
    """Print an error (one line per field/blocking task) and exit 1."""
    for line in error_lines(error):
        error_console.print(f"[red]Error:[/red] {line}")
    raise typer.Exit(1)


def open_board() -> KanbanBoard:
    """Load the stored board or exit with an error."""
    try:
        return repository.load_board()
    except PersistenceError as e:
        fail(e)


def persist(board: KanbanBoard) -> bool:
    """
    Save the board.

    Returns:
        True on success. On failure prints a warning and returns False;
        the command's result stands.
    """
    try:
        repository.save_board(board)
        return True
    except PersistenceError as e:
        logger.warning(f"Save failed: {e}")
        error_console.print(f"[yellow]Warning:[/yellow] Changes applied but not saved: {e.reason}")
        return False


@app.callback(invoke_without_command=True)
def default_command(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log audit records to stderr"),
):
    """
    Default callback - launches REPL when no command is specified.

    If a subcommand is invoked, this only sets up logging.
    """
    configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        from ..repl import main as repl_main
        try:
            repl_main()
        except TaskboardError as e:
            error_console.print(f"[red]Error starting REPL:[/red] {e}")
            raise typer.Exit(1)


# Import command modules to register commands with app
# Commands are decorated with @app.command() in their modules
from .commands import (  # noqa: E402
    # System commands
    version,
    help,
    stats,
    repl,
    # Task commands
    add,
    ls,
    show,
    edit,
    mv,
    done,
    rm,
    # Column commands
    column_add,
    column_ls,
    column_rename,
    column_rm,
    column_reorder,
    # Filter commands
    filter_set,
    filter_clear,
    filter_show,
    board,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
