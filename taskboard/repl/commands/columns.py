"""
FILE: taskboard/repl/commands/columns.py
PURPOSE: Column command handlers for REPL (column add|ls|rename|rm|reorder)
"""

from collections import Counter

from ..parser import ParseResult
from ..session import REPLSession
from ...core.exceptions import TaskboardError
from ...formatting import ColumnFormatter, parse_ids


def _column_table(session: REPLSession, columns) -> None:
    counts = Counter(t.status for t in session.board.tasks)
    session.console.print(ColumnFormatter.create_table(columns, counts))


def handle_column_add_command(result: ParseResult, session: REPLSession) -> None:
    """
    Create a column.

    Usage:
        column add "Site Visit"
        column add Review --order 3
    """
    if not result.args:
        session.console.print("[red]Error:[/red] Column title required")
        session.console.print("[dim]Usage: column add <title> [--order N][/dim]")
        return

    order = result.flag("order")
    if order is not None:
        try:
            order = int(order)
        except ValueError:
            session.console.print(f"[red]Error:[/red] Order must be a whole number, got '{order}'")
            return

    try:
        column = session.board.add_column(" ".join(result.args), order=order)
        session.commit()
        session.console.print(f"[green]✓ Created column [bold]{column.id}[/bold]:[/green] {column.title}")
    except TaskboardError as e:
        session.report(e)


def handle_column_ls_command(result: ParseResult, session: REPLSession) -> None:
    """List columns in board order."""
    _column_table(session, session.board.get_sorted_columns())


def handle_column_rename_command(result: ParseResult, session: REPLSession) -> None:
    """
    Rename a column.

    Usage:
        column rename quoted "Quote Sent"
    """
    if len(result.args) < 2:
        session.console.print("[red]Error:[/red] Column and new title required")
        session.console.print("[dim]Usage: column rename <column> <new title>[/dim]")
        return

    board = session.board
    try:
        updated = board.update_column(board.resolve_column(result.args[0]), title=" ".join(result.args[1:]))
        session.commit()
        session.console.print(f"[blue]✎[/blue] Renamed column {updated.id} to {updated.title}")
    except TaskboardError as e:
        session.report(e)


def handle_column_rm_command(result: ParseResult, session: REPLSession) -> None:
    """
    Delete an empty column.

    Usage:
        column rm cancelled
    """
    if not result.args:
        session.console.print("[red]Error:[/red] Column required")
        session.console.print("[dim]Usage: column rm <column>[/dim]")
        return

    board = session.board
    try:
        removed = board.delete_column(board.resolve_column(" ".join(result.args)))
        session.commit()
        session.console.print(f"[red]✗[/red] Deleted column {removed.id}: {removed.title}")
    except TaskboardError as e:
        session.report(e)


def handle_column_reorder_command(result: ParseResult, session: REPLSession) -> None:
    """
    Reorder columns.

    Usage:
        column reorder all-jobs,to-do,in-progress,completed
        column reorder to-do in-progress
    """
    if not result.args:
        session.console.print("[red]Error:[/red] Column ids required")
        session.console.print("[dim]Usage: column reorder <id>[,<id>...][/dim]")
        return

    columns = session.board.reorder_columns(parse_ids(",".join(result.args)))
    session.commit()
    _column_table(session, columns)


COLUMN_SUBCOMMANDS = {
    "add": handle_column_add_command,
    "ls": handle_column_ls_command,
    "rename": handle_column_rename_command,
    "rm": handle_column_rm_command,
    "reorder": handle_column_reorder_command,
}


def handle_column_command(result: ParseResult, session: REPLSession) -> None:
    """
    Handle 'column' command - dispatch to a column subcommand.

    Usage:
        column              (same as column ls)
        column <add|ls|rename|rm|reorder> ...
    """
    if not result.args:
        handle_column_ls_command(result, session)
        return

    subcommand = result.args[0].lower()
    handler = COLUMN_SUBCOMMANDS.get(subcommand)
    if handler is None:
        session.console.print(f"[red]Error:[/red] Unknown column command '{subcommand}'")
        session.console.print(f"[dim]Available: {', '.join(COLUMN_SUBCOMMANDS)}[/dim]")
        return

    sub_result = ParseResult(
        command=f"column {subcommand}",
        args=result.args[1:],
        flags=result.flags,
        raw_input=result.raw_input,
    )
    handler(sub_result, session)
