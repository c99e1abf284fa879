"""
FILE: taskboard/cli/commands/columns.py
PURPOSE: Column management commands (column add, ls, rename, rm, reorder)
"""

from collections import Counter
from typing import Optional

import typer

from ..main import column_app, console, emit_json, open_board, persist, fail
from ...core.exceptions import TaskboardError
from ...formatting import ColumnFormatter, parse_ids


@column_app.command("add")
def column_add(
    title: str = typer.Argument(..., help="Column title (2-50 characters)"),
    order: Optional[int] = typer.Option(None, "--order", "-o", help="Position (default: last)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Create a new column.

    Example:
        taskboard column add "Site Visit"
        taskboard column add Review --order 3
    """
    try:
        board = open_board()
        column = board.add_column(title, order=order)
        persist(board)

        if json_output:
            emit_json(column.to_json())
        else:
            console.print(f"[green]✓ Created column [bold]{column.id}[/bold]:[/green] {column.title}")

    except TaskboardError as e:
        fail(e)


@column_app.command("ls")
def column_ls(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """List columns in board order."""
    board = open_board()
    columns = board.get_sorted_columns()

    if json_output:
        emit_json(ColumnFormatter.to_json_array(columns))
    elif raw:
        for line in ColumnFormatter.to_raw_lines(columns):
            console.print(line, markup=False, highlight=False)
    else:
        counts = Counter(t.status for t in board.tasks)
        console.print(ColumnFormatter.create_table(columns, counts))


@column_app.command("rename")
def column_rename(
    column: str = typer.Argument(..., help="Column id or title"),
    new_title: str = typer.Argument(..., help="New title"),
):
    """
    Rename a column.

    Example:
        taskboard column rename quoted "Quote Sent"
    """
    try:
        board = open_board()
        updated = board.update_column(board.resolve_column(column), title=new_title)
        persist(board)
        console.print(f"[blue]✎[/blue] Renamed column {updated.id} to {updated.title}")

    except TaskboardError as e:
        fail(e)


@column_app.command("rm")
def column_rm(
    column: str = typer.Argument(..., help="Column id or title"),
):
    """
    Delete an empty column.

    Columns that still hold tasks are never deleted; move or delete the
    tasks first.

    Example:
        taskboard column rm cancelled
    """
    try:
        board = open_board()
        removed = board.delete_column(board.resolve_column(column))
        persist(board)
        console.print(f"[red]✗[/red] Deleted column {removed.id}: {removed.title}")

    except TaskboardError as e:
        fail(e)


@column_app.command("reorder")
def column_reorder(
    column_ids: str = typer.Argument(..., help="Column ids in the new order (comma-separated)"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Reorder columns.

    Unknown ids are ignored. Columns left out keep their relative order
    after the listed ones.

    Example:
        taskboard column reorder all-jobs,to-do,in-progress,completed
    """
    board = open_board()
    columns = board.reorder_columns(parse_ids(column_ids))
    persist(board)

    if raw:
        for line in ColumnFormatter.to_raw_lines(columns):
            console.print(line, markup=False, highlight=False)
    else:
        console.print(ColumnFormatter.create_table(columns, Counter(t.status for t in board.tasks)))
