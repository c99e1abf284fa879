"""
FILE: taskboard/cli/commands/filters.py
PURPOSE: Saved filter commands (filter set/clear/show) and the per-column board view
"""

import json
from typing import Optional

import typer

from ..main import app, filter_app, console, emit_json, open_board, persist, fail
from ...core.exceptions import TaskboardError
from ...core.models import FilterCriteria
from ...formatting import board_tables, build_criteria, describe_filters


@filter_app.command("set")
def filter_set(
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Text in title, description or tags"),
    categories: Optional[str] = typer.Option(None, "--category", "-c", help="Categories (comma-separated)"),
    priorities: Optional[str] = typer.Option(None, "--priority", "-p", help="Priorities (comma-separated)"),
    assignees: Optional[str] = typer.Option(None, "--assignee", "-a", help="Assignee IDs (comma-separated)"),
    start: Optional[str] = typer.Option(None, "--from", help="Earliest due date (YYYY-MM-DD)"),
    end: Optional[str] = typer.Option(None, "--to", help="Latest due date (YYYY-MM-DD)"),
):
    """
    Replace the saved filters used by `ls` and `board`.

    Example:
        taskboard filter set --category "MEP Systems" --priority High
        taskboard filter set --search metro --from 2024-02-01
    """
    try:
        criteria = build_criteria(search, categories, priorities, assignees, start, end)
        board_state = open_board()
        board_state.set_filters(criteria)
        persist(board_state)

        for line in describe_filters(criteria):
            console.print(f"[cyan]•[/cyan] {line}")

    except TaskboardError as e:
        fail(e)


@filter_app.command("clear")
def filter_clear():
    """Remove all saved filters."""
    board_state = open_board()
    board_state.clear_filters()
    persist(board_state)
    console.print("[green]✓ Filters cleared[/green]")


@filter_app.command("show")
def filter_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show the saved filters."""
    board_state = open_board()
    if json_output:
        emit_json(json.dumps(board_state.filters.to_dict(), indent=2))
        return
    for line in describe_filters(board_state.filters):
        console.print(line)


@app.command()
def board(
    no_filters: bool = typer.Option(False, "--no-filters", help="Ignore saved filters"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show tasks grouped by column, using the saved filters.

    The "All Jobs" column lists every matching task.

    Example:
        taskboard board
        taskboard board --json
    """
    board_state = open_board()
    criteria = FilterCriteria() if no_filters else None
    by_status = board_state.get_tasks_by_status(criteria)

    if json_output:
        data = {column_id: [t.id for t in tasks] for column_id, tasks in by_status.items()}
        emit_json(json.dumps(data, indent=2))
        return

    for table in board_tables(board_state.get_sorted_columns(), by_status, now=board_state.now()):
        console.print(table)
