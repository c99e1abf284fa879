"""
FILE: taskboard/repl/commands/filters.py
PURPOSE: Saved filter handlers (filter set|clear|show), board view and stats for REPL
"""

import json

from ..parser import ParseResult
from ..session import REPLSession
from ...core.exceptions import TaskboardError
from ...core.models import FilterCriteria
from ...formatting import analytics_table, board_tables, build_criteria, describe_filters


def handle_filter_command(result: ParseResult, session: REPLSession) -> None:
    """
    Handle 'filter' command.

    Usage:
        filter                              (same as filter show)
        filter set --category "MEP Systems" --priority High
        filter clear
    """
    console = session.console
    subcommand = result.args[0].lower() if result.args else "show"
    board = session.board

    if subcommand == "show":
        for line in describe_filters(board.filters):
            console.print(line)
    elif subcommand == "clear":
        board.clear_filters()
        session.commit()
        console.print("[green]✓ Filters cleared[/green]")
    elif subcommand == "set":
        try:
            criteria = build_criteria(
                result.flag("search"),
                result.flag("category"),
                result.flag("priority"),
                result.flag("assignee"),
                result.flag("from"),
                result.flag("to"),
            )
        except TaskboardError as e:
            session.report(e)
            return
        board.set_filters(criteria)
        session.commit()
        for line in describe_filters(criteria):
            console.print(f"[cyan]•[/cyan] {line}")
    else:
        console.print(f"[red]Error:[/red] Unknown filter command '{subcommand}'")
        console.print("[dim]Available: set, clear, show[/dim]")


def handle_board_command(result: ParseResult, session: REPLSession) -> None:
    """
    Handle 'board' command - tasks grouped by column.

    Usage:
        board
        board --no-filters
    """
    board = session.board
    criteria = FilterCriteria() if result.flags.get("no-filters") else None
    by_status = board.get_tasks_by_status(criteria)
    for table in board_tables(board.get_sorted_columns(), by_status, now=board.now()):
        session.console.print(table)


def handle_stats_command(result: ParseResult, session: REPLSession) -> None:
    """
    Handle 'stats' command - board analytics over every task.

    Usage:
        stats
        stats --json
    """
    analytics = session.board.get_task_analytics()
    if result.flags.get("json"):
        session.console.print(
            json.dumps(analytics.to_dict(), indent=2), markup=False, highlight=False, soft_wrap=True
        )
        return
    session.console.print(analytics_table(analytics))
