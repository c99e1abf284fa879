"""
FILE: taskboard/cli/commands/system.py
PURPOSE: System commands (version, help, stats, repl)
"""

import json

import typer

# Import shared objects from main module
# These will be available after main.py imports this module
from ..main import app, console, emit_json, fail, open_board, __version__
from ...core.exceptions import TaskboardError
from ...formatting import analytics_table


@app.command()
def version():
    """Show Taskboard version."""
    console.print(f"Taskboard v{__version__}")


@app.command()
def help():
    """Show available commands and usage."""
    console.print("\n[bold cyan]Taskboard[/bold cyan] - Kanban task board for engineering jobs\n")
    console.print(f"[dim]Version {__version__}[/dim]\n")

    console.print("[bold]Usage:[/bold]")
    console.print("  taskboard [command] [options]")
    console.print("  taskboard                    [dim]# Launch interactive REPL (default)[/dim]\n")

    console.print("[bold]Commands:[/bold]")

    commands = [
        ("add", "Create a new task", 'taskboard add "Title" -D "Description" -c Category -d 2024-05-01 -a 1'),
        ("ls", "List tasks (saved filters apply)", "taskboard ls [--status COL] [--search TEXT]"),
        ("show", "View full task details", "taskboard show <task_id>"),
        ("edit", "Update task fields", "taskboard edit <task_id> --priority High"),
        ("mv", "Move task to column", 'taskboard mv <task_id> "In Progress"'),
        ("done", "Move task(s) to Completed", "taskboard done <task_id>[,<task_id>...]"),
        ("rm", "Delete task(s)", "taskboard rm <task_id>[,<task_id>...]"),
        ("board", "Tasks grouped by column", "taskboard board"),
        ("stats", "Board analytics", "taskboard stats"),
        ("column add", "Create a column", 'taskboard column add "Site Visit"'),
        ("column ls", "List columns", "taskboard column ls"),
        ("column rename", "Rename a column", 'taskboard column rename quoted "Quote Sent"'),
        ("column rm", "Delete an empty column", "taskboard column rm cancelled"),
        ("column reorder", "Reorder columns", "taskboard column reorder to-do,in-progress"),
        ("filter set", "Save filters", "taskboard filter set --priority High"),
        ("filter show", "Show saved filters", "taskboard filter show"),
        ("filter clear", "Remove saved filters", "taskboard filter clear"),
        ("repl", "Launch interactive REPL", "taskboard repl"),
        ("version", "Show version", "taskboard version"),
        ("help", "Show this help message", "taskboard help"),
    ]

    for cmd, desc, example in commands:
        console.print(f"  [green]{cmd:14}[/green] {desc}")
        console.print(f"                 [dim]{example}[/dim]\n", highlight=False)

    console.print("[bold]Global Options:[/bold]")
    console.print("  [yellow]--verbose[/yellow] Log audit records to stderr")
    console.print("  [yellow]--json[/yellow]    Output as JSON (for scripting)")
    console.print("  [yellow]--raw[/yellow]     Plain text output (no colors)")
    console.print("  [yellow]--help[/yellow]    Show detailed help for a command\n")


@app.command()
def stats(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show board analytics (counts, overdue, completed in the last 7 days).

    Analytics always cover every task; saved filters do not apply.
    """
    board = open_board()
    analytics = board.get_task_analytics()

    if json_output:
        emit_json(json.dumps(analytics.to_dict(), indent=2))
        return

    console.print(analytics_table(analytics))


@app.command()
def repl():
    """Launch interactive REPL mode."""
    from ...repl import main as repl_main
    try:
        repl_main()
    except TaskboardError as e:
        fail(e)
