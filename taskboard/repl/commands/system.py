"""
FILE: taskboard/repl/commands/system.py
PURPOSE: System command handlers for REPL (help, clear)
"""

from rich.panel import Panel

from ..parser import ParseResult
from ..session import REPLSession


def handle_help_command(result: ParseResult, session: REPLSession) -> None:
    """
    Handle 'help' command - show available commands.

    Args:
        result: Parsed command (unused)
        session: Current REPL session
    """
    help_text = """
[bold cyan]Tasks:[/bold cyan]

  [cyan]add <title> --description TEXT --category NAME --due DATE --assignee IDS[/cyan]
                               Create a task [dim](--status COL, --priority P, --estimate H, --tag T)[/dim]
  [cyan]ls [--status COL] [--search TEXT][/cyan]  List tasks (saved filters apply)
  [cyan]show <id>[/cyan]                  View full task details
  [cyan]edit <id> --field value[/cyan]    Update task fields
  [cyan]mv <id> <column>[/cyan]           Move task to column (id or title)
  [cyan]done <id>[,<id>...][/cyan]        Move task(s) to Completed
  [cyan]rm <id>[,<id>...] [--yes][/cyan]  Delete task(s)

[bold cyan]Board:[/bold cyan]

  [cyan]board [--no-filters][/cyan]       Tasks grouped by column
  [cyan]stats [--json][/cyan]             Counts, overdue, completed in 7 days
  [cyan]column add <title> [--order N][/cyan]  Create a column
  [cyan]column ls[/cyan]                  List columns
  [cyan]column rename <col> <title>[/cyan] Rename a column
  [cyan]column rm <col>[/cyan]            Delete an empty column
  [cyan]column reorder <id>[,<id>...][/cyan]  Reorder columns
  [cyan]filter set --category C --priority P --assignee A --search S --from D --to D[/cyan]
  [cyan]filter show[/cyan] / [cyan]filter clear[/cyan]

[bold cyan]Session:[/bold cyan]

  [cyan]help[/cyan]                       Show this help
  [cyan]clear[/cyan]                      Clear the screen
  [cyan]exit[/cyan] or [cyan]quit[/cyan]              Exit REPL

[bold cyan]Examples:[/bold cyan]

  [dim]add "Span 3 review" --description "Check load tables for span 3" --category "Structural Engineering" --due 2024-05-01 --assignee 1,3
  mv 3 "In Progress"
  done 1,2,3
  filter set --priority High
  column reorder all-jobs,to-do,in-progress,completed[/dim]
"""
    session.console.print(Panel(help_text, title="Taskboard REPL Help", border_style="cyan"))


def handle_clear_command(result: ParseResult, session: REPLSession) -> None:
    """
    Clear the screen.

    Args:
        result: Parsed command (no arguments used)
        session: Current REPL session
    """
    session.console.clear()
    session.console.print("[dim]Screen cleared[/dim]")
