"""
FILE: taskboard/repl/commands/tasks.py
PURPOSE: Task command handlers for REPL
"""

from typing import Any, Dict, Optional, Union

from ..parser import ParseResult
from ..session import REPLSession
from ...core.constants import DEFAULT_PRIORITY
from ...core.exceptions import TaskboardError, TaskNotFoundError
from ...formatting import TaskFormatter, build_criteria, error_lines, parse_ids, split_values

# REPL flag name -> Task field name
EDIT_FLAGS = {
    "title": "title",
    "description": "description",
    "category": "category",
    "priority": "priority",
    "due": "due_date",
    "project": "project_id",
    "estimate": "estimated_hours",
    "actual": "actual_hours",
}


# Helper function
def ask_confirmation(message: str) -> bool:
    """Ask user for confirmation (y/n)."""
    response = input(f"{message} (y/n): ").strip().lower()
    return response in ("y", "yes")


def _number(value: Optional[str]) -> Union[float, str, None]:
    """Float for numeric flag values; anything else passes through for validation."""
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return value


def handle_add_command(result: ParseResult, session: REPLSession) -> None:
    """
    Handle 'add' command - create new task.

    Args:
        result: Parsed command with args and flags
        session: Current REPL session

    Usage:
        add "Bridge load review" --description "Check load tables for span 3"
            --category "Structural Engineering" --due 2024-05-01 --assignee 1,3
    """
    console = session.console
    if not result.args:
        console.print("[red]Error:[/red] Task title required")
        console.print(
            "[dim]Usage: add <title> --description TEXT --category NAME "
            "--due YYYY-MM-DD --assignee ID[,ID] [--status COL] [--priority P][/dim]"
        )
        return

    # Join all args as the title (in case they didn't use quotes)
    title = " ".join(result.args)
    board = session.board

    try:
        task = board.add_task(
            title=title,
            description=result.flag("description", ""),
            status=board.resolve_column(result.flag("status", "to-do")),
            category=result.flag("category", ""),
            due_date=result.flag("due"),
            assignees=split_values(result.flag("assignee")),
            priority=result.flag("priority", DEFAULT_PRIORITY),
            project_id=result.flag("project"),
            estimated_hours=_number(result.flag("estimate")),
            actual_hours=_number(result.flag("actual", "0")),
            tags=split_values(result.flag("tag")),
        )
        session.commit()
        console.print(f"[green]✓ Created task [bold]{task.id}[/bold]:[/green] {task.title}")
    except TaskboardError as e:
        session.report(e)


def handle_ls_command(result: ParseResult, session: REPLSession) -> None:
    """
    Handle 'ls' command - list tasks matching the saved filters.

    Usage:
        ls
        ls --status "In Progress"
        ls --priority High,Medium --json
    """
    console = session.console
    board = session.board
    filter_names = ("search", "category", "priority", "assignee", "from", "to")

    try:
        criteria = None
        if any(result.flag(name) for name in filter_names):
            criteria = build_criteria(
                result.flag("search"),
                result.flag("category"),
                result.flag("priority"),
                result.flag("assignee"),
                result.flag("from"),
                result.flag("to"),
            )

        status = result.flag("status")
        if status:
            tasks = board.get_tasks_by_status(criteria).get(board.resolve_column(status), [])
        else:
            tasks = board.get_filtered_tasks(criteria)
    except TaskboardError as e:
        session.report(e)
        return

    if result.flags.get("json"):
        console.print(TaskFormatter.to_json_array(tasks), markup=False, highlight=False, soft_wrap=True)
        return

    if not tasks:
        console.print("[dim]No tasks found[/dim]")
        return

    console.print(TaskFormatter.create_table(tasks, now=board.now()))
    console.print(f"\n[dim]Total: {len(tasks)} task(s)[/dim]")


def handle_show_command(result: ParseResult, session: REPLSession) -> None:
    """
    Handle 'show' command - full details for one task.

    Usage:
        show <task_id>
    """
    if not result.args:
        session.console.print("[red]Error:[/red] Task ID required")
        session.console.print("[dim]Usage: show <task_id>[/dim]")
        return

    task = session.board.get_task(result.args[0])
    if not task:
        session.report(TaskNotFoundError(result.args[0]))
        return

    names = {a.id: a.name for a in session.board.assignees}
    session.console.print(TaskFormatter.details_panel(task, names))


def handle_edit_command(result: ParseResult, session: REPLSession) -> None:
    """
    Handle 'edit' command - update task fields.

    Usage:
        edit <task_id> --priority High --actual 12
        edit <task_id> --assignee 2,4 --tag survey,urgent
    """
    console = session.console
    if not result.args:
        console.print("[red]Error:[/red] Task ID required")
        console.print("[dim]Usage: edit <task_id> --field value [--field value...][/dim]")
        return

    changes: Dict[str, Any] = {}
    for flag_name, field_name in EDIT_FLAGS.items():
        value = result.flag(flag_name)
        if value is not None:
            changes[field_name] = value
    for field_name in ("estimated_hours", "actual_hours"):
        if field_name in changes:
            changes[field_name] = _number(changes[field_name])
    if result.flag("assignee") is not None:
        changes["assignees"] = split_values(result.flag("assignee"))
    if result.flag("tag") is not None:
        changes["tags"] = split_values(result.flag("tag"))

    if not changes:
        console.print("[red]Error:[/red] Nothing to update. Pass at least one --field value.")
        return

    try:
        task = session.board.update_task(result.args[0], **changes)
        session.commit()
        console.print(f"[blue]✎[/blue] Updated task {task.id}: {task.title}")
    except TaskboardError as e:
        session.report(e)


def handle_mv_command(result: ParseResult, session: REPLSession) -> None:
    """
    Handle 'mv' command - move task to another column.

    Usage:
        mv <task_id> <column>
        mv task-3f9a1c2b7d4e "In Progress"
    """
    console = session.console
    if len(result.args) < 2:
        console.print("[red]Error:[/red] Task ID and column required")
        console.print("[dim]Usage: mv <task_id> <column>[/dim]")
        return

    task_id = result.args[0]
    # Allow unquoted multi-word titles: mv 3 In Progress
    column = " ".join(result.args[1:])

    try:
        task = session.board.move_task(task_id, session.board.resolve_column(column))
        session.commit()
        console.print(f"[blue]→[/blue] Moved task {task.id} to [cyan]{task.status}[/cyan]")
    except TaskboardError as e:
        session.report(e)


def handle_done_command(result: ParseResult, session: REPLSession) -> None:
    """
    Handle 'done' command - move task(s) to Completed.

    Usage:
        done 3
        done 3,5,7
    """
    console = session.console
    if not result.args:
        console.print("[red]Error:[/red] Task ID required")
        console.print("[dim]Usage: done <task_id>[,<task_id>...][/dim]")
        return

    completed = []
    for task_id in parse_ids(",".join(result.args)):
        try:
            completed.append(session.board.complete_task(task_id))
        except TaskboardError as e:
            for line in error_lines(e):
                console.print(f"[red]Error:[/red] {line}")

    if completed:
        session.commit()
    for task in completed:
        console.print(f"[green]✓[/green] Completed: {task.title}")


def handle_rm_command(result: ParseResult, session: REPLSession) -> None:
    """
    Handle 'rm' command - delete task(s).

    Asks before deleting more than one task unless --yes is given.

    Usage:
        rm 5
        rm 3,5,7 --yes
    """
    console = session.console
    if not result.args:
        console.print("[red]Error:[/red] Task ID required")
        console.print("[dim]Usage: rm <task_id>[,<task_id>...] [--yes][/dim]")
        return

    board = session.board
    ids = parse_ids(",".join(result.args))
    valid_ids = [i for i in ids if board.get_task(i)]

    for missing in (i for i in ids if i not in valid_ids):
        session.report(TaskNotFoundError(missing))

    if len(valid_ids) > 1 and not result.flags.get("yes"):
        if not ask_confirmation(f"Delete {len(valid_ids)} tasks?"):
            console.print("[yellow]Cancelled[/yellow]")
            return

    deleted = [board.delete_task(i) for i in valid_ids]
    if deleted:
        session.commit()
    for task in deleted:
        console.print(f"[red]✗[/red] Deleted task {task.id}: {task.title}")
