"""
FILE: taskboard/cli/commands/tasks.py
PURPOSE: Task management commands (add, ls, show, edit, mv, done, rm)
"""

from typing import Optional

import typer

from ..main import app, console, error_console, emit_json, open_board, persist, fail
from ...core.constants import DEFAULT_PRIORITY
from ...core.exceptions import TaskboardError, TaskNotFoundError
from ...formatting import TaskFormatter, build_criteria, error_lines, parse_ids, split_values


@app.command()
def add(
    title: str = typer.Argument(..., help="Task title"),
    description: str = typer.Option(..., "--description", "-D", help="Task description (10+ characters)"),
    category: str = typer.Option(..., "--category", "-c", help="Task category"),
    due: str = typer.Option(..., "--due", "-d", help="Due date (YYYY-MM-DD)"),
    assignees: str = typer.Option(..., "--assignee", "-a", help="Assignee IDs (comma-separated)"),
    status: str = typer.Option("to-do", "--status", "-s", help="Column id or title"),
    priority: str = typer.Option(DEFAULT_PRIORITY, "--priority", "-p", help="High, Medium or Low"),
    project_id: Optional[str] = typer.Option(None, "--project", help="Project reference"),
    estimated_hours: Optional[float] = typer.Option(None, "--estimate", help="Estimated hours"),
    actual_hours: float = typer.Option(0, "--actual", help="Hours already spent"),
    tags: Optional[str] = typer.Option(None, "--tag", "-t", help="Tags (comma-separated)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Create a new task.

    Example:
        taskboard add "Bridge load review" -D "Check load tables for span 3" \\
            -c "Structural Engineering" -d 2024-05-01 -a 1,3
    """
    try:
        board = open_board()
        task = board.add_task(
            title=title,
            description=description,
            status=board.resolve_column(status),
            category=category,
            due_date=due,
            assignees=split_values(assignees),
            priority=priority,
            project_id=project_id,
            estimated_hours=estimated_hours,
            actual_hours=actual_hours,
            tags=split_values(tags),
        )
        persist(board)

        if json_output:
            emit_json(task.to_json())
        elif raw:
            console.print(f"{task.id}: {task.title}")
        else:
            console.print(f"[green]✓ Created task [bold]{task.id}[/bold]:[/green] {task.title}")

    except TaskboardError as e:
        fail(e)


@app.command()
def ls(
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Only tasks in this column"),
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Text in title, description or tags"),
    categories: Optional[str] = typer.Option(None, "--category", "-c", help="Categories (comma-separated)"),
    priorities: Optional[str] = typer.Option(None, "--priority", "-p", help="Priorities (comma-separated)"),
    assignees: Optional[str] = typer.Option(None, "--assignee", "-a", help="Assignee IDs (comma-separated)"),
    start: Optional[str] = typer.Option(None, "--from", help="Earliest due date (YYYY-MM-DD)"),
    end: Optional[str] = typer.Option(None, "--to", help="Latest due date (YYYY-MM-DD)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    List tasks matching the saved filters.

    Any filter option replaces the saved filters for this listing only.

    Example:
        taskboard ls
        taskboard ls --status "In Progress"
        taskboard ls --category "MEP Systems" --priority High,Medium
        taskboard ls --json
    """
    try:
        board = open_board()

        criteria = None
        if any([search, categories, priorities, assignees, start, end]):
            criteria = build_criteria(search, categories, priorities, assignees, start, end)

        if status:
            tasks = board.get_tasks_by_status(criteria).get(board.resolve_column(status), [])
        else:
            tasks = board.get_filtered_tasks(criteria)

        if json_output:
            emit_json(TaskFormatter.to_json_array(tasks))
        elif raw:
            for line in TaskFormatter.to_raw_lines(tasks):
                console.print(line, markup=False, highlight=False)
        else:
            if not tasks:
                console.print("[dim]No tasks found[/dim]")
                return
            console.print(TaskFormatter.create_table(tasks, now=board.now()))
            console.print(f"\n[dim]Total: {len(tasks)} task(s)[/dim]")

    except TaskboardError as e:
        fail(e)


@app.command()
def show(
    task_id: str = typer.Argument(..., help="Task ID to view"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show full details for a task.

    Example:
        taskboard show task-3f9a1c2b7d4e
    """
    board = open_board()
    task = board.get_task(task_id)
    if not task:
        fail(TaskNotFoundError(task_id))

    if json_output:
        emit_json(task.to_json())
        return

    names = {a.id: a.name for a in board.assignees}
    console.print(TaskFormatter.details_panel(task, names))


@app.command()
def edit(
    task_id: str = typer.Argument(..., help="Task ID to edit"),
    title: Optional[str] = typer.Option(None, "--title", help="New title"),
    description: Optional[str] = typer.Option(None, "--description", "-D", help="New description"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="New category"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p", help="High, Medium or Low"),
    due: Optional[str] = typer.Option(None, "--due", "-d", help="New due date (YYYY-MM-DD)"),
    assignees: Optional[str] = typer.Option(None, "--assignee", "-a", help="Assignee IDs (comma-separated)"),
    project_id: Optional[str] = typer.Option(None, "--project", help="Project reference"),
    estimated_hours: Optional[float] = typer.Option(None, "--estimate", help="Estimated hours"),
    actual_hours: Optional[float] = typer.Option(None, "--actual", help="Hours spent"),
    tags: Optional[str] = typer.Option(None, "--tag", "-t", help="Tags (comma-separated, replaces)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Update one or more fields of a task.

    Example:
        taskboard edit task-3f9a1c2b7d4e --priority High --actual 12
    """
    changes = {
        "title": title,
        "description": description,
        "category": category,
        "priority": priority,
        "due_date": due,
        "project_id": project_id,
        "estimated_hours": estimated_hours,
        "actual_hours": actual_hours,
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    if assignees is not None:
        changes["assignees"] = split_values(assignees)
    if tags is not None:
        changes["tags"] = split_values(tags)

    if not changes:
        error_console.print("[red]Error:[/red] Nothing to update. Pass at least one field option.")
        raise typer.Exit(1)

    try:
        board = open_board()
        task = board.update_task(task_id, **changes)
        persist(board)

        if json_output:
            emit_json(task.to_json())
        else:
            console.print(f"[blue]✎[/blue] Updated task {task.id}: {task.title}")

    except TaskboardError as e:
        fail(e)


@app.command()
def mv(
    task_id: str = typer.Argument(..., help="Task ID to move"),
    column: str = typer.Argument(..., help="Target column id or title (e.g., 'In Progress')"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Move a task to a different column.

    Example:
        taskboard mv task-3f9a1c2b7d4e "In Progress"
        taskboard mv task-3f9a1c2b7d4e quoted
    """
    try:
        board = open_board()
        task = board.move_task(task_id, board.resolve_column(column))
        persist(board)

        if json_output:
            emit_json(task.to_json())
        else:
            console.print(f"[blue]→[/blue] Moved task {task.id} to [cyan]{task.status}[/cyan]")

    except TaskboardError as e:
        fail(e)


@app.command()
def done(
    task_ids: str = typer.Argument(..., help="Task ID(s) to complete (comma-separated)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Move one or more tasks to the Completed column.

    Example:
        taskboard done 3
        taskboard done 3,5,7
    """
    board = open_board()
    completed_tasks = []
    errors = []

    for task_id in parse_ids(task_ids):
        try:
            completed_tasks.append(board.complete_task(task_id))
        except TaskboardError as e:
            errors.extend(error_lines(e))

    if completed_tasks:
        persist(board)

    if json_output:
        emit_json(TaskFormatter.to_json_array(completed_tasks))
    elif raw:
        for task in completed_tasks:
            console.print(f"Completed: {task.title}", markup=False)
    else:
        for task in completed_tasks:
            console.print(f"[green]✓[/green] Completed: {task.title}")

    if errors:
        for error in errors:
            error_console.print(f"[red]Error:[/red] {error}")
        if not completed_tasks:
            raise typer.Exit(1)


@app.command()
def rm(
    task_ids: str = typer.Argument(..., help="Task ID(s) to delete (comma-separated)"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompt"),
):
    """
    Delete one or more tasks permanently.

    Confirms before deleting multiple tasks (use -y to skip).

    Example:
        taskboard rm 5
        taskboard rm 3,5,7 --yes
    """
    board = open_board()
    ids = parse_ids(task_ids)

    valid_ids = [i for i in ids if board.get_task(i)]
    errors = [f"Task {i} not found" for i in ids if i not in valid_ids]

    if valid_ids and not yes and len(valid_ids) > 1:
        console.print(f"[yellow]About to delete {len(valid_ids)} task(s)[/yellow]")
        if not typer.confirm("Continue?", default=False):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

    deleted = [board.delete_task(i) for i in valid_ids]
    if deleted:
        persist(board)

    for task in deleted:
        console.print(f"[red]✗[/red] Deleted task {task.id}: {task.title}")

    if errors:
        for error in errors:
            error_console.print(f"[red]Error:[/red] {error}")
        if not deleted:
            raise typer.Exit(1)
