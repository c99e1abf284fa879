"""Tests for the REPL parser, completer and command dispatch."""

import io

import pytest
from prompt_toolkit.document import Document
from rich.console import Console

from taskboard.core import repository
from taskboard.repl.completer import create_completer
from taskboard.repl.main import execute_command
from taskboard.repl.parser import parse_command
from taskboard.repl.session import REPLSession


@pytest.fixture
def session(board):
    """Session writing to a buffer, saving disabled."""
    return REPLSession(board=board, console=Console(file=io.StringIO(), width=200), autosave=False)


def run(session, line):
    """Execute one REPL line and return what it printed."""
    session.console.file.seek(0)
    session.console.file.truncate()
    keep_going = execute_command(parse_command(line), session)
    assert keep_going
    return session.console.file.getvalue()


def completions(completer, text):
    doc = Document(text, cursor_position=len(text))
    return [c.text for c in completer.get_completions(doc, None)]


# --- Parser ---


def test_parse_quoted_args_and_flags():
    result = parse_command('mv 3 "In Progress"')
    assert result.command == "mv"
    assert result.args == ["3", "In Progress"]
    assert result.flags == {}


def test_parse_value_flags_and_switches():
    result = parse_command('LS --priority High --json --search "metro line"')
    assert result.command == "ls"
    assert result.flags == {"priority": "High", "json": True, "search": "metro line"}


def test_parse_flag_without_value_is_a_switch():
    result = parse_command("rm 1,2 --yes")
    assert result.args == ["1,2"]
    assert result.flags == {"yes": True}

    dangling = parse_command("ls --status")
    assert dangling.flags == {"status": True}
    assert dangling.flag("status") is None


def test_parse_unclosed_quote_falls_back():
    result = parse_command('add "unfinished title')
    assert result.command == "add"
    assert result.args == ['"unfinished', "title"]


def test_parse_empty_input():
    assert parse_command("   ").command == ""


# --- Completer ---


def test_command_completion(board):
    completer = create_completer(board)
    assert "mv" in completions(completer, "m")
    assert "column" in completions(completer, "co")


def test_subcommand_completion(board):
    completer = create_completer(board)
    assert completions(completer, "column re") == ["rename", "reorder"]
    assert set(completions(completer, "filter ")) == {"set", "clear", "show"}


def test_task_and_column_id_completion(board):
    completer = create_completer(board)
    assert completions(completer, "done ") == ["1", "2", "3", "4", "5", "6", "7", "8"]
    assert completions(completer, "mv 3 in") == ["in-progress", "in-review"]
    assert "all-jobs" not in completions(completer, "mv 3 ")


def test_completion_follows_board_changes(board):
    completer = create_completer(board)
    board.delete_task("8")
    assert "8" not in completions(completer, "rm ")


def test_flag_and_value_completion(board):
    completer = create_completer(board)
    assert "--priority" in completions(completer, "ls --p")
    assert completions(completer, "edit 3 --priority ") == ["High", "Medium", "Low"]
    assert completions(completer, "add x --category MEP") == ["MEP Systems"]


# --- Dispatch ---


def test_exit_and_empty_input(session):
    assert execute_command(parse_command("exit"), session) is False
    assert execute_command(parse_command("quit"), session) is False
    assert execute_command(parse_command(""), session) is True


def test_unknown_command(session):
    assert "Unknown command" in run(session, "frobnicate")


def test_add_and_mv(session):
    output = run(session, 'add "Span 3 review" --description "Check the load tables" '
                          '--category "Structural Engineering" --due 2024-07-01 --assignee 1,3')
    assert "Created task" in output

    task = session.board.tasks[-1]
    assert task.title == "Span 3 review"
    assert task.status == "to-do"

    output = run(session, f"mv {task.id} In Progress")
    assert "in-progress" in output
    assert session.board.get_task(task.id).status == "in-progress"


def test_add_reports_validation_errors(session):
    output = run(session, "add Span --due 2024-07-01")
    assert "description: Description is required" in output
    assert "assignees: At least one assignee is required" in output
    assert len(session.board.tasks) == 8


def test_edit_and_done(session):
    run(session, "edit 3 --priority Low --actual 4.5 --tag survey,urgent")
    task = session.board.get_task("3")
    assert task.priority == "Low"
    assert task.actual_hours == 4.5
    assert task.tags == ("survey", "urgent")

    output = run(session, "done 3,ghost")
    assert "Completed:" in output
    assert "Task ghost not found" in output
    assert session.board.get_task("3").status == "completed"


def test_edit_rejects_bad_hours(session):
    output = run(session, "edit 3 --estimate lots")
    assert "estimated_hours" in output


def test_rm_with_yes(session):
    run(session, "rm 2,5 --yes")
    assert session.board.get_task("2") is None
    assert session.board.get_task("5") is None


def test_column_commands(session):
    assert "Created column" in run(session, 'column add "Site Visit"')
    assert "still has 2 task(s)" in run(session, "column rm in-progress")
    run(session, "column rename quoted Quote Sent")
    assert session.board.get_column("quoted").title == "Quote Sent"

    run(session, "column reorder completed to-do")
    assert [c.id for c in session.board.get_sorted_columns()][:2] == ["completed", "to-do"]


def test_filter_and_ls(session):
    run(session, "filter set --priority High")
    assert session.get_prompt() == "taskboard:[filtered]> "

    output = run(session, "ls --json")
    assert '"id": "8"' not in output
    assert '"id": "7"' in output

    run(session, "filter clear")
    assert session.board.filters.is_empty()
    assert session.get_prompt() == "taskboard> "


def test_board_and_stats(session):
    assert "In Progress (2)" in run(session, "board")
    assert '"total": 8' in run(session, "stats --json")


def test_commit_saves_board(board, data_dir):
    buffer = io.StringIO()
    session = REPLSession(board=board, console=Console(file=buffer))
    execute_command(parse_command("done 3"), session)

    reloaded = repository.load_board()
    assert reloaded.get_task("3").status == "completed"


def test_commit_failure_keeps_change(board, tmp_path, monkeypatch):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    monkeypatch.setattr(repository, "DATA_DIR", blocker / "data")
    monkeypatch.setattr(repository, "BOARD_PATH", blocker / "data" / "board.json")

    buffer = io.StringIO()
    session = REPLSession(board=board, console=Console(file=buffer, width=200))
    execute_command(parse_command("done 3"), session)

    assert "not saved" in buffer.getvalue()
    assert board.get_task("3").status == "completed"
