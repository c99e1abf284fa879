"""
FILE: taskboard/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Export all command handlers for easy importing
from .tasks import (
    add,
    ls,
    show,
    edit,
    mv,
    done,
    rm,
)
from .columns import (
    column_add,
    column_ls,
    column_rename,
    column_rm,
    column_reorder,
)
from .filters import (
    filter_set,
    filter_clear,
    filter_show,
    board,
)
from .system import (
    version,
    help,
    stats,
    repl,
)

__all__ = [
    "add",
    "ls",
    "show",
    "edit",
    "mv",
    "done",
    "rm",
    "column_add",
    "column_ls",
    "column_rename",
    "column_rm",
    "column_reorder",
    "filter_set",
    "filter_clear",
    "filter_show",
    "board",
    "version",
    "help",
    "stats",
    "repl",
]
