"""
FILE: taskboard/repl/parser.py
PURPOSE: Parse user input into commands and arguments for REPL
EXPORTS:
  - ParseResult (dataclass for parsed commands)
  - parse_command(input_str) -> ParseResult
DEPENDENCIES:
  - shlex (for shell-like parsing with quotes)
  - dataclasses (for ParseResult)
NOTES:
  - Handles quoted strings: add "task with spaces"
  - Value flags take the next token: --priority High
  - Known switches never take a value: --json, --yes, --no-filters
  - Case-insensitive command names; args keep their case
"""

import shlex
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

# Flags that never consume the following token
SWITCHES = {"json", "raw", "yes", "no-filters"}


@dataclass
class ParseResult:
    """
    Result of parsing a REPL command.

    Attributes:
        command: The command name (e.g., "add", "ls", "column")
        args: Positional arguments (e.g., ["task-1", "In Progress"])
        flags: Flag arguments as dict (e.g., {"priority": "High", "json": True})
        raw_input: Original input string
    """
    command: str
    args: List[str] = field(default_factory=list)
    flags: Dict[str, Union[str, bool]] = field(default_factory=dict)
    raw_input: str = ""

    def flag(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """String value of a value flag, or default when absent or used bare."""
        value = self.flags.get(name)
        return value if isinstance(value, str) else default


def parse_command(input_str: str) -> ParseResult:
    """
    Parse REPL input into command, args, and flags.

    Examples:
        >>> parse_command('mv task-1 "In Progress"')
        ParseResult(command="mv", args=["task-1", "In Progress"], flags={})

        >>> parse_command("ls --priority High --json")
        ParseResult(command="ls", args=[], flags={"priority": "High", "json": True})

    Notes:
        - Unclosed quotes fall back to whitespace splitting
        - A value flag followed by another flag (or nothing) is a switch
        - Empty input returns command="" with no args/flags
    """
    input_str = input_str.strip()
    if not input_str:
        return ParseResult(command="", raw_input=input_str)

    try:
        tokens = shlex.split(input_str)
    except ValueError:
        tokens = input_str.split()

    if not tokens:
        return ParseResult(command="", raw_input=input_str)

    args: List[str] = []
    flags: Dict[str, Union[str, bool]] = {}
    i = 1
    while i < len(tokens):
        token = tokens[i]
        i += 1
        if not token.startswith("--") or token == "--":
            args.append(token)
            continue

        name = token[2:].lower()
        if name in SWITCHES or i >= len(tokens) or tokens[i].startswith("--"):
            flags[name] = True
            continue

        flags[name] = tokens[i]
        i += 1

    return ParseResult(
        command=tokens[0].lower(),
        args=args,
        flags=flags,
        raw_input=input_str,
    )
