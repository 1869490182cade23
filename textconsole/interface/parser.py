#!/usr/bin/env python3
# textconsole/interface/parser.py
from __future__ import annotations

"""
Line tokenizing and usage text.

Responsibilities:
- Split a raw console line into tokens on single spaces.
- Render the arity-mismatch line and a compact usage string for a command.
"""

from textconsole.commands import Command

TOKEN_SEPARATOR = " "


def tokenize(command_line: str) -> list[str]:
    """
    Split a line on single spaces.

    Consecutive spaces produce empty tokens ("a  b" -> ["a", "", "b"]) and
    surrounding whitespace is kept; callers wanting collapsed words must
    normalize first. A trailing line terminator is dropped and the empty
    line has no tokens.
    """
    if command_line.endswith("\r\n"):
        command_line = command_line[:-2]
    elif command_line.endswith("\n"):
        command_line = command_line[:-1]
    if command_line == "":
        return []
    return command_line.split(TOKEN_SEPARATOR)


def format_arity_mismatch(alias: str, expected: int, actual: int) -> str:
    """Single-line message for a matched alias with the wrong argument count."""
    return (
        f"The command {alias} takes {expected} arguments. "
        f"You entered {actual}. Type help for more information about commands."
    )


def build_usage(command_obj: Command) -> str:
    """
    Render a compact usage string.

    Examples:
        'quit'
        'echo <arg1>'
    """
    usage_parts = [f"<arg{i}>" for i in range(1, command_obj.arity + 1)]
    return " ".join([command_obj.name, *usage_parts])
