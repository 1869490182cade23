#!/usr/bin/env python3
# textconsole/commands/__init__.py
from __future__ import annotations

"""
Package for command definitions and the registry.

Provides:
- Data structures and protocols (`Command`, `CommandCallback`, `DispatchResult`, `Outcome`).
- Errors (`TextConsoleError`, `InvalidCommandSpec`, `InputExhausted`).
- The immutable `CommandRegistry` and the mutable `ActiveSet`.

This package re-exports public APIs from:
- command_types.py
- commands.py
"""


# Re-export from submodules
from .command_types import (
    DEFAULT_INFO_TEXT,
    Command,
    CommandCallback,
    DispatchResult,
    InputExhausted,
    InvalidCommandSpec,
    Outcome,
    TextConsoleError,
)
from .commands import ActiveSet, CommandRegistry, discover_arity, make_command

__all__ = [
    "DEFAULT_INFO_TEXT",
    "Command",
    "CommandCallback",
    "DispatchResult",
    "Outcome",
    "TextConsoleError",
    "InvalidCommandSpec",
    "InputExhausted",
    "ActiveSet",
    "CommandRegistry",
    "discover_arity",
    "make_command",
]
