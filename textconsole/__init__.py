#!/usr/bin/env python3
# textconsole/__init__.py
from __future__ import annotations
"""
Engine for interactive, line-oriented text consoles.

Register commands on a ConsoleBuilder, build a TextConsole and call
`prompt()` once per line you want to read.

Notes:
- `textconsole.commands` and `textconsole.interface` expose their own APIs
  through their __init__.py files; only the common entry points are
  re-exported here.
"""

from textconsole.commands import (
    Command,
    DispatchResult,
    InputExhausted,
    InvalidCommandSpec,
    Outcome,
    TextConsoleError,
)
from textconsole.config import ConsoleConfig, load_config
from textconsole.console import ConsoleBuilder, TextConsole

__version__ = "0.1.0"

__all__ = [
    "Command",
    "DispatchResult",
    "Outcome",
    "TextConsoleError",
    "InvalidCommandSpec",
    "InputExhausted",
    "ConsoleConfig",
    "load_config",
    "ConsoleBuilder",
    "TextConsole",
    "__version__",
]
