#!/usr/bin/env python3
# textconsole/interface/__init__.py
from __future__ import annotations

"""
Package for line parsing, command dispatch and input frontends.

Provides:
- Tokenizer and usage helpers.
- First-token completion over the active commands.
- The dispatch algorithm and help formatting.
- CLI frontends with history and completion (prompt_toolkit / readline / plain stream).
"""


# Parser FIRST (everything else depends on it)
from .parser import tokenize, format_arity_mismatch, build_usage

# Completion
from .completion import suggest

# Command dispatcher / help
from .handler import dispatch, format_help

# CLI frontends (after completion is available)
from .cli import (
    BaseCLI,
    StreamCLI,
    PromptToolkitCLI,
    ReadlineCLI,
    make_cli,
)

__all__ = [
    # parser
    "tokenize",
    "format_arity_mismatch",
    "build_usage",
    # completion
    "suggest",
    # handler
    "dispatch",
    "format_help",
    # cli
    "BaseCLI",
    "StreamCLI",
    "PromptToolkitCLI",
    "ReadlineCLI",
    "make_cli",
]
