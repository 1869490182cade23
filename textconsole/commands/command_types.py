#!/usr/bin/env python3
# textconsole/commands/command_types.py
from __future__ import annotations

"""
Command data structures, dispatch results and errors.

This module defines:
- CommandCallback: the callable protocol for any command handler.
- Command: a registered command (aliases, arity, handler, info text).
- Outcome / DispatchResult: the value returned for every dispatched line.
- TextConsoleError and its subclasses raised at setup time or on end-of-input.
"""

import enum
from dataclasses import dataclass
from typing import Any, Protocol

DEFAULT_INFO_TEXT = "Command does not have info text"


class TextConsoleError(Exception):
    """Base class for errors raised by the console engine."""


class InvalidCommandSpec(TextConsoleError, ValueError):
    """A command definition was rejected at registration time."""


class InputExhausted(TextConsoleError, EOFError):
    """The line source has no further input."""


class CommandCallback(Protocol):
    """Protocol for any command handler: takes `arity` strings."""

    def __call__(self, *args: str) -> Any:  # pragma: no cover - signature only
        ...


@dataclass(frozen=True, slots=True, eq=False)
class Command:
    """
    A registered command.

    Important fields:
        aliases: Every text selecting this command; the first one is canonical.
        arity: Number of string arguments the handler accepts.
        handler: Function implementing the command.
        info_text: Short, user-facing description shown by help.

    Equality is identity: two registrations with the same aliases are
    still distinct commands.
    """

    aliases: tuple[str, ...]
    arity: int
    handler: CommandCallback
    info_text: str = DEFAULT_INFO_TEXT

    @property
    def name(self) -> str:
        """Canonical alias."""
        return self.aliases[0]

    def matches(self, token: str) -> str | None:
        """Return the first alias equal to `token`, or None."""
        for alias in self.aliases:
            if alias == token:
                return alias
        return None

    def invoke(self, *args: str) -> Any:
        """Execute the underlying handler with the provided arguments."""
        return self.handler(*args)


class Outcome(enum.Enum):
    OK = "ok"
    UNRECOGNIZED_INPUT = "unrecognized_input"
    ARITY_MISMATCH = "arity_mismatch"
    HANDLER_ERROR = "handler_error"


@dataclass(slots=True)
class DispatchResult:
    """
    Result of dispatching one line.

    Attributes:
        outcome: Which branch of the dispatch algorithm ended the line.
        message: The single line to show the user ("" means print nothing).
        command: The matched command, if any alias matched.
        alias: The alias that matched the first token.
        expected / actual: Arity numbers for ARITY_MISMATCH.
        error: The exception raised by the handler for HANDLER_ERROR.
    """
    outcome: Outcome
    message: str = ""
    command: Command | None = None
    alias: str | None = None
    expected: int | None = None
    actual: int | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    def __str__(self) -> str:
        # Keep CLI printing predictable
        return self.message
