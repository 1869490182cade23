#!/usr/bin/env python3
# textconsole/interface/handler.py
from __future__ import annotations

"""
Command dispatch and help formatting.

Matching rules:
  - The active commands are walked in their stored order, and each
    command's aliases in declared order, against the first token.
  - The first alias match commits: the argument count is checked against
    that command only, with no fallback to another command.
  - A blank line runs the designated zero-arity command, if any, and is
    otherwise unrecognized.
"""

import logging
from typing import Any, Iterable, Optional, Sequence

from textconsole.commands import Command, DispatchResult, Outcome
from textconsole.interface.parser import format_arity_mismatch

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------


def _normalize_output(result: Any) -> str:
    """Handler return value -> printable text ("" prints nothing)."""
    if result is None:
        return ""
    if isinstance(result, DispatchResult):
        return result.message
    return str(result)


def _error_message(exc: BaseException) -> str:
    """Handler failure -> exactly one printable line."""
    message = " ".join(part.strip() for part in str(exc).splitlines() if part.strip())
    return message if message else type(exc).__name__


def format_help(active_commands: Iterable[Command]) -> list[str]:
    """One '<canonical-alias> : <info text>' line per active command."""
    return [f"{command_obj.name} : {command_obj.info_text}" for command_obj in active_commands]

# ---------------------------------------------------------------------------
# Core execution
# ---------------------------------------------------------------------------


def _invoke(command_obj: Command, alias: str, arguments: Sequence[str]) -> DispatchResult:
    """Run the handler; its failure is returned, never raised."""
    try:
        result = command_obj.invoke(*arguments)
    except Exception as exc:
        logger.info("Command '%s' failed: %s: %s",
                    alias, type(exc).__name__, exc)
        logger.debug("Handler traceback for '%s'", alias, exc_info=True)
        return DispatchResult(
            outcome=Outcome.HANDLER_ERROR,
            message=_error_message(exc),
            command=command_obj,
            alias=alias,
            error=exc,
        )

    logger.debug("Command '%s' ran with %d argument(s)", alias, len(arguments))
    return DispatchResult(
        outcome=Outcome.OK,
        message=_normalize_output(result),
        command=command_obj,
        alias=alias,
    )


def _unrecognized(unrecognized_text: str, token: str | None) -> DispatchResult:
    logger.debug("Unrecognized input: %r", token)
    return DispatchResult(outcome=Outcome.UNRECOGNIZED_INPUT, message=unrecognized_text)


def dispatch(
    active_commands: Sequence[Command],
    tokens: Sequence[str],
    *,
    unrecognized_text: str,
    blank_command: Optional[str] = None,
) -> DispatchResult:
    """
    Select and run exactly one handler for a tokenized line.

    Returns a DispatchResult whose message is the one line to print.
    """
    if not tokens:
        if blank_command is not None:
            for command_obj in active_commands:
                if blank_command in command_obj.aliases and command_obj.arity == 0:
                    return _invoke(command_obj, blank_command, ())
        return _unrecognized(unrecognized_text, None)

    first_token, arguments = tokens[0], list(tokens[1:])
    for command_obj in active_commands:
        alias = command_obj.matches(first_token)
        if alias is None:
            continue

        if len(arguments) == command_obj.arity:
            return _invoke(command_obj, alias, arguments)

        logger.debug("Arity mismatch for '%s': expected %d, got %d",
                     alias, command_obj.arity, len(arguments))
        return DispatchResult(
            outcome=Outcome.ARITY_MISMATCH,
            message=format_arity_mismatch(alias, command_obj.arity, len(arguments)),
            command=command_obj,
            alias=alias,
            expected=command_obj.arity,
            actual=len(arguments),
        )

    return _unrecognized(unrecognized_text, first_token)
