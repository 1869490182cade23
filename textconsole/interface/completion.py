#!/usr/bin/env python3
# textconsole/interface/completion.py
from __future__ import annotations

"""
Command line completion utilities.

Only the first token is completed, from the aliases of the currently
active commands. Arguments are raw text, so nothing is offered for them.
"""

from textconsole.commands import ActiveSet
from textconsole.interface.parser import TOKEN_SEPARATOR


def _split_current_token(raw_input: str) -> tuple[list[str], str]:
    """
    Return (parts, current_prefix).

    Splits exactly like the dispatcher does, so a trailing space starts a
    new (empty) token.
    """
    if not raw_input:
        return [], ""
    parts = raw_input.split(TOKEN_SEPARATOR)
    return parts, parts[-1]


def suggest(text_before_cursor: str, active_set: ActiveSet) -> list[str]:
    """Sorted aliases of active commands that extend the first token."""
    parts, current_prefix = _split_current_token(text_before_cursor)
    if len(parts) > 1:
        return []
    universe = set(active_set.names())
    return sorted(word for word in universe if word.startswith(current_prefix))
