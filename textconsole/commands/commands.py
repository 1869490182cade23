#!/usr/bin/env python3
# textconsole/commands/commands.py
from __future__ import annotations

"""
Command registry and activation set.

This module provides:
- make_command: validate a definition and build a Command.
- CommandRegistry: the immutable, ordered set of registered commands.
- ActiveSet: the mutable subset of the registry that takes part in dispatch.
"""

import inspect
import logging
from typing import Any, Callable, Iterable, Iterator, Optional, Sequence

from textconsole.commands.command_types import (
    DEFAULT_INFO_TEXT,
    Command,
    InvalidCommandSpec,
)

logger = logging.getLogger(__name__)


def discover_arity(handler: Callable[..., Any]) -> int:
    """
    Count the positional parameters of `handler`.

    Handlers taking *args or required keyword-only parameters have no fixed
    arity and are rejected.
    """
    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError) as exc:
        raise InvalidCommandSpec(
            f"Cannot inspect handler {handler!r}; pass arity explicitly.") from exc

    arity = 0
    for parameter in signature.parameters.values():
        if parameter.kind is parameter.VAR_POSITIONAL:
            raise InvalidCommandSpec(
                f"Handler {getattr(handler, '__name__', handler)!r} takes *{parameter.name}; "
                "a command needs a fixed arity.")
        if parameter.kind in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD):
            arity += 1
        elif parameter.kind is parameter.KEYWORD_ONLY and parameter.default is inspect.Parameter.empty:
            raise InvalidCommandSpec(
                f"Handler {getattr(handler, '__name__', handler)!r} requires keyword-only "
                f"argument {parameter.name!r}, which a console line cannot supply.")
    return arity


def make_command(
    aliases: Sequence[str],
    handler: Callable[..., Any],
    info_text: str | None = None,
    *,
    arity: int | None = None,
) -> Command:
    """Validate a command definition and return the Command."""
    if isinstance(aliases, str):
        aliases = [aliases]
    alias_tuple = tuple(aliases)
    if not alias_tuple:
        raise InvalidCommandSpec("A command needs at least one alias.")
    for alias in alias_tuple:
        if not isinstance(alias, str) or alias == "":
            raise InvalidCommandSpec(
                f"Aliases must be non-empty strings, got {alias!r}.")
        if " " in alias:
            raise InvalidCommandSpec(
                f"Alias {alias!r} contains a space and could never match a token.")

    if not callable(handler):
        raise InvalidCommandSpec(
            f"Handler for {alias_tuple[0]!r} is not callable.")

    if arity is None:
        arity = discover_arity(handler)
    elif isinstance(arity, bool) or not isinstance(arity, int) or arity < 0:
        raise InvalidCommandSpec(
            f"Arity for {alias_tuple[0]!r} must be a non-negative integer, got {arity!r}.")

    return Command(
        aliases=alias_tuple,
        arity=arity,
        handler=handler,
        info_text=DEFAULT_INFO_TEXT if info_text is None else info_text,
    )


class CommandRegistry:
    """Holds every command definition, in registration order. Never mutated."""

    __slots__ = ("_commands",)

    def __init__(self, commands: Iterable[Command] = ()) -> None:
        self._commands: tuple[Command, ...] = tuple(commands)

        seen: dict[str, Command] = {}
        for command_obj in self._commands:
            for alias in command_obj.aliases:
                owner = seen.get(alias)
                if owner is not None and owner is not command_obj:
                    # Allowed; the first command in active order wins at dispatch time.
                    logger.warning(
                        "Alias '%s' of '%s' is already used by '%s'.",
                        alias, command_obj.name, owner.name)
                seen.setdefault(alias, command_obj)

    # ---------------- Lookup ----------------

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    def __getitem__(self, index: int) -> Command:
        return self._commands[index]

    def all(self) -> tuple[Command, ...]:
        """Return every command in registration order."""
        return self._commands

    def names(self) -> list[str]:
        """Return every alias of every command, in registration order."""
        return [alias for cmd in self._commands for alias in cmd.aliases]

    def index_of(self, name: str) -> Optional[int]:
        """Index of the first command owning alias `name`, or None."""
        for index, command_obj in enumerate(self._commands):
            if name in command_obj.aliases:
                return index
        return None

    def find(self, name: str) -> Optional[Command]:
        """Return the first command owning alias `name`, or None."""
        index = self.index_of(name)
        return None if index is None else self._commands[index]


class ActiveSet:
    """
    Commands eligible for dispatch.

    Stored as its own list of registry indices, so clearing or growing it
    never touches the registry.
    """

    def __init__(self, registry: CommandRegistry) -> None:
        self._registry = registry
        self._indices: list[int] = []
        self.activate_all()

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    # ---------------- Mutation ----------------

    def activate_all(self) -> None:
        """Activate every registry command in registration order."""
        self._indices = list(range(len(self._registry)))

    def deactivate_all(self) -> None:
        self._indices = []

    def activate(self, name: str) -> bool:
        """
        Append the first registry command owning alias `name`.

        Returns True if a command was appended, False if none owns the
        alias or it is already active.
        """
        index = self._registry.index_of(name)
        if index is None:
            logger.debug("activate: no command owns alias '%s'", name)
            return False
        if index in self._indices:
            return False
        self._indices.append(index)
        return True

    def deactivate(self, name: str) -> bool:
        """Remove the first active command owning alias `name`."""
        for position, index in enumerate(self._indices):
            if name in self._registry[index].aliases:
                del self._indices[position]
                return True
        return False

    # ---------------- Lookup ----------------

    def commands(self) -> list[Command]:
        """Active commands in active order (a fresh list)."""
        return [self._registry[index] for index in self._indices]

    def names(self) -> list[str]:
        return [alias for cmd in self.commands() for alias in cmd.aliases]

    def contains(self, command_obj: Command) -> bool:
        return any(self._registry[index] is command_obj for index in self._indices)

    def find(self, name: str) -> Optional[Command]:
        """First active command owning alias `name`, in active order."""
        for command_obj in self.commands():
            if name in command_obj.aliases:
                return command_obj
        return None

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands())

    def __len__(self) -> int:
        return len(self._indices)
