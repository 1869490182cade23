#!/usr/bin/env python3
# textconsole/console.py
from __future__ import annotations

"""
Console facade and setup-time registrar.

ConsoleBuilder collects command definitions (explicit `register` calls or
the `command` decorator) and builds a TextConsole. The console owns the
registry, the active set, its configuration and the line source / output
pair, and dispatches one line per `prompt()` call.
"""

import logging
import sys
from typing import IO, Any, Callable, Iterable, Optional, Sequence

from textconsole.commands import (
    ActiveSet,
    Command,
    CommandRegistry,
    DispatchResult,
    InvalidCommandSpec,
    make_command,
)
from textconsole.config import ConsoleConfig
from textconsole.interface import BaseCLI, dispatch, format_help, make_cli, tokenize
from textconsole.ui import print_line, write_text

logger = logging.getLogger(__name__)

HELP_ALIAS = "help"
HELP_INFO_TEXT = "Displays all possible commands"


class TextConsole:
    """
    Line-oriented console over a fixed set of commands.

    The registry is built once here from `commands` (plus the built-in
    help command, appended last) and never changes afterwards; only the
    active set does.
    """

    def __init__(
        self,
        commands: Iterable[Command],
        *,
        line_source: Optional[BaseCLI] = None,
        output: Optional[IO[str]] = None,
        config: Optional[ConsoleConfig] = None,
        include_help: bool = True,
    ) -> None:
        definitions = list(commands)
        if include_help:
            definitions.append(make_command([HELP_ALIAS], self.help, HELP_INFO_TEXT))

        self._registry = CommandRegistry(definitions)
        self._active = ActiveSet(self._registry)
        # Files and environment are only read when the host asks (load_config)
        self._config = config if config is not None else ConsoleConfig()
        self._output = output if output is not None else sys.stdout
        self._last_result: DispatchResult | None = None

        if self._config.blank_input_command is not None:
            self._check_blank_command(self._config.blank_input_command)

        if line_source is None:
            line_source = make_cli(
                self._active,
                history_file=self._config.history_file_path,
                enable_completion=self._config.enable_completion,
            )
        self._line_source = line_source
        logger.debug("Console ready with %d command(s), frontend %s",
                     len(self._registry), type(line_source).__name__)

    # ---------------- Properties ----------------

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    @property
    def active_set(self) -> ActiveSet:
        return self._active

    @property
    def config(self) -> ConsoleConfig:
        return self._config

    @property
    def last_result(self) -> DispatchResult | None:
        """Result of the most recent dispatched line."""
        return self._last_result

    # ---------------- Input / output ----------------

    def prompt(self, prompt_text: Optional[str] = None) -> bool:
        """
        Show the prompt, block for one line and dispatch it.

        Returns True if a handler ran to completion. InputExhausted from the
        line source propagates to the caller.
        """
        text = self._config.prompt_text if prompt_text is None else prompt_text
        if not self._line_source.renders_prompt:
            write_text(text, file=self._output)
        line = self._line_source.get_line(text)
        return self.execute(line).ok

    def execute(self, line: str) -> DispatchResult:
        """Dispatch an already-read line and print its one-line result."""
        result = dispatch(
            self._active.commands(),
            tokenize(line),
            unrecognized_text=self._config.unrecognized_input_text,
            blank_command=self._config.blank_input_command,
        )
        if result.message:
            self.println(result.message)
        self._last_result = result
        return result

    def println(self, text: str) -> None:
        print_line(text, file=self._output, flush=True)

    # ---------------- Configuration ----------------

    def set_default_prompt_text(self, text: str) -> None:
        self._config.prompt_text = text

    def set_unrecognized_input_text(self, text: str) -> None:
        self._config.unrecognized_input_text = text

    def set_blank_input_command(self, name: Optional[str]) -> None:
        """Designate the zero-arity command run on a blank line (None clears it)."""
        if name is not None:
            self._check_blank_command(name)
        self._config.blank_input_command = name

    def _check_blank_command(self, name: str) -> None:
        command_obj = self._registry.find(name)
        if command_obj is None:
            raise InvalidCommandSpec(f"Blank-input command {name!r} is not registered.")
        if command_obj.arity != 0:
            raise InvalidCommandSpec(
                f"Blank-input command {name!r} takes {command_obj.arity} arguments; it must take none.")

    # ---------------- Activation ----------------

    def activate_all_commands(self) -> None:
        self._active.activate_all()

    def deactivate_all_commands(self) -> None:
        self._active.deactivate_all()

    def activate_command(self, name: str) -> bool:
        return self._active.activate(name)

    def deactivate_command(self, name: str) -> bool:
        return self._active.deactivate(name)

    # ---------------- Built-in commands ----------------

    def help(self) -> None:
        """Print '<canonical-alias> : <info text>' for each active command."""
        for line in format_help(self._active.commands()):
            self.println(line)

    # Context manager helpers
    def __enter__(self) -> "TextConsole":
        self._line_source.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._line_source.__exit__(exc_type, exc, tb)


class ConsoleBuilder:
    """
    Collects command definitions at setup time.

    Usage:
        builder = ConsoleBuilder()

        @builder.command("quit", "q", "exit", info_text="Leave the console")
        def quit_console():
            raise SystemExit

        builder.register(["echo"], lambda word: word, "Print one word")
        console = builder.build()
    """

    def __init__(self, *, include_help: bool = True) -> None:
        self._commands: list[Command] = []
        self._include_help = include_help

    def register(
        self,
        aliases: Sequence[str],
        handler: Callable[..., Any],
        info_text: Optional[str] = None,
        *,
        arity: Optional[int] = None,
    ) -> "ConsoleBuilder":
        """Append a command definition; raises InvalidCommandSpec if malformed."""
        self._commands.append(make_command(aliases, handler, info_text, arity=arity))
        return self

    def command(
        self,
        *aliases: str,
        info_text: Optional[str] = None,
        arity: Optional[int] = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """
        Decorator to register a function as a command.

        - Without aliases the function name is used, snake_case turned into kebab-case.
        - Without info_text the first docstring line is used.
        """

        def wrapper(func: Callable[..., Any]) -> Callable[..., Any]:
            names = list(aliases) or [func.__name__.replace("_", "-")]
            doc = (func.__doc__ or "").strip().splitlines()
            text = info_text if info_text is not None else (doc[0].strip() if doc else None)
            self.register(names, func, text, arity=arity)
            return func

        return wrapper

    @property
    def commands(self) -> tuple[Command, ...]:
        return tuple(self._commands)

    def build(
        self,
        *,
        line_source: Optional[BaseCLI] = None,
        output: Optional[IO[str]] = None,
        config: Optional[ConsoleConfig] = None,
    ) -> TextConsole:
        return TextConsole(
            list(self._commands),
            line_source=line_source,
            output=output,
            config=config,
            include_help=self._include_help,
        )
