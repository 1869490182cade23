#!/usr/bin/env python3
# textconsole/__main__.py
from __future__ import annotations
"""
Demo console: `python -m textconsole`.

Shows registration, arity checks and enabling/disabling commands at
runtime. Reads from a terminal (with completion) or from a pipe.
"""

import sys

from textconsole.commands import InputExhausted
from textconsole.config import ConsoleConfig, load_config
from textconsole.console import ConsoleBuilder, TextConsole
from textconsole.ui import colorize, init_logger, print_line


def build_demo_console(config: ConsoleConfig) -> TextConsole:
    builder = ConsoleBuilder()
    holder: dict[str, TextConsole] = {}

    @builder.command("echo", "say", info_text="Repeat one word back")
    def echo(word):
        return word

    @builder.command("add", info_text="Add two integers")
    def add(left, right):
        return str(int(left) + int(right))

    @builder.command("enable", info_text="Activate a command by alias")
    def enable(name):
        if not holder["console"].activate_command(name):
            return f"{name} is unknown or already active"
        return None

    @builder.command("disable", info_text="Deactivate a command by alias")
    def disable(name):
        if not holder["console"].deactivate_command(name):
            return f"{name} is not active"
        return None

    @builder.command("reset", info_text="Activate every command again")
    def reset():
        holder["console"].activate_all_commands()

    @builder.command("quit", "q", "exit", info_text="Leave the console")
    def quit_console():
        raise SystemExit(0)

    console = builder.build(config=config)
    holder["console"] = console
    return console


def main() -> int:
    config = load_config()
    init_logger("textconsole", level=config.log_level or "WARNING",
                logfile=config.log_file_path)

    console = build_demo_console(config)
    print_line(colorize("textconsole demo. Type help for more information about commands.", "cyan"))
    with console:
        while True:
            try:
                console.prompt()
            except InputExhausted:
                console.println("")
                return 0
            except KeyboardInterrupt:
                console.println("")
                continue


if __name__ == "__main__":
    sys.exit(main())
