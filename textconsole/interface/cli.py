#!/usr/bin/env python3
# textconsole/interface/cli.py
from __future__ import annotations

"""
Interactive input frontends (line sources).

Selection order:
    1) prompt_toolkit (rich completion + history)
    2) readline / pyreadline3 (basic completion + history)
    3) plain stream reading (pipes, files, tests)

Every frontend blocks for exactly one line and raises InputExhausted at
end of input.
"""

import logging
import sys
from pathlib import Path
from typing import IO, Optional

from textconsole.commands import ActiveSet, InputExhausted
from textconsole.interface.completion import suggest, _split_current_token
from textconsole.interface.parser import build_usage

logger = logging.getLogger(__name__)


class BaseCLI:
    """
    Base interface for CLI frontends.

    Subclasses should implement:
        - setup()
        - get_line(prompt_text)
        - teardown()

    `renders_prompt` tells the console whether the frontend draws the prompt
    itself; when False the console writes it to its output first.

    This base also provides context manager support to guarantee teardown.
    """

    renders_prompt: bool = False

    def setup(self) -> None:
        ...

    def get_line(self, prompt_text: str = "") -> str:  # pragma: no cover - interface
        raise NotImplementedError

    def teardown(self) -> None:
        ...

    # Context manager helpers
    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.teardown()
        except Exception:
            logger.debug("Frontend teardown failed", exc_info=True)


# ===== Plain stream =====
class StreamCLI(BaseCLI):
    """Reads lines from a text stream; no completion or history."""

    def __init__(self, stream: Optional[IO[str]] = None) -> None:
        self._stream = stream if stream is not None else sys.stdin

    def get_line(self, prompt_text: str = "") -> str:
        line = self._stream.readline()
        if line == "":
            raise InputExhausted("No further input available.")
        if line.endswith("\r\n"):
            return line[:-2]
        if line.endswith("\n"):
            return line[:-1]
        return line


# ===== Preferred: prompt_toolkit =====
class PromptToolkitCLI(BaseCLI):
    """Rich line editor with history and live completion."""

    renders_prompt = True

    def __init__(
        self,
        active_set: ActiveSet,
        *,
        history_file: Optional[Path] = None,
        enable_completion: bool = True,
    ) -> None:
        from prompt_toolkit import prompt
        from prompt_toolkit.completion import Completer, Completion
        from prompt_toolkit.history import FileHistory, InMemoryHistory
        from prompt_toolkit.key_binding import KeyBindings

        self._prompt = prompt
        self._history_file = history_file
        self._history = FileHistory(str(history_file)) if history_file else InMemoryHistory()
        self._enable_completion = enable_completion

        class _Completer(Completer):
            def get_completions(self, document, complete_event):
                text_before_cursor = document.text_before_cursor
                _, current_prefix = _split_current_token(text_before_cursor)
                replace_len = len(current_prefix)
                for word in suggest(text_before_cursor, active_set):
                    command_obj = active_set.find(word)
                    meta = build_usage(command_obj) if command_obj else ""
                    # replace exactly the current token
                    yield Completion(word, start_position=-replace_len, display_meta=meta)

        self._completer = _Completer() if enable_completion else None

        # Key bindings to trigger completion when deleting characters.
        kb = KeyBindings()

        @kb.add("backspace")
        def _(event):
            b = event.app.current_buffer
            if b.read_only():
                return
            if b.selection_state:
                b.delete_selection()
            else:
                b.delete_before_cursor(1)
            # show fresh suggestions after deletion
            b.start_completion(select_first=False)

        self._key_bindings = kb if enable_completion else None

    def setup(self) -> None:
        if self._history_file is not None:
            self._history_file.touch(exist_ok=True)

    def get_line(self, prompt_text: str = "") -> str:
        try:
            return self._prompt(
                prompt_text,
                history=self._history,
                completer=self._completer,
                complete_while_typing=self._enable_completion,
                key_bindings=self._key_bindings,
            )
        except EOFError as exc:
            raise InputExhausted("End of input (Ctrl-D).") from exc

    def teardown(self) -> None:
        # prompt_toolkit flushes history automatically
        pass


# ===== Fallback: readline / pyreadline3 =====
class ReadlineCLI(BaseCLI):
    """Fallback editor with basic completion and history."""

    renders_prompt = True

    def __init__(self, active_set: ActiveSet, *, history_file: Optional[Path] = None) -> None:
        import readline  # type: ignore[attr-defined]

        self.readline = readline
        self._active_set = active_set
        self._history_file = history_file

    def setup(self) -> None:
        if self._history_file is not None:
            self._history_file.touch(exist_ok=True)
            try:
                self.readline.read_history_file(  # type: ignore
                    str(self._history_file))
            except OSError:
                logger.debug("Could not read history file %s", self._history_file)

        # Only a space separates tokens
        self.readline.set_completer_delims(" ")  # type: ignore

        def _complete(text_fragment: str, state_index: int) -> Optional[str]:
            # Build the entire line buffer and return the Nth suggestion
            buffer_text = self.readline.get_line_buffer()  # type: ignore
            candidates = suggest(buffer_text, self._active_set)
            matches = [
                word for word in candidates if word.startswith(text_fragment)]
            return matches[state_index] if state_index < len(matches) else None

        self.readline.set_completer(_complete)  # type: ignore
        self.readline.parse_and_bind("tab: complete")  # type: ignore

    def get_line(self, prompt_text: str = "") -> str:
        try:
            return input(prompt_text)
        except EOFError as exc:
            raise InputExhausted("End of input.") from exc

    def teardown(self) -> None:
        if self._history_file is None:
            return
        try:
            self.readline.write_history_file(  # type: ignore
                str(self._history_file))
        except OSError:
            logger.debug("Could not write history file %s", self._history_file)


def make_cli(
    active_set: ActiveSet,
    *,
    history_file: Optional[Path] = None,
    enable_completion: bool = True,
    stream: Optional[IO[str]] = None,
) -> BaseCLI:
    """
    Factory to select the best available CLI frontend at runtime.

    Non-interactive input (a pipe or file) always gets the plain stream reader.
    """
    source = stream if stream is not None else sys.stdin
    if not (hasattr(source, "isatty") and source.isatty()):
        return StreamCLI(source)

    # Try prompt_toolkit first
    try:
        return PromptToolkitCLI(
            active_set, history_file=history_file, enable_completion=enable_completion)
    except ImportError:
        logger.debug("prompt_toolkit unavailable, trying readline")

    # Then readline/pyreadline3
    try:
        return ReadlineCLI(active_set, history_file=history_file)
    except ImportError:
        logger.debug("readline unavailable, using plain stream input")

    # Last resort: plain input with no completion or history
    return StreamCLI(source)
