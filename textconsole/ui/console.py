#!/usr/bin/env python3
# textconsole/ui/console.py
from __future__ import annotations

import sys
import threading
from typing import IO, Optional

# Single shared print mutex for all console output (lines, prompts, logging).
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file: Optional[IO[str]] = None, flush: bool = False) -> None:
    """Thread-safe single-line print."""
    target = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        target.write(f"{text}\n")
        if flush:
            target.flush()


def write_text(text: str, *, file: Optional[IO[str]] = None) -> None:
    """Write text without a newline (prompts) and flush so it shows before blocking."""
    target = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        target.write(text)
        target.flush()
