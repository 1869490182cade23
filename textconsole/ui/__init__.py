#!/usr/bin/env python3
# textconsole/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .ansi import (
    ANSI,
    strip_ansi,
    enable_windows_vt,
    colorize,
)
from .console import PRINT_MUTEX, print_line, write_text
from .logging import (
    init_logger,
    ColorizingStreamHandler,
    PlainFormatter,
)

__all__ = [
    "ANSI",
    "strip_ansi",
    "enable_windows_vt",
    "colorize",
    "PRINT_MUTEX",
    "print_line",
    "write_text",
    "init_logger",
    "ColorizingStreamHandler",
    "PlainFormatter",
]
