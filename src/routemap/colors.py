"""ANSI colors for terminal output, keyed by HTTP method."""

import os
import re
import sys
from collections.abc import Iterable
from typing import TextIO

COLORS: dict[str, str] = {
    "reset": "\x1b[0m",
    "bright": "\x1b[1m",
    "dim": "\x1b[2m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",
}

METHOD_COLORS: dict[str, str] = {
    "GET": COLORS["green"],
    "POST": COLORS["blue"],
    "PUT": COLORS["yellow"],
    "DELETE": COLORS["red"],
    "PATCH": COLORS["cyan"],
}

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def method_color(method: str) -> str:
    """ANSI code for *method*; white for anything not in ``METHOD_COLORS``."""
    return METHOD_COLORS.get(method.upper(), COLORS["white"])


def colorize(text: str, color: str) -> str:
    return f"{COLORS.get(color, color)}{text}{COLORS['reset']}"


def colorize_methods(methods: str | Iterable[str]) -> str:
    """Wrap each method in its color, joined by ``", "``."""
    if isinstance(methods, str):
        methods = [methods]
    return ", ".join(f"{method_color(m)}{m}{COLORS['reset']}" for m in methods)


def strip_ansi(text: str) -> str:
    """Remove every ANSI color sequence from *text*."""
    return _ANSI_ESCAPE.sub("", text)


def console_colors(stream: TextIO | None = None) -> bool:
    """True if colored output suits *stream* (stdout by default).

    Honours the ``NO_COLOR`` convention.
    """
    if os.environ.get("NO_COLOR"):
        return False
    stream = stream or sys.stdout
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())
