"""ANSI escape codes for terminal output.

Chat colours and log levels both end up as SGR sequences here. Whether a
stream gets colours at all is decided by `should_colorize`.
"""

import os
import sys
from typing import TextIO

__all__ = [
    "BLACK",
    "BLUE",
    "BOLD",
    "BRIGHT",
    "CYAN",
    "DIM",
    "GREEN",
    "ITALIC",
    "MAGENTA",
    "RED",
    "RESET",
    "STRIKE",
    "UNDERLINE",
    "WHITE",
    "YELLOW",
    "LogStyles",
    "escape",
    "make_style",
    "should_colorize",
]

_CSI = "\x1b["

RESET = f"{_CSI}0m"

# SGR attributes
BOLD = "1"
DIM = "2"
ITALIC = "3"
UNDERLINE = "4"
STRIKE = "9"

# SGR foreground colours
BLACK, RED, GREEN, YELLOW, BLUE, MAGENTA, CYAN, WHITE = (str(code) for code in range(30, 38))

BRIGHT = 60  # offset from a foreground colour to its bright variant


def should_colorize(stream: TextIO | None = None) -> bool:
    """Return True if `stream` (stderr by default) should receive colours.

    `NO_COLOR` wins over `FORCE_COLOR`; without either, only terminals get
    colours.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stderr
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def escape(*codes: str) -> str:
    """Return the SGR sequence selecting every attribute of `codes`."""
    return f"{_CSI}{';'.join(codes)}m"


def make_style(*codes: str) -> tuple[str, str]:
    """Return the (start, end) strings wrapping text in `codes`."""
    return (escape(*codes) if codes else "", RESET)


class LogStyles:
    """Colours of the log levels worth highlighting."""

    WARNING = (YELLOW, DIM)
    ERROR = (RED, DIM)
    CRITICAL = (RED, BOLD)
