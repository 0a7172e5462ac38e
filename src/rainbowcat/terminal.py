"""What the output terminal can do: colors at all, 24-bit colors, and rows."""

from __future__ import annotations

import os
import shutil
from typing import IO

from rainbowcat.limits import (
    ANIMATION_ROW_MARGIN,
    FALLBACK_TERMINAL_COLUMNS,
    FALLBACK_TERMINAL_ROWS,
)

# TERM_PROGRAM values, lowercased. Terminal.app is listed separately because
# shell profiles often export COLORTERM=truecolor inside it anyway.
_PALETTE_ONLY_PROGRAMS = frozenset({"apple_terminal"})
_TRUECOLOR_PROGRAMS = frozenset(
    {
        "alacritty",
        "contour",
        "ghostty",
        "hyper",
        "iterm.app",
        "kitty",
        "rio",
        "tabby",
        "vscode",
        "warp",
        "wezterm",
    }
)
_TRUECOLOR_COLORTERMS = ("truecolor", "24bit")

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


def should_colorize(stream: IO[bytes] | IO[str], *, force: bool = False) -> bool:
    """Decide whether output to ``stream`` gets colored.

    Colors are written to terminals only, unless ``force`` is set.
    """
    if force:
        return True
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # Closed stream
        return False


def supports_truecolor() -> bool:
    """Guess whether the terminal renders ``38;2`` escapes.

    RAINBOWCAT_TRUECOLOR wins when it holds a yes/no word. After that the
    terminal program is trusted over COLORTERM, and a Windows Terminal
    session counts as truecolor.
    """
    override = os.environ.get("RAINBOWCAT_TRUECOLOR", "").lower()
    if override in _TRUTHY:
        return True
    if override in _FALSY:
        return False

    program = os.environ.get("TERM_PROGRAM", "").lower()
    if program in _PALETTE_ONLY_PROGRAMS:
        return False
    if program in _TRUECOLOR_PROGRAMS:
        return True

    if os.environ.get("COLORTERM", "").lower() in _TRUECOLOR_COLORTERMS:
        return True
    return "WT_SESSION" in os.environ


def get_terminal_name() -> str:
    """Name the terminal for debug output."""
    if program := os.environ.get("TERM_PROGRAM"):
        return program
    if "WT_SESSION" in os.environ:
        return "Windows Terminal"
    return os.environ.get("TERM") or "unknown"


def _terminal_size() -> os.terminal_size:
    return shutil.get_terminal_size(fallback=(FALLBACK_TERMINAL_COLUMNS, FALLBACK_TERMINAL_ROWS))


def terminal_rows() -> int:
    """Return how many screen rows an animated batch may occupy."""
    return max(1, _terminal_size().lines - ANIMATION_ROW_MARGIN)


def terminal_columns() -> int:
    """Return the terminal width, used to count soft-wrapped rows."""
    return max(1, _terminal_size().columns)
