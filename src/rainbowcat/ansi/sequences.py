"""ANSI escape sequence formats used by rainbowcat."""

from __future__ import annotations

from enum import StrEnum

ESC = "\x1b"
CSI = f"{ESC}["
RESET = f"{CSI}0m"
HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"


class ColorMode(StrEnum):
    """Terminal color encodings."""

    ANSI256 = "256"
    TRUECOLOR = "truecolor"


def truecolor_fg(r: int, g: int, b: int) -> str:
    """Return the 24-bit foreground escape for an RGB triple."""
    return f"{CSI}38;2;{r};{g};{b}m"


def truecolor_bg(r: int, g: int, b: int) -> str:
    """Return the 24-bit background escape for an RGB triple."""
    return f"{CSI}48;2;{r};{g};{b}m"


def indexed_fg(index: int) -> str:
    """Return the 8-bit foreground escape for a palette index."""
    return f"{CSI}38;5;{index}m"


def indexed_bg(index: int) -> str:
    """Return the 8-bit background escape for a palette index."""
    return f"{CSI}48;5;{index}m"


def cursor_up(rows: int) -> str:
    if rows <= 0:
        return ""
    return f"{CSI}{rows}A"
