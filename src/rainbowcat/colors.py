"""Rainbow color mapping.

A character's color is a pure function of where it sits in the stream and of
the animation phase. Positions are folded into a hue angle (in radians)::

    theta = frequency * (seed + line + column / spread + time_offset)

so the hue repeats every ``2 * pi * spread / frequency`` columns and every
``2 * pi / frequency`` lines. The hue is then turned into RGB through the
standard HSV conversion at full saturation and value.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, NamedTuple

from rainbowcat.limits import CONTRAST_LUMINANCE_THRESHOLD

if TYPE_CHECKING:
    from rainbowcat.config import ResolvedParameters


class Rgb(NamedTuple):
    """An RGB color with integer channels in [0, 255]."""

    r: int
    g: int
    b: int


BLACK = Rgb(0, 0, 0)
WHITE = Rgb(255, 255, 255)


def hsv_to_rgb(hue: float, saturation: float = 1.0, value: float = 1.0) -> Rgb:
    """Convert an HSV color to RGB. ``hue`` is in degrees and wraps at 360."""
    hue = hue % 360.0
    chroma = value * saturation
    x = chroma * (1 - abs((hue / 60.0) % 2 - 1))
    m = value - chroma
    if hue < 60:
        r, g, b = chroma, x, 0.0
    elif hue < 120:
        r, g, b = x, chroma, 0.0
    elif hue < 180:
        r, g, b = 0.0, chroma, x
    elif hue < 240:
        r, g, b = 0.0, x, chroma
    elif hue < 300:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x
    return Rgb(*(min(255, max(0, round((c + m) * 255))) for c in (r, g, b)))


def phase_of(line: int, column: int, time_offset: float, params: ResolvedParameters) -> float:
    """Return the hue angle in radians for a stream position."""
    position = params.seed + line + column / params.spread + time_offset
    return params.frequency * position


def hue_of(line: int, column: int, time_offset: float, params: ResolvedParameters) -> float:
    """Return the hue in degrees, normalized to [0, 360)."""
    return math.degrees(phase_of(line, column, time_offset, params)) % 360.0


def compute(line: int, column: int, time_offset: float, params: ResolvedParameters) -> Rgb:
    """Return the rainbow color for a character at ``(line, column)``."""
    return hsv_to_rgb(hue_of(line, column, time_offset, params))


def relative_luminance(rgb: Rgb) -> float:
    """Return the WCAG relative luminance of ``rgb`` in [0, 1]."""

    def linear(channel: int) -> float:
        c = channel / 255.0
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (linear(c) for c in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_for(background: Rgb) -> Rgb:
    """Pick a readable foreground for text drawn on ``background``."""
    if relative_luminance(background) > CONTRAST_LUMINANCE_THRESHOLD:
        return BLACK
    return WHITE
