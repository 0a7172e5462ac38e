"""Quantization of RGB colors onto the xterm 256-color palette.

Only the portable part of the palette is used: the 6x6x6 color cube
(indices 16-231) and the 24-step grayscale ramp (232-255). Indices 0-15 are
left out because terminals are free to redefine them.
"""

from __future__ import annotations

from functools import lru_cache

from rainbowcat.colors import Rgb
from rainbowcat.limits import QUANTIZE_CACHE_SIZE

CUBE_LEVELS = (0, 95, 135, 175, 215, 255)
CUBE_START = 16
GRAY_START = 232
GRAY_STEPS = 24
PALETTE_START = CUBE_START
PALETTE_END = GRAY_START + GRAY_STEPS


def palette_rgb(index: int) -> Rgb:
    """Return the RGB value the xterm palette defines for ``index``."""
    if CUBE_START <= index < GRAY_START:
        offset = index - CUBE_START
        return Rgb(
            CUBE_LEVELS[offset // 36],
            CUBE_LEVELS[(offset // 6) % 6],
            CUBE_LEVELS[offset % 6],
        )
    if GRAY_START <= index < PALETTE_END:
        level = 8 + 10 * (index - GRAY_START)
        return Rgb(level, level, level)
    raise ValueError(f"palette index must be in [{PALETTE_START}, {PALETTE_END}), got {index}")


PALETTE: tuple[Rgb, ...] = tuple(palette_rgb(i) for i in range(PALETTE_START, PALETTE_END))


def distance_sq(a: Rgb, b: Rgb) -> int:
    return (a.r - b.r) ** 2 + (a.g - b.g) ** 2 + (a.b - b.b) ** 2


def _nearest_level(channel: int) -> int:
    # Lowest level index wins ties.
    return min(range(len(CUBE_LEVELS)), key=lambda i: (abs(channel - CUBE_LEVELS[i]), i))


@lru_cache(maxsize=QUANTIZE_CACHE_SIZE)
def quantize(rgb: Rgb) -> int:
    """Return the palette index nearest to ``rgb``.

    Distance is Euclidean in channel space; ties go to the lower index. The
    cube is a grid, so its nearest point is found per channel, and the
    grayscale ramp is searched directly.
    """
    r, g, b = (_nearest_level(c) for c in rgb)
    cube_index = CUBE_START + 36 * r + 6 * g + b
    best = (distance_sq(rgb, palette_rgb(cube_index)), cube_index)

    for step in range(GRAY_STEPS):
        gray_index = GRAY_START + step
        candidate = (distance_sq(rgb, palette_rgb(gray_index)), gray_index)
        if candidate < best:
            best = candidate
    return best[1]
