"""Numeric limits and timing constants - no circular dependencies."""

from __future__ import annotations

import os


def _debug_from_env() -> bool:
    """Check whether debug logging was requested through the environment.

    Debug mode is enabled when RAINBOWCAT_DEBUG is set to "1" or "true".
    """
    env_debug = os.environ.get("RAINBOWCAT_DEBUG", "").lower()
    return env_debug in ("1", "true")


DEBUG_ENABLED: bool = _debug_from_env()
"""True when RAINBOWCAT_DEBUG asks for debug logging."""


# Seeds are normalized into [0, SEED_RANGE); 0 means "pick one at random".
SEED_RANGE = 256

# Animation timing. The frame rate is fixed; --speed only scales phase advance.
ANIMATION_FPS = 20
FRAME_INTERVAL = 1.0 / ANIMATION_FPS

# Rows reserved below an animated batch so the cursor never scrolls the batch away.
ANIMATION_ROW_MARGIN = 1
FALLBACK_TERMINAL_ROWS = 24
FALLBACK_TERMINAL_COLUMNS = 80

# Relative luminance above which black text out-contrasts white text.
CONTRAST_LUMINANCE_THRESHOLD = 0.179

# Size of the memo for 8-bit palette quantization.
QUANTIZE_CACHE_SIZE = 4096
