"""ANSI escape encoding, palette quantization and stripping."""

from rainbowcat.ansi.cleaner import strip_ansi, strip_ansi_bytes
from rainbowcat.ansi.encoder import ColorState, EscapeEncoder, Sink
from rainbowcat.ansi.sequences import RESET, ColorMode

__all__ = [
    "RESET",
    "ColorMode",
    "ColorState",
    "EscapeEncoder",
    "Sink",
    "strip_ansi",
    "strip_ansi_bytes",
]
