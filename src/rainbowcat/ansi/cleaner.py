"""Escape sequence stripping for colorized output.

The colorizer must never alter the text it colors, so stripping every escape
from its output has to give the input back. The pattern covers what
rainbowcat writes (SGR colors, cursor hide, show and up) plus OSC strings
and two-byte escapes, so foreign sequences in the input are caught as well.
"""

from __future__ import annotations

import re

_ESCAPE = r"\x1B(?:\[[0-?]*[ -/]*[@-~]|\][^\x07]*\x07|[@-Z\\^_-])"

ANSI_ESCAPE = re.compile(_ESCAPE)
ANSI_ESCAPE_BYTES = re.compile(_ESCAPE.encode("ascii"))


def strip_ansi(text: str) -> str:
    """Return ``text`` with every escape sequence removed."""
    return ANSI_ESCAPE.sub("", text)


def strip_ansi_bytes(data: bytes) -> bytes:
    """Remove escapes from raw output without decoding it first."""
    return ANSI_ESCAPE_BYTES.sub(b"", data)


def escape_sequences(text: str) -> list[str]:
    """Return the escape sequences in ``text`` in order of appearance."""
    return ANSI_ESCAPE.findall(text)
