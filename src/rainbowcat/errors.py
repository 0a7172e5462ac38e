"""Error types raised by rainbowcat."""

from __future__ import annotations


class InputError(Exception):
    """Raised when an input source cannot be opened or decoded.

    Carries the offending path (``-`` for standard input) so the caller can
    report it and move on to the next input.
    """

    def __init__(self, path: str, reason: str, *, line_number: int | None = None) -> None:
        location = path if line_number is None else f"{path}:{line_number}"
        super().__init__(f"{location}: {reason}")
        self.path = path
        self.reason = reason
        self.line_number = line_number


class ConfigError(ValueError):
    """Raised when the config file cannot be parsed or holds invalid values."""
