"""Stateful encoding of rainbow colors into ANSI escape sequences."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, NamedTuple, Protocol

from rainbowcat.ansi.palette import palette_rgb, quantize
from rainbowcat.ansi.sequences import (
    RESET,
    ColorMode,
    indexed_bg,
    indexed_fg,
    truecolor_bg,
    truecolor_fg,
)
from rainbowcat.colors import contrast_for

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rainbowcat.colors import Rgb

log = logging.getLogger(__name__)

RESET_BYTES = RESET.encode("ascii")


class Sink(Protocol):
    """A binary output stream."""

    def write(self, data: bytes, /) -> object: ...

    def flush(self) -> object: ...


class ColorState(NamedTuple):
    """The color last put on the terminal.

    Each slot holds an ``Rgb`` in truecolor mode or a palette index in 8-bit
    mode. ``background`` is only set when inverting.
    """

    foreground: Rgb | int
    background: Rgb | int | None = None


class EscapeEncoder:
    """Turn RGB colors into escape sequences, skipping unchanged colors.

    One encoder serves one output stream. It remembers the last color it
    emitted and whether the encoded text ends in a reset. Writers call
    ``commit`` once a write has returned, so the encoder also knows what the
    sink itself ends with. The ``guard`` context uses that to leave the
    stream reset however it ends.
    """

    def __init__(self, mode: ColorMode, *, invert: bool = False) -> None:
        self.mode = mode
        self.invert = invert
        self._previous: ColorState | None = None
        self._ends_with_reset = False
        self._sink_ends_with_reset = False

    @property
    def previous(self) -> ColorState | None:
        """The last emitted color, or None if nothing is set since the last reset."""
        return self._previous

    def resolve(self, rgb: Rgb) -> ColorState:
        """Map ``rgb`` to what the terminal will display in the active mode."""
        if self.mode is ColorMode.TRUECOLOR:
            if self.invert:
                return ColorState(contrast_for(rgb), rgb)
            return ColorState(rgb)

        index = quantize(rgb)
        if self.invert:
            return ColorState(quantize(contrast_for(palette_rgb(index))), index)
        return ColorState(index)

    def format(self, state: ColorState) -> str:
        """Render a color state as escape sequences (foreground first)."""
        if self.mode is ColorMode.TRUECOLOR:
            sequence = truecolor_fg(*state.foreground)
            if state.background is not None:
                sequence += truecolor_bg(*state.background)
            return sequence

        sequence = indexed_fg(state.foreground)
        if state.background is not None:
            sequence += indexed_bg(state.background)
        return sequence

    def encode(self, rgb: Rgb) -> str:
        """Return the escape needed to show ``rgb``, or "" if it is already shown."""
        state = self.resolve(rgb)
        if state == self._previous:
            return ""
        self._previous = state
        self._ends_with_reset = False
        return self.format(state)

    def reset(self) -> str:
        """Return a reset sequence, or "" if the stream already ends in one."""
        self._previous = None
        if self._ends_with_reset:
            return ""
        self._ends_with_reset = True
        return RESET

    def mark_dirty(self) -> None:
        """Record that something other than a reset was written after the last one."""
        self._ends_with_reset = False
        self._sink_ends_with_reset = False

    def commit(self) -> None:
        """Record that everything encoded so far has reached the sink."""
        self._sink_ends_with_reset = self._ends_with_reset

    @contextmanager
    def guard(self, sink: Sink) -> Iterator[None]:
        """Scope an output stream so it always ends with exactly one reset.

        On a clean exit the reset is written only if the stream does not
        already end in one. When the body raises, the reset is skipped only if
        the last committed write ended in a reset and the failing write (if
        any) accepted no bytes, as reported through ``characters_written``.
        Otherwise a reset is attempted (one retry, then given up). The
        original exception always propagates.
        """
        self._previous = None
        self._ends_with_reset = False
        self._sink_ends_with_reset = False
        try:
            yield
        except BaseException as exc:
            self._previous = None
            partial = getattr(exc, "characters_written", 0)
            if partial or not self._sink_ends_with_reset:
                self._ends_with_reset = False
                self._write_reset(sink)
            raise
        tail = self.reset()
        if tail:
            sink.write(tail.encode("ascii"))
        self.commit()
        sink.flush()

    def _write_reset(self, sink: Sink) -> None:
        written = False
        for attempt in (1, 2):
            try:
                if not written:
                    sink.write(RESET_BYTES)
                    written = True
                sink.flush()
            except OSError as exc:
                log.debug("Reset write attempt %d failed: %s", attempt, exc)
            else:
                self._ends_with_reset = True
                self._sink_ends_with_reset = True
                return
        log.debug("Giving up on terminal reset")
