"""Per-line rainbow colorization onto an output sink."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from rich.cells import cell_len

from rainbowcat.ansi.encoder import EscapeEncoder
from rainbowcat.clock import AnimationClock
from rainbowcat.colors import compute
from rainbowcat.frames import FrameRenderer
from rainbowcat.terminal import terminal_columns, terminal_rows

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from rainbowcat.ansi.encoder import Sink
    from rainbowcat.config import ResolvedParameters

log = logging.getLogger(__name__)


def split_terminator(line: str) -> tuple[str, str]:
    """Split ``line`` into its text and its original terminator."""
    if line.endswith("\r\n"):
        return line[:-2], "\r\n"
    if line.endswith("\n"):
        return line[:-1], "\n"
    return line, ""


def is_visible(char: str) -> bool:
    """True for characters that draw a glyph and are worth coloring."""
    return char.isprintable() and not char.isspace()


def screen_rows(line: str, columns: int) -> int:
    """Rows ``line`` covers on a terminal ``columns`` cells wide, soft wraps included."""
    text, _ = split_terminator(line)
    return max(1, math.ceil(cell_len(text) / columns))


def batch_by_rows(lines: Iterable[str], max_rows: int, columns: int) -> Iterator[tuple[str, ...]]:
    """Group lines into batches that fit in ``max_rows`` screen rows.

    A line taller than the screen still forms a batch of its own.
    """
    batch: list[str] = []
    used = 0
    for line in lines:
        rows = screen_rows(line, columns)
        if batch and used + rows > max_rows:
            yield tuple(batch)
            batch, used = [], 0
        batch.append(line)
        used += rows
    if batch:
        yield tuple(batch)


class LineColorizer:
    """Writes lines to a sink with every visible character in rainbow colors.

    The colorizer owns the stream position: ``next_line`` counts every line
    rendered through ``stream`` or ``animate`` so the rainbow continues across
    several inputs written to the same sink.
    """

    def __init__(
        self,
        sink: Sink,
        params: ResolvedParameters,
        encoder: EscapeEncoder | None = None,
    ) -> None:
        self.sink = sink
        self.params = params
        self.encoder = encoder or EscapeEncoder(params.color_mode, invert=params.invert)
        self.next_line = 0

    def paints(self, char: str) -> bool:
        # Inverted output colors spaces too, so gaps carry the rainbow background.
        if self.params.invert:
            return char.isprintable()
        return is_visible(char)

    def colorize(self, line: str, line_index: int, phase: float = 0.0) -> str:
        """Return ``line`` with escapes interleaved, terminator and reset appended."""
        text, terminator = split_terminator(line)
        parts: list[str] = []
        for column, char in enumerate(text):
            if self.paints(char):
                parts.append(self.encoder.encode(compute(line_index, column, phase, self.params)))
            parts.append(char)
        parts.append(terminator)
        parts.append(self.encoder.reset())
        return "".join(parts)

    def render(self, line: str, line_index: int, phase: float = 0.0) -> None:
        """Colorize one line and write it to the sink in a single write."""
        self.sink.write(self.colorize(line, line_index, phase).encode("utf-8"))
        self.encoder.commit()

    def stream(self, lines: Iterable[str]) -> int:
        """Render lines one at a time as they arrive. Returns the number rendered.

        The sink is flushed after every line so a slow producer, such as
        ``tail -f``, shows up line by line.
        """
        count = 0
        for line in lines:
            self.render(line, self.next_line)
            self.sink.flush()
            self.next_line += 1
            count += 1
        return count

    def animate(
        self,
        lines: Iterable[str],
        *,
        clock: AnimationClock | None = None,
        renderer: FrameRenderer | None = None,
        batch_size: int | None = None,
        columns: int | None = None,
    ) -> int:
        """Render lines as an animation, one screen-sized batch at a time.

        ``batch_size`` is the number of screen rows a batch may cover and
        ``columns`` the terminal width used to count wrapped lines; both
        default to the terminal's size. Each batch is redrawn in place at an
        advancing phase until the clock runs out, then left on screen and the
        next batch starts below it. Returns the number of lines rendered.
        """
        clock = clock or AnimationClock(self.params)
        renderer = renderer or FrameRenderer(self.sink)
        batch_size = batch_size or terminal_rows()
        columns = columns or terminal_columns()

        count = 0
        for batch in batch_by_rows(lines, batch_size, columns):
            log.debug("Animating %d lines from line %d", len(batch), self.next_line)
            self._animate_batch(batch, clock, renderer, columns)
            self.next_line += len(batch)
            count += len(batch)
        return count

    def _animate_batch(
        self,
        batch: tuple[str, ...],
        clock: AnimationClock,
        renderer: FrameRenderer,
        columns: int,
    ) -> None:
        rows = sum(screen_rows(line, columns) for line in batch)
        if not split_terminator(batch[-1])[1]:
            # The cursor stays on the last row of an unterminated line.
            rows -= 1
        try:
            with renderer.session():
                drawn = False
                for phase in clock.frames():
                    if drawn:
                        renderer.rewind(rows)
                    for offset, line in enumerate(batch):
                        self.render(line, self.next_line + offset, phase)
                    renderer.present()
                    drawn = True
        finally:
            # Cursor control was written after the last reset.
            self.encoder.mark_dirty()


def lolify(lines: Iterable[str], sink: Sink, params: ResolvedParameters) -> None:
    """Colorize ``lines`` onto ``sink`` as one complete, reset-terminated stream."""
    colorizer = LineColorizer(sink, params)
    with colorizer.encoder.guard(sink):
        if params.animate:
            colorizer.animate(lines)
        else:
            colorizer.stream(lines)
