"""Frame renderer used to redraw an animated batch of lines in place."""

from __future__ import annotations

import contextlib
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rainbowcat.ansi.sequences import HIDE_CURSOR, SHOW_CURSOR, cursor_up

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rainbowcat.ansi.encoder import Sink


class FrameRenderer:
    """Moves the cursor so each frame overwrites the previous one.

    Redrawing uses relative cursor movement rather than the alternate screen,
    so once the animation stops the batch stays on screen exactly as if it had
    been printed once, and the scrollback is untouched.
    """

    def __init__(self, sink: Sink) -> None:
        self.sink = sink

    @contextmanager
    def session(self) -> Iterator[None]:
        """Hide the cursor for the duration of an animation."""
        self.sink.write(HIDE_CURSOR.encode("ascii"))
        try:
            yield
        finally:
            with contextlib.suppress(OSError):
                self.sink.write(SHOW_CURSOR.encode("ascii"))
                self.sink.flush()

    def rewind(self, rows: int) -> None:
        """Return the cursor to the first column of the first row of the frame."""
        self.sink.write(("\r" + cursor_up(rows)).encode("ascii"))

    def present(self) -> None:
        self.sink.flush()
