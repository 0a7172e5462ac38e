"""Animation clock: turns elapsed wall time into a color phase offset."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from rainbowcat.limits import FRAME_INTERVAL

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from rainbowcat.config import ResolvedParameters


class AnimationClock:
    """Cooperative frame clock for animated output.

    The clock runs no thread of its own. ``frames()`` yields one phase per
    frame and sleeps between frames to hold a fixed frame rate; ``speed`` only
    scales how far the phase moves per second. Time and sleep are injectable
    so tests can drive the clock without waiting.
    """

    def __init__(
        self,
        params: ResolvedParameters,
        *,
        now: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        interval: float = FRAME_INTERVAL,
    ) -> None:
        self.speed = params.speed
        self.duration = params.duration
        self.interval = interval
        self._now = now
        self._sleep = sleep

    def tick(self, elapsed: float) -> float:
        """Return the phase offset after ``elapsed`` seconds."""
        return elapsed * self.speed

    def expired(self, elapsed: float) -> bool:
        """True once a bounded animation has run for its full duration."""
        return self.duration > 0 and elapsed >= self.duration

    def frames(self) -> Iterator[float]:
        """Yield phase offsets, one per frame, until the duration elapses.

        The first frame is always at phase 0. With a duration of 0 this never
        stops on its own; the caller is expected to be interrupted.
        """
        start = self._now()
        frame = 0
        while True:
            elapsed = self._now() - start
            if frame and self.expired(elapsed):
                return
            yield self.tick(elapsed)
            frame += 1
            delay = start + frame * self.interval - self._now()
            if delay > 0:
                self._sleep(delay)
