"""Input sources: files and standard input, read as newline-delimited bytes."""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import IO, TYPE_CHECKING

from rainbowcat.errors import InputError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

log = logging.getLogger(__name__)

STDIN = "-"


@contextmanager
def open_source(name: str, stdin: IO[bytes] | None = None) -> Iterator[IO[bytes]]:
    """Open an input by name; ``-`` is standard input, which is never closed."""
    if name == STDIN:
        yield stdin if stdin is not None else sys.stdin.buffer
        return

    try:
        handle = open(name, "rb")  # noqa: SIM115
    except OSError as exc:
        raise InputError(name, exc.strerror or str(exc)) from exc
    with handle:
        yield handle


def read_lines(name: str, stdin: IO[bytes] | None = None) -> Iterator[bytes]:
    """Yield raw lines, terminators included, splitting on ``\\n`` only."""
    with open_source(name, stdin) as stream:
        while True:
            try:
                line = stream.readline()
            except OSError as exc:
                raise InputError(name, exc.strerror or str(exc)) from exc
            if not line:
                return
            yield line


def decode_lines(name: str, lines: Iterable[bytes]) -> Iterator[str]:
    """Decode raw lines as strict UTF-8, naming the offending line on failure."""
    for number, raw in enumerate(lines, start=1):
        try:
            yield raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InputError(name, f"invalid UTF-8 ({exc.reason})", line_number=number) from exc
