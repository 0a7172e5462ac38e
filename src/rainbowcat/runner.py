"""Top-level run: feed every input through the colorizer or straight through."""

from __future__ import annotations

import logging
from typing import IO, TYPE_CHECKING

from rainbowcat.colorizer import LineColorizer
from rainbowcat.errors import InputError
from rainbowcat.sources import decode_lines, read_lines

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from rainbowcat.ansi.encoder import Sink
    from rainbowcat.config import ResolvedParameters

log = logging.getLogger(__name__)


def _log_input_error(error: InputError) -> None:
    log.error("%s", error)


def passthrough(
    names: Sequence[str],
    out: Sink,
    *,
    stdin: IO[bytes] | None = None,
    on_error: Callable[[InputError], None] = _log_input_error,
) -> list[InputError]:
    """Copy inputs to ``out`` byte-for-byte, flushing after every line."""
    errors: list[InputError] = []
    for name in names:
        try:
            for raw in read_lines(name, stdin):
                out.write(raw)
                out.flush()
        except InputError as exc:
            errors.append(exc)
            on_error(exc)
    out.flush()
    return errors


def run(
    names: Sequence[str],
    params: ResolvedParameters,
    out: Sink,
    *,
    stdin: IO[bytes] | None = None,
    on_error: Callable[[InputError], None] = _log_input_error,
    batch_size: int | None = None,
) -> list[InputError]:
    """Colorize every input onto ``out`` as a single output stream.

    A failing input is reported through ``on_error`` and skipped; the rainbow
    carries on with the next one. Write errors are not caught here: they
    propagate once the encoder has tried to reset the terminal.

    Returns:
        The input errors encountered, in order.
    """
    colorizer = LineColorizer(out, params)
    errors: list[InputError] = []
    with colorizer.encoder.guard(out):
        for name in names:
            log.debug("Colorizing %s", name)
            lines = decode_lines(name, read_lines(name, stdin))
            try:
                if params.animate:
                    colorizer.animate(lines, batch_size=batch_size)
                else:
                    colorizer.stream(lines)
            except InputError as exc:
                errors.append(exc)
                on_error(exc)
    return errors
