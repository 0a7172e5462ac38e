"""Tests for the top-level run over several inputs."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

import pytest

from rainbowcat.ansi.cleaner import strip_ansi
from rainbowcat.ansi.sequences import RESET
from rainbowcat.colorizer import LineColorizer
from rainbowcat.config import ResolvedParameters
from rainbowcat.errors import InputError
from rainbowcat.runner import passthrough, run
from tests.helpers.sinks import FailingSink, RecordingSink

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit

PARAMS = ResolvedParameters(seed=1, truecolor=True)


@pytest.fixture
def two_files(tmp_path: Path) -> tuple[str, str]:
    first = tmp_path / "first.txt"
    second = tmp_path / "second.txt"
    first.write_text("one\ntwo\n", encoding="utf-8")
    second.write_text("three\n", encoding="utf-8")
    return str(first), str(second)


class TestRun:
    def test_rainbow_continues_across_files(self, two_files: tuple[str, str]) -> None:
        sink = RecordingSink()
        errors = run(list(two_files), PARAMS, sink)

        assert errors == []
        assert strip_ansi(sink.text) == "one\ntwo\nthree\n"
        expected_third = LineColorizer(RecordingSink(), PARAMS).colorize("three\n", 2)
        assert sink.text.endswith(expected_third)

    def test_failed_input_is_reported_and_skipped(
        self, two_files: tuple[str, str], tmp_path: Path
    ) -> None:
        sink = RecordingSink()
        reported: list[InputError] = []
        missing = str(tmp_path / "missing.txt")

        errors = run([two_files[0], missing, two_files[1]], PARAMS, sink, on_error=reported.append)

        assert [error.path for error in errors] == [missing]
        assert reported == errors
        assert strip_ansi(sink.text) == "one\ntwo\nthree\n"

    def test_invalid_utf8_stops_that_input_only(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.txt"
        bad.write_bytes(b"ok\n\xff\xfe\nnever\n")
        good = tmp_path / "good.txt"
        good.write_text("after\n", encoding="utf-8")
        sink = RecordingSink()

        errors = run([str(bad), str(good)], PARAMS, sink, on_error=lambda error: None)

        assert len(errors) == 1
        assert errors[0].line_number == 2
        assert strip_ansi(sink.text) == "ok\nafter\n"

    def test_reads_stdin(self) -> None:
        sink = RecordingSink()
        run(["-"], PARAMS, sink, stdin=io.BytesIO(b"piped\n"))
        assert strip_ansi(sink.text) == "piped\n"
        assert sink.text.endswith(RESET)

    def test_write_failure_propagates_after_reset(self, two_files: tuple[str, str]) -> None:
        sink = FailingSink(limit=5)
        with pytest.raises(BrokenPipeError):
            run(list(two_files), PARAMS, sink)
        assert bytes(sink.data).endswith(RESET.encode())


class TestPassthrough:
    def test_bytes_copied_verbatim(self, tmp_path: Path) -> None:
        path = tmp_path / "raw.bin"
        path.write_bytes(b"\xff\xfe not utf-8\r\n\x1b[31mred\x1b[0m")
        sink = RecordingSink()

        assert passthrough([str(path)], sink) == []
        assert bytes(sink.data) == b"\xff\xfe not utf-8\r\n\x1b[31mred\x1b[0m"

    def test_flushes_after_every_line(self) -> None:
        sink = RecordingSink()
        passthrough(["-"], sink, stdin=io.BytesIO(b"one\ntwo\n"))
        assert sink.flushed_at[:2] == [1, 2]

    def test_missing_input_reported(self, tmp_path: Path) -> None:
        sink = RecordingSink()
        reported: list[InputError] = []
        errors = passthrough(
            [str(tmp_path / "nope"), "-"],
            sink,
            stdin=io.BytesIO(b"still here\n"),
            on_error=reported.append,
        )
        assert len(errors) == 1
        assert reported == errors
        assert bytes(sink.data) == b"still here\n"
