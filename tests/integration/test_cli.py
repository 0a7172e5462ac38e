"""End-to-end tests for the ``rainbowcat`` command."""

from __future__ import annotations

import re
from functools import partial
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from rainbowcat import __version__
from rainbowcat.ansi.cleaner import strip_ansi
from rainbowcat.ansi.sequences import HIDE_CURSOR, RESET, SHOW_CURSOR
from rainbowcat.cli import cli
from rainbowcat.clock import AnimationClock
from tests.helpers.sinks import FakeClock

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.integration

COLOR = ["--force", "--seed", "1"]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestInfo:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert result.output == f"rainbowcat {__version__}\n"

    @pytest.mark.parametrize("flag", ["--help", "-h"])
    def test_plain_help_when_not_a_tty(self, runner: CliRunner, flag: str) -> None:
        result = runner.invoke(cli, [flag])
        assert result.exit_code == 0
        assert "\x1b[" not in result.output
        assert "Rainbow spread" in result.output
        assert "--truecolor / --no-truecolor" in result.output

    def test_help_is_colorized_when_forced(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["-f", "-h", "--truecolor"])
        assert result.exit_code == 0
        assert "\x1b[38;2;" in result.output
        assert result.output.endswith(RESET)
        assert "Rainbow spread" in strip_ansi(result.output)


class TestColoring:
    def test_passthrough_when_not_a_tty(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, [], input="hello\nworld\n")
        assert result.exit_code == 0
        assert result.output == "hello\nworld\n"

    def test_forced_truecolor(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, [*COLOR, "--truecolor"], input="a\nb\n")
        assert result.exit_code == 0
        assert "\x1b[38;2;" in result.output
        assert strip_ansi(result.output) == "a\nb\n"
        assert result.output.count(RESET) == 2
        assert HIDE_CURSOR not in result.output

    def test_forced_256_colors(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, [*COLOR, "--no-truecolor"], input="abc\n")
        assert result.exit_code == 0
        assert "\x1b[38;5;" in result.output
        assert "\x1b[38;2;" not in result.output

    def test_color_mode_detected_from_environment(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("COLORTERM", "truecolor")
        result = runner.invoke(cli, COLOR, input="abc\n")
        assert "\x1b[38;2;" in result.output

    def test_short_flags(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["-f", "-t", "-i", "-p", "5", "-F", "0.2", "-S", "162"], input="xyz\n"
        )
        assert result.exit_code == 0
        assert "\x1b[48;2;" in result.output
        assert strip_ansi(result.output) == "xyz\n"

    def test_same_seed_same_output(self, runner: CliRunner) -> None:
        first = runner.invoke(cli, [*COLOR, "-t"], input="repeatable\n")
        second = runner.invoke(cli, [*COLOR, "-t"], input="repeatable\n")
        assert first.output == second.output

    def test_files_and_stdin(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "file.txt"
        path.write_text("from file\n", encoding="utf-8")
        result = runner.invoke(cli, [*COLOR, "-t", str(path), "-"], input="from stdin\n")
        assert result.exit_code == 0
        assert strip_ansi(result.output) == "from file\nfrom stdin\n"


class TestErrors:
    @pytest.mark.parametrize(
        ("args", "option"),
        [
            (["--spread", "0"], "--spread"),
            (["--freq", "-1"], "--freq"),
            (["--spread", "nan"], "--spread"),
            (["--duration", "-3"], "--duration"),
        ],
    )
    def test_invalid_parameters_are_usage_errors(
        self, runner: CliRunner, args: list[str], option: str
    ) -> None:
        result = runner.invoke(cli, [*COLOR, *args], input="x\n")
        assert result.exit_code == 2
        assert option in result.output

    def test_non_numeric_spread(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--spread", "wide"])
        assert result.exit_code == 2

    def test_missing_file_continues_and_fails(self, runner: CliRunner, tmp_path: Path) -> None:
        good = tmp_path / "good.txt"
        good.write_text("kept\n", encoding="utf-8")
        missing = tmp_path / "missing.txt"
        result = runner.invoke(cli, [*COLOR, "-t", str(missing), str(good)])
        assert result.exit_code == 1
        assert "missing.txt" in result.output
        assert "kept" in strip_ansi(result.output)

    def test_missing_file_in_passthrough(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, [str(tmp_path / "missing.txt")])
        assert result.exit_code == 1
        assert "missing.txt" in result.output

    def test_keyboard_interrupt_exits_130(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def interrupted(*args, **kwargs):
            raise KeyboardInterrupt

        monkeypatch.setattr("rainbowcat.cli.root.run", interrupted)
        result = runner.invoke(cli, COLOR, input="x\n")
        assert result.exit_code == 130

    def test_broken_pipe_exits_quietly(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def broken(*args, **kwargs):
            raise BrokenPipeError(32, "Broken pipe")

        monkeypatch.setattr("rainbowcat.cli.root.run", broken)
        result = runner.invoke(cli, COLOR, input="x\n")
        assert result.exit_code == 1
        assert "Traceback" not in result.output


class TestConfigFile:
    def test_config_file_supplies_defaults(self, runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "custom.toml"
        config.write_text("[rainbow]\nseed = 1\ntruecolor = true\nforce = true\n", encoding="utf-8")
        from_file = runner.invoke(cli, ["--config", str(config)], input="abc\n")
        explicit = runner.invoke(cli, ["-f", "-t", "-S", "1"], input="abc\n")
        assert from_file.exit_code == 0
        assert from_file.output == explicit.output

    def test_flags_override_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "custom.toml"
        config.write_text("[rainbow]\nseed = 1\ntruecolor = true\n", encoding="utf-8")
        result = runner.invoke(
            cli, ["--config", str(config), "-f", "--no-truecolor"], input="abc\n"
        )
        assert "\x1b[38;5;" in result.output

    def test_default_config_location(self, runner: CliRunner, tmp_path: Path) -> None:
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text("[rainbow]\nforce = true\n", encoding="utf-8")
        result = runner.invoke(cli, ["-S", "1", "-t"], input="abc\n")
        assert "\x1b[38;2;" in result.output

    def test_broken_config_is_usage_error(self, runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "custom.toml"
        config.write_text("[rainbow]\nspread = 'wide'\n", encoding="utf-8")
        result = runner.invoke(cli, ["--config", str(config)], input="abc\n")
        assert result.exit_code == 2
        assert "custom.toml" in result.output


class TestAnimation:
    def test_animated_run(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        fake = FakeClock()
        monkeypatch.setattr(
            "rainbowcat.colorizer.AnimationClock",
            partial(AnimationClock, now=fake.now, sleep=fake.sleep, interval=0.25),
        )
        monkeypatch.setattr("rainbowcat.colorizer.terminal_rows", lambda: 10)

        result = runner.invoke(cli, [*COLOR, "-t", "-a", "-d", "1"], input="ab\ncd\n")

        assert result.exit_code == 0
        assert result.output.startswith(HIDE_CURSOR)
        assert result.output.endswith(SHOW_CURSOR + RESET)
        assert len(re.findall(r"\r\x1b\[2A", result.output)) == 3
        assert strip_ansi(result.output) == "ab\ncd\n" + "\rab\ncd\n" * 3
