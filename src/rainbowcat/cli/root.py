"""The ``rainbowcat`` command."""

from __future__ import annotations

import contextlib
import logging
import os
import sys
from pathlib import Path
from typing import IO

import click
from pydantic import ValidationError

from rainbowcat import __version__
from rainbowcat.colorizer import lolify
from rainbowcat.config import FileConfig, RainbowConfig, build_config
from rainbowcat.debug_log import setup_logging
from rainbowcat.errors import ConfigError, InputError
from rainbowcat.runner import passthrough, run
from rainbowcat.sources import STDIN
from rainbowcat.terminal import get_terminal_name, should_colorize

log = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130

# Config field -> option name, for error messages.
_OPTION_NAMES = {"frequency": "--freq"}


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        option = _OPTION_NAMES.get(field, f"--{field}")
        problems.append(f"{option}: {error['msg']}")
    return "; ".join(problems)


def _report_input_error(error: InputError) -> None:
    click.secho(f"rainbowcat: {error}", fg="red", err=True)


def _silence_stdout() -> None:
    """Point stdout at devnull so the interpreter's final flush cannot fail again."""
    with contextlib.suppress(OSError, ValueError):
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


def _print_help(
    ctx: click.Context, stdout: IO[bytes], *, colorize: bool, truecolor: bool | None
) -> None:
    help_text = ctx.get_help() + "\n"
    if not colorize:
        stdout.write(help_text.encode("utf-8"))
        stdout.flush()
        return
    params = RainbowConfig(truecolor=truecolor).resolve()
    lolify(help_text.splitlines(keepends=True), stdout, params)


@click.command(add_help_option=False)
@click.argument("files", nargs=-1, metavar="[FILE]...")
@click.option("-p", "--spread", type=float, metavar="F", help="Rainbow spread [default: 3.0]")
@click.option("-F", "--freq", type=float, metavar="F", help="Rainbow frequency [default: 0.1]")
@click.option("-S", "--seed", type=int, metavar="I", help="Rainbow seed, 0 = random [default: 0]")
@click.option("-a", "--animate", is_flag=True, help="Enable psychedelics")
@click.option(
    "-d",
    "--duration",
    type=int,
    metavar="I",
    help="Animation duration in seconds, 0 = forever [default: 12]",
)
@click.option("-s", "--speed", type=float, metavar="F", help="Animation speed [default: 20.0]")
@click.option("-i", "--invert", is_flag=True, help="Invert fg and bg")
@click.option(
    "-t",
    "--truecolor/--no-truecolor",
    default=None,
    help="24-bit truecolor [default: detect from the terminal]",
)
@click.option("-f", "--force", is_flag=True, help="Force color even when stdout is not a tty")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read defaults from this config file",
)
@click.option("--debug", is_flag=True, help="Log diagnostics to stderr")
@click.option("-h", "--help", "show_help", is_flag=True, help="Show this message")
@click.option("-v", "--version", is_flag=True, help="Print version then exit")
@click.pass_context
def cli(
    ctx: click.Context,
    files: tuple[str, ...],
    spread: float | None,
    freq: float | None,
    seed: int | None,
    animate: bool,
    duration: int | None,
    speed: float | None,
    invert: bool,
    truecolor: bool | None,
    force: bool,
    config_path: Path | None,
    debug: bool,
    show_help: bool,
    version: bool,
) -> None:
    """Concatenate FILE(s), or standard input, to standard output.

    With no FILE, or when FILE is -, read standard input.
    """
    setup_logging(debug)
    stdout = click.get_binary_stream("stdout")

    if version:
        click.echo(f"rainbowcat {__version__}")
        ctx.exit(0)

    if show_help:
        _print_help(ctx, stdout, colorize=should_colorize(stdout, force=force), truecolor=truecolor)
        ctx.exit(0)

    try:
        file_config = FileConfig.load(config_path)
        config = build_config(
            {
                "spread": spread,
                "frequency": freq,
                "seed": seed,
                "animate": animate or None,
                "duration": duration,
                "speed": speed,
                "invert": invert or None,
                "truecolor": truecolor,
                "force": force or None,
            },
            file_config,
        )
    except ConfigError as exc:
        raise click.UsageError(str(exc), ctx=ctx) from exc
    except ValidationError as exc:
        raise click.UsageError(_format_validation_error(exc), ctx=ctx) from exc

    names = list(files) or [STDIN]
    stdin = click.get_binary_stream("stdin")
    colorize = should_colorize(stdout, force=config.force)
    log.debug("Terminal: %s, colorize=%s", get_terminal_name(), colorize)

    try:
        if colorize:
            params = config.resolve()
            errors = run(names, params, stdout, stdin=stdin, on_error=_report_input_error)
        else:
            errors = passthrough(names, stdout, stdin=stdin, on_error=_report_input_error)
    except KeyboardInterrupt:
        ctx.exit(EXIT_INTERRUPTED)
    except BrokenPipeError:
        _silence_stdout()
        ctx.exit(1)
    except OSError as exc:
        click.secho(f"rainbowcat: write error: {exc}", fg="red", err=True)
        ctx.exit(1)

    if errors:
        ctx.exit(1)
