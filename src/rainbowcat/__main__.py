"""CLI entry point for rainbowcat."""

from __future__ import annotations

# Python version check - must be before any imports that use 3.12+ syntax.
# Note: from __future__ is allowed before this check as it's valid in Python 3.7+.
import sys

if sys.version_info < (3, 12):  # noqa: UP036
    print("Error: rainbowcat requires Python 3.12 or higher.")
    print(
        "You are running Python {}.{}".format(  # noqa: UP032
            sys.version_info.major, sys.version_info.minor
        )
    )
    sys.exit(1)

from rainbowcat.cli import cli  # noqa: E402


def main() -> None:
    """Run the rainbowcat command."""
    cli(prog_name="rainbowcat")


if __name__ == "__main__":
    main()
