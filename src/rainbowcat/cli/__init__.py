"""Command line interface for rainbowcat."""

from rainbowcat.cli.root import cli

__all__ = ["cli"]
