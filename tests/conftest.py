"""Pytest fixtures for rainbowcat tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from hypothesis import Phase, Verbosity, settings

from rainbowcat.debug_log import reset_logging

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))

_TERMINAL_VARS = (
    "RAINBOWCAT_TRUECOLOR",
    "RAINBOWCAT_DEBUG",
    "COLORTERM",
    "TERM_PROGRAM",
    "WT_SESSION",
)


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Keep the user's config file and terminal settings out of every test."""
    monkeypatch.setenv("RAINBOWCAT_CONFIG_DIR", str(tmp_path / "config"))
    for var in _TERMINAL_VARS:
        monkeypatch.delenv(var, raising=False)
    yield
    reset_logging()
