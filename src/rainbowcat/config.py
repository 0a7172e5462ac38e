"""Configuration loading and parameter resolution for rainbowcat."""

from __future__ import annotations

import logging
import random
import tomllib
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from rainbowcat.ansi.sequences import ColorMode
from rainbowcat.errors import ConfigError
from rainbowcat.limits import SEED_RANGE
from rainbowcat.paths import get_config_path
from rainbowcat.terminal import supports_truecolor

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path

log = logging.getLogger(__name__)


class RainbowConfig(BaseModel):
    """Validated rainbow parameters, before seed and color-mode resolution."""

    model_config = ConfigDict(extra="forbid")

    spread: float = Field(default=3.0, gt=0, allow_inf_nan=False, description="Rainbow spread")
    frequency: float = Field(
        default=0.1, gt=0, allow_inf_nan=False, description="Rainbow frequency"
    )
    seed: int = Field(default=0, ge=0, description="Rainbow seed, 0 = random")
    animate: bool = Field(default=False, description="Enable psychedelics")
    duration: int = Field(
        default=12, ge=0, description="Animation duration in seconds, 0 = forever"
    )
    speed: float = Field(default=20.0, ge=0, allow_inf_nan=False, description="Animation speed")
    invert: bool = Field(default=False, description="Invert fg and bg")
    truecolor: bool | None = Field(
        default=None, description="24-bit truecolor (None = detect from the terminal)"
    )
    force: bool = Field(default=False, description="Force color even when stdout is not a tty")

    def resolve(
        self,
        rng: random.Random | None = None,
        *,
        detect_truecolor: Callable[[], bool] = supports_truecolor,
    ) -> ResolvedParameters:
        """Produce the concrete parameters the colorizer runs with.

        A seed is normalized into [0, 256); if that leaves 0, a random seed in
        [1, 256) is drawn from ``rng``. An unset ``truecolor`` is detected.
        """
        seed = self.seed % SEED_RANGE
        if seed == 0:
            seed = (rng or random.Random()).randrange(1, SEED_RANGE)
        truecolor = detect_truecolor() if self.truecolor is None else self.truecolor
        resolved = ResolvedParameters(
            spread=self.spread,
            frequency=self.frequency,
            seed=seed,
            animate=self.animate,
            duration=self.duration,
            speed=self.speed,
            invert=self.invert,
            truecolor=truecolor,
            force=self.force,
        )
        log.debug("Resolved parameters: %s", resolved)
        return resolved


@dataclass(frozen=True, slots=True)
class ResolvedParameters:
    """Parameters with every choice made; passed by value into the core."""

    spread: float = 3.0
    frequency: float = 0.1
    seed: int = 1
    animate: bool = False
    duration: int = 12
    speed: float = 20.0
    invert: bool = False
    truecolor: bool = False
    force: bool = False

    @property
    def color_mode(self) -> ColorMode:
        return ColorMode.TRUECOLOR if self.truecolor else ColorMode.ANSI256


class RainbowSection(BaseModel):
    """The ``[rainbow]`` table of config.toml. Unset keys fall through to defaults."""

    model_config = ConfigDict(extra="forbid")

    spread: float | None = None
    frequency: float | None = None
    seed: int | None = None
    animate: bool | None = None
    duration: int | None = None
    speed: float | None = None
    invert: bool | None = None
    truecolor: bool | None = None
    force: bool | None = None


class FileConfig(BaseModel):
    """Root model of config.toml."""

    model_config = ConfigDict(extra="forbid")

    rainbow: RainbowSection = Field(default_factory=RainbowSection)

    @classmethod
    def load(cls, config_path: Path | None = None) -> FileConfig:
        """Load configuration from TOML file or use defaults."""
        if config_path is None:
            config_path = get_config_path()

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            config = cls.model_validate(data)
        except (OSError, tomllib.TOMLDecodeError, ValidationError) as exc:
            raise ConfigError(f"Invalid config file {config_path}: {exc}") from exc
        log.debug("Loaded config from %s", config_path)
        return config


def build_config(
    overrides: Mapping[str, Any], file_config: FileConfig | None = None
) -> RainbowConfig:
    """Merge config-file values and explicit overrides into a RainbowConfig.

    ``None`` values in either source mean "not given". Raises pydantic's
    ``ValidationError`` for out-of-range values.
    """
    values: dict[str, Any] = {}
    if file_config is not None:
        values.update(file_config.rainbow.model_dump(exclude_none=True))
    values.update({key: value for key, value in overrides.items() if value is not None})
    return RainbowConfig.model_validate(values)
