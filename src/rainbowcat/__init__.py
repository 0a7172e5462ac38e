"""rainbowcat: concatenate files to standard output in rainbow colors."""

from rainbowcat.colors import Rgb, compute
from rainbowcat.config import RainbowConfig, ResolvedParameters

__version__ = "0.1.0"

__all__ = ["RainbowConfig", "ResolvedParameters", "Rgb", "compute"]
