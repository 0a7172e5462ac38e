"""Logging setup for the command line.

Every module logs through ``logging.getLogger(__name__)``. Nothing is shown
unless debug logging is switched on, because stdout carries the user's text
and stderr should stay quiet in pipelines.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from rainbowcat.limits import DEBUG_ENABLED

LOG_FORMAT = "%(name)s: %(message)s"

_logging_initialized: bool = False

log = logging.getLogger(__name__)


def setup_logging(debug: bool = False, stream: TextIO | None = None) -> None:
    """Attach a stderr handler to the ``rainbowcat`` logger.

    This is idempotent - calling it multiple times has no effect after the first call.
    Debug output is enabled by ``debug`` or by RAINBOWCAT_DEBUG.
    """
    global _logging_initialized

    if _logging_initialized:
        return

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger = logging.getLogger("rainbowcat")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug or DEBUG_ENABLED else logging.WARNING)
    package_logger.propagate = False

    _logging_initialized = True

    log.debug("Debug logging initialized")


def reset_logging() -> None:
    """Remove handlers installed by :func:`setup_logging`."""
    global _logging_initialized

    package_logger = logging.getLogger("rainbowcat")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
    _logging_initialized = False
