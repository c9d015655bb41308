"""Logging utilities built on top of :mod:`loguru`."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from loguru import logger


def setup_logging(log_file: Optional[Path] = None, level: str = "INFO") -> None:
    """Route benched diagnostics to stdout and, optionally, a rotating file.

    Session misuse is reported at ERROR, frame index reuse at WARNING and
    one-off benchmark timings at DEBUG, so ``level`` decides which of those
    reach the sinks.
    """

    logger.remove()
    logger.add(lambda msg: print(msg, end=""), level=level)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level=level, rotation="10 MB", retention="7 days")


def session_logger(name: str):
    """Return the module logger bound to a session name."""

    return logger.bind(session=name)


__all__ = ["setup_logging", "session_logger", "logger"]
