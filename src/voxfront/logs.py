"""Logging setup shared by the API and library entry points."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Install a single stream handler on the package logger."""
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")

    logger = logging.getLogger("voxfront")
    logger.setLevel(resolved)
    if not any(getattr(handler, "_voxfront", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._voxfront = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
