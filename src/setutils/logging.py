"""Logging setup for the ``setutils`` logger namespace."""

from __future__ import annotations

import logging
import logging.config
from typing import Any

from setutils.config import UtilsSettings

__all__ = ["LOGGER_NAME", "LevelColorFormatter", "configure_logging"]

LOGGER_NAME = "setutils"

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class LevelColorFormatter(logging.Formatter):
    """Wrap each record in an ANSI colour keyed by level; other levels stay plain."""

    RESET = "\x1b[0m"
    COLORS = {
        logging.DEBUG: "\x1b[35;20m",
        logging.WARNING: "\x1b[33;20m",
        logging.ERROR: "\x1b[31;20m",
    }

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        color = self.COLORS.get(record.levelno)
        return text if color is None else color + text + self.RESET


def configure_logging(
    level: str | int | None = None,
    config: dict[str, Any] | None = None,
    settings: UtilsSettings | None = None,
) -> logging.Logger:
    """
    Configure and return the ``setutils`` logger.

    A ``dictConfig`` mapping, when given, is applied as-is. Otherwise a single
    stream handler with LevelColorFormatter is attached (once) and the level is
    taken from ``level`` or ``settings.log_level``.
    """
    if config is not None:
        logging.config.dictConfig(config)
        return logging.getLogger(LOGGER_NAME)

    root_logger = logging.getLogger(LOGGER_NAME)
    if level is None:
        level = (settings or UtilsSettings.load()).log_level
    root_logger.setLevel(level.upper() if isinstance(level, str) else level)

    if not any(getattr(h, "_setutils_handler", False) for h in root_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(LevelColorFormatter(_DEFAULT_FORMAT))
        handler._setutils_handler = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)
    return root_logger
