"""Logging setup for the ``deskcalc`` logger namespace."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from deskcalc.config import CalculatorConfig

if TYPE_CHECKING:
    from typing import TextIO

LOGGER_NAME = "deskcalc"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(LOGGER_NAME)


def configure_logging(
    level: str | int | None = None,
    stream: TextIO | None = None,
    config: CalculatorConfig | None = None,
) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Calling it again replaces the handler installed by the previous call
    instead of stacking a second one.

    Args:
        level: Logging level; defaults to ``config.log_level``
        stream: Destination stream (default ``sys.stderr``)
        config: Source of the default level (default read from the
            ``DESKCALC_*`` environment)

    Returns:
        The configured package logger
    """
    if level is None:
        level = (config or CalculatorConfig.from_env()).log_level
    if isinstance(level, str):
        level = level.upper()

    for handler in logger.handlers[:]:
        if getattr(handler, "_deskcalc", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._deskcalc = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
