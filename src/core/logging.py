"""Logging configuration (loguru)."""

import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level> | "
    "{extra}"
)

VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def setup_logging(log_level: str = "INFO") -> None:
    """Replace loguru's default handler with a single stderr handler at the requested level."""
    level = log_level.upper()
    if level not in VALID_LEVELS:
        raise ValueError(
            f"Invalid log level: {log_level!r}. Must be one of: {', '.join(sorted(VALID_LEVELS))}"
        )
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)
