"""Log sink setup for the terminal app."""
import os
import sys

from loguru import logger

DEFAULT_LOG_FORMAT = "<green>{time:HH:mm:ss}</green> <level>{level: <8}</level> <cyan>{name}</cyan> {message}"


def configure_logging(level: str | None = None) -> None:
    """Route loguru output to stderr at ROADMAP_TRACKER_LOG_LEVEL (default WARNING)."""
    level = (level or os.getenv("ROADMAP_TRACKER_LOG_LEVEL", "WARNING")).upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=DEFAULT_LOG_FORMAT)
