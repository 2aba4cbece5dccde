"""Logging configuration using loguru."""

import sys
from pathlib import Path

from loguru import logger

from config.settings import settings


def setup_logging(level: str | None = None) -> None:
    """Configure loguru logger."""
    level = level or settings.log_level

    # Remove default handler
    logger.remove()

    log_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[name]}</cyan> | "
        "<level>{message}</level>"
    )

    logger.configure(extra={"name": "browser_headers"})
    logger.add(
        sys.stderr,
        format=log_format,
        level=level,
        colorize=True,
    )

    if settings.log_file:
        log_file = Path(settings.log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]} | {message}",
            level=level,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
        )

    logger.debug(f"Logging initialized at level {level}")


def get_logger(name: str) -> "logger":
    """Get a logger instance with the given name."""
    return logger.bind(name=name)
