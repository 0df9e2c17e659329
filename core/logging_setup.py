"""Logging configuration for the command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int | str = logging.WARNING, logger_name: str = "core") -> logging.Logger:
    """Route the package loggers to stderr through rich."""
    logger = logging.getLogger(logger_name)

    # Prevent duplicate handlers
    if not logger.handlers:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        # Avoid duplicate output through the root logger
        logger.propagate = False

    logger.setLevel(level)
    return logger
