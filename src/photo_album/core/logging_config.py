"""Centralized logging configuration for the photo album."""

import os
import sys
import logging
from typing import Optional

ROOT_LOGGER_NAME = "photo-album"


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: Optional[str] = None,
    format_type: str = "structured",
) -> logging.Logger:
    """
    Setup centralized logging with environment variable configuration.

    Log records go to stderr; stdout is reserved for the interactive
    prompts and preview banners.

    Args:
        name: Logger name (defaults to "photo-album")
        level: Log level override (defaults to env var or INFO)
        format_type: Logging format ("structured" or "simple")

    Returns:
        Configured logger instance

    Environment Variables:
        LOG_LEVEL: Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        LOG_FORMAT: Set format type ("structured" or "simple")
    """
    logger = logging.getLogger(name)

    # Determine log level from parameter, env var, or default
    if level:
        log_level = getattr(logging, level.upper(), logging.INFO)
    else:
        env_level = os.getenv("LOG_LEVEL", "INFO").upper()
        log_level = getattr(logging, env_level, logging.INFO)

    logger.setLevel(log_level)

    # Avoid duplicate handlers
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)

        env_format = os.getenv("LOG_FORMAT", format_type).lower()

        if env_format == "structured":
            formatter = logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)-8s | "
                "%(threadName)s | %(funcName)s() | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        else:
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )

        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance with consistent configuration.

    Child names ("photo-album.ring") are not given handlers of their own;
    they propagate to the configured "photo-album" logger.
    """
    if name.startswith(ROOT_LOGGER_NAME + "."):
        if not logging.getLogger(ROOT_LOGGER_NAME).handlers:
            setup_logger(ROOT_LOGGER_NAME)
        return logging.getLogger(name)
    return setup_logger(name)


def get_worker_logger(index: int) -> logging.Logger:
    """Logger for the worker handling the image with the given sequence index."""
    return get_logger(f"{ROOT_LOGGER_NAME}.worker-{index}")


def set_debug(enabled: bool) -> None:
    """Switch the album loggers to DEBUG for step-by-step tracing."""
    if enabled:
        setup_logger(ROOT_LOGGER_NAME, level="DEBUG")


# Create default logger instance
logger = setup_logger()
