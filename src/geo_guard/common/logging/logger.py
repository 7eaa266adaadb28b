"""Centralized logging configuration."""

import logging
from typing import Optional, Union

from geo_guard.common.config.settings import LogLevel, get_config


def get_logger(name: str, level: Optional[Union[LogLevel, str]] = None) -> logging.Logger:
    """Get a configured logger instance.

    The level defaults to GEOGUARD_LOG_LEVEL from the active configuration.
    """
    if level is None:
        level = get_config().log_level
    elif not isinstance(level, LogLevel):
        level = LogLevel(level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.value))

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
