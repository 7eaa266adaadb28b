"""Configuration module - Centralized config management."""

from geo_guard.common.config.settings import (
    Config,
    DetectionSettings,
    Environment,
    LogLevel,
    get_config,
    reset_config,
)

__all__ = [
    "Config",
    "DetectionSettings",
    "Environment",
    "LogLevel",
    "get_config",
    "reset_config",
]
