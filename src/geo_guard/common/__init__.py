"""Common utilities - logging, config, exceptions."""

from geo_guard.common.logging.logger import get_logger
from geo_guard.common.config import Config, DetectionSettings, get_config, reset_config
from geo_guard.common.exceptions import (
    GeoGuardException,
    ConfigurationError,
    InvalidInputError,
    UserNotFoundError,
    CredentialMismatchError,
    SuspiciousLoginError,
    NotificationError,
)

__all__ = [
    # Logging
    "get_logger",
    # Config
    "Config",
    "DetectionSettings",
    "get_config",
    "reset_config",
    # Exceptions
    "GeoGuardException",
    "ConfigurationError",
    "InvalidInputError",
    "UserNotFoundError",
    "CredentialMismatchError",
    "SuspiciousLoginError",
    "NotificationError",
]
