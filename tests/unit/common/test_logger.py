"""Tests for logging helpers and the exception hierarchy."""

import logging

from geo_guard.common.config.settings import LogLevel, reset_config
from geo_guard.common.exceptions import (
    GeoGuardException,
    NotificationError,
    SuspiciousLoginError,
)
from geo_guard.common.logging import get_logger


class TestGetLogger:
    """Tests for get_logger."""

    def test_level_and_single_handler(self):
        logger = get_logger("geo_guard.tests.logger", level="debug")
        get_logger("geo_guard.tests.logger", level="debug")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_accepts_log_level_enum(self):
        logger = get_logger("geo_guard.tests.enum_level", level=LogLevel.ERROR)

        assert logger.level == logging.ERROR

    def test_defaults_to_configured_level(self, monkeypatch):
        monkeypatch.setenv("GEOGUARD_LOG_LEVEL", "warning")
        reset_config()
        try:
            logger = get_logger("geo_guard.tests.configured_level")
        finally:
            reset_config()

        assert logger.level == logging.WARNING


class TestExceptions:
    """Tests for GeoGuardException.to_dict and subclasses."""

    def test_to_dict(self):
        error = GeoGuardException("boom", code="X", details={"a": 1})

        assert error.to_dict() == {"error": "X", "message": "boom", "details": {"a": 1}}

    def test_suspicious_login_carries_reason(self):
        error = SuspiciousLoginError("refused", reason="travel", details={"signal": "impossible_travel"})

        assert error.code == "SUSPICIOUS_LOGIN"
        assert error.details == {"signal": "impossible_travel", "reason": "travel"}
        assert error.verdict is None

    def test_notification_error_records_channel(self):
        error = NotificationError("smtp down", channel="email")

        assert error.details["channel"] == "email"
        assert isinstance(error, GeoGuardException)
