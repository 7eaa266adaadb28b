"""Custom exceptions for GeoGuard.

Provides a hierarchy of exceptions for the login flow.
All GeoGuard exceptions inherit from GeoGuardException.

The decision engine itself never raises; these surface from the
service layer and its I/O collaborators.
"""

from typing import Any, Dict, Optional


class GeoGuardException(Exception):
    """Base exception for all GeoGuard errors.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        details: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        code: str = "GEOGUARD_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(GeoGuardException):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIG_ERROR", details=details)


class InvalidInputError(GeoGuardException):
    """Raised when a login attempt is missing or has a malformed location/timestamp.

    The attempt is rejected before any evaluation and is not recorded.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="INVALID_INPUT", details=details)


class UserNotFoundError(GeoGuardException):
    """Raised when a username or user id does not resolve to a user."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="USER_NOT_FOUND", details=details)


class CredentialMismatchError(GeoGuardException):
    """Raised when the presented secret does not match the stored credential."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CREDENTIAL_MISMATCH", details=details)


class SuspiciousLoginError(GeoGuardException):
    """Raised when a login was refused because the verdict was suspicious.

    Attributes:
        reason: The reason surfaced by the decision engine
        verdict: The verdict that refused the login, when available
    """

    def __init__(
        self,
        message: str,
        reason: str,
        details: Optional[Dict[str, Any]] = None,
        verdict: Optional[Any] = None,
    ):
        self.reason = reason
        self.verdict = verdict
        details = details or {}
        details["reason"] = reason
        super().__init__(message, code="SUSPICIOUS_LOGIN", details=details)


class NotificationError(GeoGuardException):
    """Raised when a notification could not be delivered."""

    def __init__(
        self,
        message: str,
        channel: str,
        details: Optional[Dict[str, Any]] = None
    ):
        details = details or {}
        details["channel"] = channel
        super().__init__(message, code="NOTIFICATION_ERROR", details=details)
