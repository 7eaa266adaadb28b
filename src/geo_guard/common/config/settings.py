"""Configuration management - Centralized configuration for GeoGuard.

Provides environment-aware configuration with sensible defaults.
All configuration is loaded from environment variables with fallbacks.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from geo_guard.common.constants import (
    DetectionConstants,
    LedgerConstants,
    NotificationConstants,
    ReportingConstants,
)
from geo_guard.common.exceptions import ConfigurationError


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _get_project_root() -> Path:
    """Get the project root directory."""
    # settings.py -> config -> common -> geo_guard -> src -> project_root
    current = Path(__file__).resolve()
    return current.parent.parent.parent.parent.parent


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class DetectionSettings:
    """Tunables consumed by the decision engine and ledgers."""
    max_sessions_per_user: int = LedgerConstants.MAX_SESSIONS_PER_USER
    max_login_attempts: int = LedgerConstants.MAX_LOGIN_ATTEMPTS
    active_session_window_hours: float = LedgerConstants.ACTIVE_SESSION_WINDOW_HOURS
    recent_session_window_hours: float = LedgerConstants.RECENT_SESSION_WINDOW_HOURS
    max_travel_speed_kmh: float = DetectionConstants.MAX_TRAVEL_SPEED_KMH
    max_concurrent_locations: int = DetectionConstants.MAX_CONCURRENT_LOCATIONS
    location_tolerance_km: float = DetectionConstants.LOCATION_TOLERANCE_KM


@dataclass
class Config:
    """Central configuration object for GeoGuard.

    All settings can be overridden via environment variables prefixed with GEOGUARD_.
    Email credentials use EMAIL_USER / EMAIL_PASS.

    Example:
        GEOGUARD_ENVIRONMENT=production
        GEOGUARD_MAX_TRAVEL_SPEED_KMH=1100
        GEOGUARD_ADMIN_EMAILS=secops@example.com,oncall@example.com
    """

    # Core settings
    environment: Environment = field(
        default_factory=lambda: Environment(
            os.getenv("GEOGUARD_ENVIRONMENT", "development")
        )
    )
    debug: bool = field(
        default_factory=lambda: _env_bool("GEOGUARD_DEBUG", "false")
    )
    log_level: LogLevel = field(
        default_factory=lambda: LogLevel(os.getenv("GEOGUARD_LOG_LEVEL", "INFO").upper())
    )

    # Paths
    project_root: Path = field(default_factory=_get_project_root)

    # Session storage
    max_sessions_per_user: int = field(
        default_factory=lambda: int(os.getenv(
            "GEOGUARD_MAX_SESSIONS_PER_USER", str(LedgerConstants.MAX_SESSIONS_PER_USER)
        ))
    )
    max_login_attempts: int = field(
        default_factory=lambda: int(os.getenv(
            "GEOGUARD_MAX_LOGIN_ATTEMPTS", str(LedgerConstants.MAX_LOGIN_ATTEMPTS)
        ))
    )
    active_session_window_hours: float = field(
        default_factory=lambda: float(os.getenv(
            "GEOGUARD_ACTIVE_SESSION_WINDOW_HOURS",
            str(LedgerConstants.ACTIVE_SESSION_WINDOW_HOURS)
        ))
    )
    recent_session_window_hours: float = field(
        default_factory=lambda: float(os.getenv(
            "GEOGUARD_RECENT_SESSION_WINDOW_HOURS",
            str(LedgerConstants.RECENT_SESSION_WINDOW_HOURS)
        ))
    )

    # Location security
    max_travel_speed_kmh: float = field(
        default_factory=lambda: float(os.getenv(
            "GEOGUARD_MAX_TRAVEL_SPEED_KMH", str(DetectionConstants.MAX_TRAVEL_SPEED_KMH)
        ))
    )
    max_concurrent_locations: int = field(
        default_factory=lambda: int(os.getenv(
            "GEOGUARD_MAX_CONCURRENT_LOCATIONS",
            str(DetectionConstants.MAX_CONCURRENT_LOCATIONS)
        ))
    )
    location_tolerance_km: float = field(
        default_factory=lambda: float(os.getenv(
            "GEOGUARD_LOCATION_TOLERANCE_KM", str(DetectionConstants.LOCATION_TOLERANCE_KM)
        ))
    )

    # Admin / alerting
    admin_emails: List[str] = field(
        default_factory=lambda: _env_list("GEOGUARD_ADMIN_EMAILS", "admin@example.com")
    )
    alert_on_suspicious_activity: bool = field(
        default_factory=lambda: _env_bool("GEOGUARD_ALERT_ON_SUSPICIOUS_ACTIVITY", "true")
    )
    daily_summary_hour: int = field(
        default_factory=lambda: int(os.getenv(
            "GEOGUARD_DAILY_SUMMARY_HOUR", str(ReportingConstants.DAILY_SUMMARY_HOUR)
        ))
    )

    # Email delivery
    smtp_host: str = field(
        default_factory=lambda: os.getenv("GEOGUARD_SMTP_HOST", NotificationConstants.SMTP_HOST)
    )
    smtp_port: int = field(
        default_factory=lambda: int(os.getenv(
            "GEOGUARD_SMTP_PORT", str(NotificationConstants.SMTP_PORT)
        ))
    )
    email_user: Optional[str] = field(default_factory=lambda: os.getenv("EMAIL_USER"))
    email_password: Optional[str] = field(default_factory=lambda: os.getenv("EMAIL_PASS"))

    # API settings
    api_host: str = field(
        default_factory=lambda: os.getenv("GEOGUARD_API_HOST", "0.0.0.0")
    )
    api_port: int = field(
        default_factory=lambda: int(os.getenv("GEOGUARD_API_PORT", "8000"))
    )
    seed_demo_users: bool = field(
        default_factory=lambda: _env_bool("GEOGUARD_SEED_DEMO_USERS", "false")
    )

    # Monitoring
    enable_metrics: bool = field(
        default_factory=lambda: _env_bool("GEOGUARD_ENABLE_METRICS", "false")
    )

    def __post_init__(self):
        """Validate configuration after initialization."""
        positive = {
            "max_sessions_per_user": self.max_sessions_per_user,
            "max_login_attempts": self.max_login_attempts,
            "active_session_window_hours": self.active_session_window_hours,
            "recent_session_window_hours": self.recent_session_window_hours,
            "max_travel_speed_kmh": self.max_travel_speed_kmh,
            "max_concurrent_locations": self.max_concurrent_locations,
        }
        for name, value in positive.items():
            if value <= 0:
                raise ConfigurationError(
                    f"{name} must be positive",
                    details={"field": name, "value": value},
                )

        if self.location_tolerance_km < 0:
            raise ConfigurationError(
                "location_tolerance_km must not be negative",
                details={"value": self.location_tolerance_km},
            )

        if not 0 <= self.daily_summary_hour <= 23:
            raise ConfigurationError(
                "daily_summary_hour must be between 0 and 23",
                details={"value": self.daily_summary_hour},
            )

        # Warn about debug in production
        if self.environment == Environment.PRODUCTION and self.debug:
            import warnings
            warnings.warn(
                "Debug mode is enabled in production environment",
                RuntimeWarning,
                stacklevel=2
            )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def email_configured(self) -> bool:
        """True when SMTP credentials are present."""
        return bool(self.email_user and self.email_password)

    def detection_settings(self) -> DetectionSettings:
        """Extract the engine tunables."""
        return DetectionSettings(
            max_sessions_per_user=self.max_sessions_per_user,
            max_login_attempts=self.max_login_attempts,
            active_session_window_hours=self.active_session_window_hours,
            recent_session_window_hours=self.recent_session_window_hours,
            max_travel_speed_kmh=self.max_travel_speed_kmh,
            max_concurrent_locations=self.max_concurrent_locations,
            location_tolerance_km=self.location_tolerance_km,
        )


# Singleton instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        Config: The global configuration singleton.
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
