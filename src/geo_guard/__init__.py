"""GeoGuard - Location-aware login anomaly detection."""

__version__ = "0.1.0"
__author__ = "GeoGuard Team"

# Core exports
from geo_guard.core.types import LoginOutcome, SignalType, AttemptStatus

__all__ = [
    "LoginOutcome",
    "SignalType",
    "AttemptStatus",
]
