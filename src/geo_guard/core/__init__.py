"""Core types."""

from geo_guard.core.types import LoginOutcome, SignalType, AttemptStatus

__all__ = [
    "LoginOutcome",
    "SignalType",
    "AttemptStatus",
]
