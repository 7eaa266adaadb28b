"""Core types and enums."""

from enum import Enum


class LoginOutcome(str, Enum):
    """Lifecycle of a single login attempt.

    RECEIVED is the entry state. Every attempt ends in exactly one of the
    terminal states; ACCEPTED_FLAGGED_MULTILOCATION is a side channel on
    ACCEPTED and does not change the session's validity.
    """
    RECEIVED = "received"
    REJECTED_BAD_CREDENTIAL = "rejected_bad_credential"
    REJECTED_SUSPICIOUS = "rejected_suspicious"
    ACCEPTED = "accepted"
    ACCEPTED_FLAGGED_MULTILOCATION = "accepted_flagged_multilocation"


class SignalType(str, Enum):
    """Which rule produced a verdict."""
    NONE = "none"
    IMPOSSIBLE_TRAVEL = "impossible_travel"
    CONCURRENT_LOCATIONS = "concurrent_locations"


class AttemptStatus(str, Enum):
    """Dashboard status of a recorded attempt."""
    SUCCESS = "SUCCESS"
    BLOCKED = "BLOCKED"
    FAILED = "FAILED"
