"""Storage - in-memory users, sessions and login attempts."""

from geo_guard.storage.ledger import (
    AttemptLedger,
    Clock,
    SessionHistory,
    SessionLedger,
    current_millis,
)
from geo_guard.storage.user_store import UserStore, seed_demo_users

__all__ = [
    "AttemptLedger",
    "Clock",
    "SessionHistory",
    "SessionLedger",
    "current_millis",
    "UserStore",
    "seed_demo_users",
]
