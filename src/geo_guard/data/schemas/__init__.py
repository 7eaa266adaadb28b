"""Data schemas - canonical Pydantic definitions."""

from geo_guard.data.schemas.geo_point import GeoPoint
from geo_guard.data.schemas.session import LoginSample, Session, new_session_id
from geo_guard.data.schemas.login_attempt import LoginAttemptRecord
from geo_guard.data.schemas.user import User, digest_credential

__all__ = [
    "GeoPoint",
    "LoginSample",
    "Session",
    "new_session_id",
    "LoginAttemptRecord",
    "User",
    "digest_credential",
]
