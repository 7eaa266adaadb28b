"""Notification payloads."""

from typing import List, Optional

from pydantic import BaseModel, Field

from geo_guard.agents.location.schema import ClusterPoint
from geo_guard.data.schemas.geo_point import GeoPoint


class PreviousLocation(BaseModel):
    """Where the user was last seen before a suspicious attempt."""
    latitude: float
    longitude: float
    timestamp: int = Field(..., description="Epoch milliseconds")


class SuspiciousLoginDetails(BaseModel):
    """Payload of a suspicious-login alert."""
    username: str
    timestamp_millis: int
    reason: str
    ip_address: str = ""
    current_location: GeoPoint
    previous_location: Optional[PreviousLocation] = None


class MultipleLocationsDetails(BaseModel):
    """Payload of a multiple-active-locations alert."""
    username: str
    active_session_count: int = Field(..., ge=0)
    location_count: int = Field(..., ge=0)
    locations: List[ClusterPoint] = Field(default_factory=list)


class SuspiciousUserCount(BaseModel):
    username: str
    suspicious_count: int = Field(..., ge=1)


class DailySummary(BaseModel):
    """Activity over the last day of login attempts."""
    total_logins: int = Field(..., ge=0, description="Attempts with valid credentials")
    suspicious_logins: int = Field(..., ge=0)
    failed_logins: int = Field(..., ge=0)
    top_suspicious_users: List[SuspiciousUserCount] = Field(default_factory=list)
    date: str = Field(..., description="Human-readable date of the summary")

    @property
    def has_activity(self) -> bool:
        return self.total_logins > 0 or self.suspicious_logins > 0
