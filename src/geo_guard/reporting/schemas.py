"""Reporting schemas - read-only views for dashboards."""

from typing import List, Optional

from pydantic import BaseModel, Field

from geo_guard.data.schemas.session import Session


class ActiveLocation(BaseModel):
    """Position of one active session."""
    lat: float
    lng: float
    timestamp: int = Field(..., description="Epoch milliseconds")


class UserSummary(BaseModel):
    """Per-user aggregate for the admin dashboard."""
    user_id: str
    username: str
    total_sessions: int = Field(..., ge=0)
    active_sessions: int = Field(..., ge=0)
    last_login: Optional[int] = Field(default=None, description="Epoch millis of the newest session")
    locations: List[ActiveLocation] = Field(default_factory=list)
    active_location_clusters: int = Field(default=0, ge=0)


class UserDetails(BaseModel):
    """A user's retained sessions, most recent first."""
    user_id: str
    username: str
    sessions: List[Session] = Field(default_factory=list)
