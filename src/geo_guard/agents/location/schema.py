"""Concurrent Location Agent Output Schema."""

from typing import List

from pydantic import BaseModel, Field


class LocationSignal(BaseModel):
    """Output of the pre-login concurrent-location check.

    distinct_location_count includes the candidate's own location.
    """

    suspicious: bool = Field(..., description="Whether too many remote active sessions exist")
    reason: str = Field(default="", description="Operator-facing explanation")
    remote_session_count: int = Field(
        default=0, ge=0, description="Active sessions farther than the tolerance from the candidate"
    )
    distinct_location_count: int = Field(
        default=1, ge=1, description="Remote sessions plus the candidate"
    )


class ClusterPoint(BaseModel):
    """Representative position of an active-location cluster."""

    lat: float
    lng: float
    timestamp: int = Field(..., description="Epoch milliseconds of the representative session")
    session_count: int = Field(default=1, ge=1)


class ActiveLocationReport(BaseModel):
    """Result of clustering a user's active sessions."""

    active_session_count: int = Field(..., ge=0)
    location_count: int = Field(..., ge=0, description="Number of clusters")
    locations: List[ClusterPoint] = Field(default_factory=list)
    multiple_locations: bool = Field(..., description="Whether two or more clusters are live")
