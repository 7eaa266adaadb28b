"""LoginAttemptRecord schema - canonical definition."""

from typing import Optional

from pydantic import BaseModel, Field

from geo_guard.core.types import AttemptStatus
from geo_guard.data.schemas.geo_point import GeoPoint


class LoginAttemptRecord(BaseModel):
    """Audit record of a single login attempt.

    `success` means the credentials were valid. A login refused for
    suspicious activity is recorded with success=True and suspicious=True.
    """
    username: str = Field(..., description="Username as presented")
    success: bool = Field(..., description="Whether the credentials were valid")
    suspicious: bool = Field(default=False, description="Whether the verdict was suspicious")
    reason: Optional[str] = Field(default=None, description="Failure or suspicion reason")
    location: Optional[GeoPoint] = Field(default=None, description="Reported location, if any")
    timestamp_millis: int = Field(..., ge=0, description="Epoch milliseconds")
    ip_address: str = Field(default="", description="Client IP address")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "username": "john@example.com",
                "success": True,
                "suspicious": True,
                "reason": "required speed 3937 km/h exceeds max allowed 900 km/h",
                "location": {"latitude": 34.0522, "longitude": -118.2437, "accuracy_meters": 30.0},
                "timestamp_millis": 1769610605000,
                "ip_address": "203.0.113.7",
            }
        }
    }

    @property
    def status(self) -> AttemptStatus:
        if not self.success:
            return AttemptStatus.FAILED
        if self.suspicious:
            return AttemptStatus.BLOCKED
        return AttemptStatus.SUCCESS
