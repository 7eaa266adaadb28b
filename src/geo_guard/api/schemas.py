"""API Schemas - Request/Response models for the API Gateway.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from geo_guard.core.types import AttemptStatus, LoginOutcome
from geo_guard.data.schemas.geo_point import GeoPoint
from geo_guard.data.schemas.login_attempt import LoginAttemptRecord


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class LocationRequest(BaseModel):
    """Reported client position.

    Ranges are checked by the login service so that out-of-range values
    surface as invalid input rather than schema errors.
    """
    latitude: float = Field(..., description="Latitude in degrees")
    longitude: float = Field(..., description="Longitude in degrees")
    accuracy: Optional[float] = Field(
        default=None, description="Accuracy radius in meters; missing means 0"
    )


class LoginRequest(BaseModel):
    """Request body for POST /login."""
    username: str = Field(..., description="Account username (email)")
    password: str = Field(..., description="Account password")
    location: LocationRequest = Field(..., description="Where the login comes from")

    model_config = {
        "json_schema_extra": {
            "example": {
                "username": "john@example.com",
                "password": "password123",
                "location": {
                    "latitude": 40.7128,
                    "longitude": -74.0060,
                    "accuracy": 25.0,
                },
            }
        }
    }


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class UserInfo(BaseModel):
    id: str
    username: str


class LoginResponse(BaseModel):
    """Response for an accepted login.

    multiple_locations is informational; the login itself stands.
    """
    success: bool = Field(default=True)
    message: str = Field(default="Login successful")
    outcome: LoginOutcome
    user: UserInfo
    session_id: str
    multiple_locations: bool = Field(default=False)
    active_location_count: int = Field(default=1, ge=0)

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": True,
                "message": "Login successful",
                "outcome": "accepted",
                "user": {"id": "user1", "username": "john@example.com"},
                "session_id": "sess_4f1c2a9e8b7d4c3a9e8b7d4c3a9e8b7d",
                "multiple_locations": False,
                "active_location_count": 1,
            }
        }
    }


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable message")
    request_id: Optional[str] = Field(default=None)
    reason: Optional[str] = Field(
        default=None, description="Suspicion reason, for refused logins"
    )


class AttemptView(BaseModel):
    """One row of the admin attempt log."""
    username: str
    status: AttemptStatus
    reason: Optional[str] = None
    location: Optional[GeoPoint] = None
    timestamp: int
    ip_address: str = ""

    @classmethod
    def from_record(cls, record: LoginAttemptRecord) -> "AttemptView":
        return cls(
            username=record.username,
            status=record.status,
            reason=record.reason,
            location=record.location,
            timestamp=record.timestamp_millis,
            ip_address=record.ip_address,
        )


class NotificationTestResponse(BaseModel):
    success: bool
    message: str


class NotificationSettingsResponse(BaseModel):
    """Current alerting configuration. Credentials are never returned."""
    admin_emails: List[str]
    email_configured: bool
    channel: str
    alert_on_suspicious_activity: bool
    daily_summary_hour: int = Field(..., ge=0, le=23)
