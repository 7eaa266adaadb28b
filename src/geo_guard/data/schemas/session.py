"""LoginSample and Session schemas - canonical definitions."""

from uuid import uuid4

from pydantic import BaseModel, Field

from geo_guard.data.schemas.geo_point import GeoPoint


def new_session_id() -> str:
    """Generate a collision-free session identifier."""
    return f"sess_{uuid4().hex}"


class LoginSample(BaseModel):
    """Where and when a login happened.

    Immutable once recorded.
    """
    location: GeoPoint = Field(..., description="Reported position of the client")
    timestamp_millis: int = Field(..., ge=0, description="Epoch milliseconds")
    ip_address: str = Field(default="", description="Client IP address")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "location": {
                    "latitude": 40.7128,
                    "longitude": -74.0060,
                    "accuracy_meters": 25.0,
                },
                "timestamp_millis": 1769610605000,
                "ip_address": "192.168.1.100",
            }
        }
    }


class Session(LoginSample):
    """A successful login instance.

    Created on a successful, non-suspicious login; never mutated.
    "Active" is derived from the timestamp, not stored.
    """
    session_id: str = Field(default_factory=new_session_id, description="Unique session identifier")

    @classmethod
    def from_sample(cls, sample: LoginSample) -> "Session":
        """Open a session for an accepted login sample."""
        return cls(
            location=sample.location,
            timestamp_millis=sample.timestamp_millis,
            ip_address=sample.ip_address,
        )

    def is_active(self, now_millis: int, window_millis: float) -> bool:
        return now_millis - self.timestamp_millis < window_millis
