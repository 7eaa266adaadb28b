"""GeoPoint schema - canonical definition."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class GeoPoint(BaseModel):
    """A reported position with its accuracy radius.

    Accuracy is the radius of the fix in meters. A missing accuracy is
    treated as a perfect fix (0).
    """
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    accuracy_meters: float = Field(
        default=0.0, ge=0, description="Accuracy radius of the fix in meters"
    )

    @field_validator("accuracy_meters", mode="before")
    @classmethod
    def _missing_accuracy_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "latitude": 40.7128,
                "longitude": -74.0060,
                "accuracy_meters": 25.0,
            }
        }
    }
