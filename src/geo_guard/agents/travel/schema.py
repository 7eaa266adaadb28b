"""Impossible Travel Agent Output Schema.

Pydantic models for structured travel evaluation output.
Pure data validation.
"""

from typing import Optional

from pydantic import BaseModel, Field


class TravelEvaluation(BaseModel):
    """Outcome of comparing two login samples.

    required_speed_kmh is infinite when both samples share a timestamp.
    """

    distance_km: float = Field(..., ge=0.0, description="Great-circle distance between the samples")
    elapsed_hours: float = Field(..., ge=0.0, description="Absolute time between the samples")
    required_speed_kmh: float = Field(..., ge=0.0, description="Speed needed to cover the distance")
    suspicious: bool = Field(..., description="Whether the implied travel is implausible")
    reason: str = Field(..., description="Operator-facing explanation")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "distance_km": 3935.7,
                "elapsed_hours": 1.0,
                "required_speed_kmh": 3935.7,
                "suspicious": True,
                "reason": "required speed 3936 km/h exceeds max allowed 900 km/h",
            }
        }
    }


class TravelSignal(BaseModel):
    """Output from the Impossible Travel Agent.

    Carries the single most implausible evaluation among the user's
    recent sessions, if any was flagged.
    """

    suspicious: bool = Field(..., description="Whether any recent session makes the login implausible")
    reason: str = Field(default="", description="Reason of the most extreme flagged evaluation")
    evaluation: Optional[TravelEvaluation] = Field(
        default=None, description="The evaluation driving the signal"
    )
    sessions_checked: int = Field(default=0, ge=0, description="Recent sessions evaluated")
