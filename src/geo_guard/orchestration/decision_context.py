"""Decision Context - immutable records produced by the decision engine.

Frozen dataclasses; nothing downstream may modify a verdict once made.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from geo_guard.agents.location.schema import LocationSignal
from geo_guard.agents.travel.schema import TravelSignal
from geo_guard.core.types import SignalType


@dataclass(frozen=True)
class Verdict:
    """Final suspicious/not-suspicious call for one login candidate.

    Both signals are kept for the audit trail; `reason` is the one the
    operator sees.
    """
    verdict_id: str
    user_id: str
    suspicious: bool
    reason: str
    signal: SignalType
    travel: TravelSignal
    location: LocationSignal
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        user_id: str,
        travel: TravelSignal,
        location: LocationSignal,
    ) -> "Verdict":
        """Combine the two signals.

        The concurrent-location signal wins the reported reason whenever
        it fires; otherwise the impossible-travel reason is used.
        """
        if location.suspicious:
            signal, reason = SignalType.CONCURRENT_LOCATIONS, location.reason
        elif travel.suspicious:
            signal, reason = SignalType.IMPOSSIBLE_TRAVEL, travel.reason
        else:
            signal, reason = SignalType.NONE, ""

        return cls(
            verdict_id=f"vrd_{uuid4().hex[:12]}",
            user_id=user_id,
            suspicious=signal != SignalType.NONE,
            reason=reason,
            signal=signal,
            travel=travel,
            location=location,
        )

    def to_audit_dict(self) -> Dict[str, Any]:
        """Both signals, for logging and metrics."""
        evaluation: Optional[Dict[str, Any]] = None
        if self.travel.evaluation is not None:
            evaluation = self.travel.evaluation.model_dump()
        return {
            "verdict_id": self.verdict_id,
            "user_id": self.user_id,
            "suspicious": self.suspicious,
            "signal": self.signal.value,
            "reason": self.reason,
            "travel_suspicious": self.travel.suspicious,
            "travel_reason": self.travel.reason,
            "travel_evaluation": evaluation,
            "location_suspicious": self.location.suspicious,
            "distinct_location_count": self.location.distinct_location_count,
        }
