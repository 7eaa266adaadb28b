"""Impossible Travel Agent - can the user physically have moved this fast?

Compares an incoming login against each of the user's recent sessions
and asks how fast they would have had to travel between the two.
Two fixes whose accuracy circles overlap are never flagged.

This agent thinks. It does not act.
"""

import math
from typing import Optional, Sequence

from geo_guard.agents.travel.schema import TravelEvaluation, TravelSignal
from geo_guard.common.constants import DetectionConstants, GeoConstants
from geo_guard.data.schemas.session import LoginSample
from geo_guard.geo.distance import distance_km


class PlausibilityEvaluator:
    """Pairwise travel plausibility.

    Pure: the same two samples and threshold always give the same result.
    """

    def __init__(self, max_speed_kmh: float = DetectionConstants.MAX_TRAVEL_SPEED_KMH):
        """Initialize the evaluator.

        Args:
            max_speed_kmh: Fastest travel considered plausible
        """
        self.max_speed_kmh = max_speed_kmh

    def evaluate(
        self,
        sample_a: LoginSample,
        sample_b: LoginSample,
        max_speed_kmh: Optional[float] = None,
    ) -> TravelEvaluation:
        """Evaluate the travel implied between two login samples.

        Args:
            sample_a: Earlier (or any) sample
            sample_b: Later (or any) sample
            max_speed_kmh: Override of the configured threshold

        Returns:
            TravelEvaluation with distance, elapsed time, speed and verdict
        """
        max_speed = self.max_speed_kmh if max_speed_kmh is None else max_speed_kmh

        distance = distance_km(sample_a.location, sample_b.location)
        elapsed_hours = (
            abs(sample_b.timestamp_millis - sample_a.timestamp_millis)
            / GeoConstants.MILLIS_PER_HOUR
        )
        required_speed = math.inf if elapsed_hours == 0 else distance / elapsed_hours

        accuracy_sum_km = (
            sample_a.location.accuracy_meters + sample_b.location.accuracy_meters
        ) / GeoConstants.METERS_PER_KM
        if distance <= accuracy_sum_km:
            return TravelEvaluation(
                distance_km=distance,
                elapsed_hours=elapsed_hours,
                required_speed_kmh=required_speed,
                suspicious=False,
                reason=DetectionConstants.REASON_WITHIN_ACCURACY,
            )

        if required_speed > max_speed:
            return TravelEvaluation(
                distance_km=distance,
                elapsed_hours=elapsed_hours,
                required_speed_kmh=required_speed,
                suspicious=True,
                reason=(
                    f"required speed {required_speed:.0f} km/h exceeds "
                    f"max allowed {max_speed:g} km/h"
                ),
            )

        return TravelEvaluation(
            distance_km=distance,
            elapsed_hours=elapsed_hours,
            required_speed_kmh=required_speed,
            suspicious=False,
            reason=DetectionConstants.REASON_TRAVEL_PLAUSIBLE,
        )


class ImpossibleTravelAgent:
    """Impossible Travel Agent - scans recent sessions for implausible jumps.

    Responsibilities:
    - Evaluate the candidate against every recent session
    - Keep the most extreme flagged evaluation (highest required speed)

    Constraints:
    - No side effects
    - No storage access; history is handed in
    """

    def __init__(self, evaluator: Optional[PlausibilityEvaluator] = None):
        self.evaluator = evaluator or PlausibilityEvaluator()

    def analyze(
        self,
        recent_sessions: Sequence[LoginSample],
        candidate: LoginSample,
    ) -> TravelSignal:
        """Find the hardest-to-explain recent session.

        Ties on required speed keep the earliest session.

        Args:
            recent_sessions: The user's sessions inside the recent window
            candidate: The incoming login sample

        Returns:
            TravelSignal, clean when nothing was flagged
        """
        worst: Optional[TravelEvaluation] = None

        for session in recent_sessions:
            evaluation = self.evaluator.evaluate(session, candidate)
            if not evaluation.suspicious:
                continue
            if worst is None or evaluation.required_speed_kmh > worst.required_speed_kmh:
                worst = evaluation

        if worst is None:
            return TravelSignal(suspicious=False, sessions_checked=len(recent_sessions))

        return TravelSignal(
            suspicious=True,
            reason=worst.reason,
            evaluation=worst,
            sessions_checked=len(recent_sessions),
        )
