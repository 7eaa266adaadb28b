"""Concurrent Location Agent - is the account live in several places at once?

Two questions, asked at different moments of a login:
- Before the decision: how many active sessions sit materially far
  from the incoming attempt?
- After a login is accepted: into how many location clusters do the
  active sessions fall?

This agent thinks. It does not act.
"""

from typing import Sequence

from geo_guard.agents.location.schema import (
    ActiveLocationReport,
    ClusterPoint,
    LocationSignal,
)
from geo_guard.common.constants import DetectionConstants
from geo_guard.data.schemas.session import LoginSample, Session
from geo_guard.geo.clustering import cluster_sessions
from geo_guard.geo.distance import distance_km


class ConcurrentLocationAgent:
    """Concurrent Location Agent - simultaneous sessions from distinct places.

    Constraints:
    - No side effects
    - No storage access; active sessions are handed in
    """

    def __init__(
        self,
        location_tolerance_km: float = DetectionConstants.LOCATION_TOLERANCE_KM,
        max_concurrent_locations: int = DetectionConstants.MAX_CONCURRENT_LOCATIONS,
    ):
        """Initialize Concurrent Location Agent.

        Args:
            location_tolerance_km: Distance under which two positions count as the same place
            max_concurrent_locations: Remote active sessions needed to flag a login
        """
        self.location_tolerance_km = location_tolerance_km
        self.max_concurrent_locations = max_concurrent_locations

    def analyze(
        self,
        active_sessions: Sequence[Session],
        candidate: LoginSample,
    ) -> LocationSignal:
        """Check the pre-login active sessions against the candidate.

        Args:
            active_sessions: Sessions active before this login
            candidate: The incoming login sample

        Returns:
            LocationSignal, suspicious when enough remote sessions are live
        """
        remote = [
            session for session in active_sessions
            if distance_km(session.location, candidate.location) > self.location_tolerance_km
        ]
        location_count = len(remote) + 1

        if len(remote) >= self.max_concurrent_locations:
            return LocationSignal(
                suspicious=True,
                reason=(
                    f"Multiple active sessions detected from "
                    f"{location_count} different locations"
                ),
                remote_session_count=len(remote),
                distinct_location_count=location_count,
            )

        return LocationSignal(
            suspicious=False,
            remote_session_count=len(remote),
            distinct_location_count=location_count,
        )

    def cluster_active(self, active_sessions: Sequence[Session]) -> ActiveLocationReport:
        """Cluster active sessions by location.

        Args:
            active_sessions: Currently active sessions, insertion order

        Returns:
            ActiveLocationReport; multiple_locations is set at two or more clusters
        """
        clusters = cluster_sessions(active_sessions, self.location_tolerance_km)
        return ActiveLocationReport(
            active_session_count=len(active_sessions),
            location_count=len(clusters),
            locations=[ClusterPoint(**cluster.to_dict()) for cluster in clusters],
            multiple_locations=len(clusters) >= 2,
        )
