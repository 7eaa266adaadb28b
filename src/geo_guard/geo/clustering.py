"""Location clustering for active sessions.

Sessions are grouped by a single linear pass: each session is compared
against the representatives of the clusters found so far and joins the
first one closer than the tolerance, otherwise it founds a new cluster.
This is an approximation of connected components; the order of the
input decides which session represents a cluster, and two clusters
whose members chain within tolerance are not merged.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from geo_guard.data.schemas.session import Session
from geo_guard.geo.distance import distance_km


@dataclass
class LocationCluster:
    """A group of sessions reported from roughly the same place.

    Attributes:
        representative: First session that founded the cluster
        members: All sessions assigned to the cluster, in input order
    """
    representative: Session
    members: List[Session] = field(default_factory=list)

    @property
    def latitude(self) -> float:
        return self.representative.location.latitude

    @property
    def longitude(self) -> float:
        return self.representative.location.longitude

    @property
    def timestamp_millis(self) -> int:
        return self.representative.timestamp_millis

    def to_dict(self) -> dict:
        return {
            "lat": self.latitude,
            "lng": self.longitude,
            "timestamp": self.timestamp_millis,
            "session_count": len(self.members),
        }


def cluster_sessions(
    sessions: Sequence[Session],
    tolerance_km: float,
) -> List[LocationCluster]:
    """Group sessions into location clusters, first match wins.

    Args:
        sessions: Sessions in insertion order
        tolerance_km: A session joins a cluster when strictly closer than this

    Returns:
        Clusters in the order they were founded
    """
    clusters: List[LocationCluster] = []

    for session in sessions:
        for cluster in clusters:
            if distance_km(cluster.representative.location, session.location) < tolerance_km:
                cluster.members.append(session)
                break
        else:
            clusters.append(LocationCluster(representative=session, members=[session]))

    return clusters
