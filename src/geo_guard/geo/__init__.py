"""Geometry - distances and location clustering."""

from geo_guard.geo.distance import distance_km, haversine_km
from geo_guard.geo.clustering import LocationCluster, cluster_sessions

__all__ = [
    "distance_km",
    "haversine_km",
    "LocationCluster",
    "cluster_sessions",
]
