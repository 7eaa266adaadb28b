"""Great-circle distance between two positions.

Haversine on a spherical Earth. Inputs are not range-checked here;
schema validation happens at the edges.
"""

from math import asin, cos, radians, sin, sqrt

from geo_guard.common.constants import GeoConstants
from geo_guard.data.schemas.geo_point import GeoPoint


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in kilometers between two lat/lon pairs in degrees."""
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push `a` a hair above 1 for antipodal points
    return 2 * GeoConstants.EARTH_RADIUS_KM * asin(sqrt(min(1.0, a)))


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Distance in kilometers between two GeoPoints. Symmetric; 0 for identical coordinates."""
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)
