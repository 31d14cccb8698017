import math

from runsynth.core.constants import EARTH_RADIUS_M, METERS_PER_DEG_LAT
from runsynth.models.activity import GeoPoint


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return great‑circle distance in meters between two WGS84 points.

    Uses the standard haversine formula; sufficient for per‑point distances
    over a hand-drawn running route.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def point_distance(a: GeoPoint, b: GeoPoint) -> float:
    return haversine(a.lat, a.lng, b.lat, b.lng)


def offset_point(point: GeoPoint, offset_lat_m: float, offset_lon_m: float) -> GeoPoint:
    """Shift a point by a small north/east offset in meters (flat-earth approximation)."""
    meters_per_deg_lon = METERS_PER_DEG_LAT * math.cos(math.radians(point.lat))
    return GeoPoint(
        lat=point.lat + offset_lat_m / METERS_PER_DEG_LAT,
        lng=point.lng + offset_lon_m / meters_per_deg_lon,
    )
