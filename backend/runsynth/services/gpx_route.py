import gpxpy
import gpxpy.gpx

from runsynth.core.constants import MIN_ROUTE_POINTS
from runsynth.core.errors import InvalidInput
from runsynth.models.activity import GeoPoint


def points_from_gpx(source) -> list[GeoPoint]:
    """Extract a base route from GPX text or a file-like object.

    Uses track points when present, otherwise route points, otherwise
    waypoints. Timestamps and elevation are ignored; only the shape matters.
    """
    try:
        gpx = gpxpy.parse(source)
    except gpxpy.gpx.GPXException as e:
        raise InvalidInput(f"could not parse GPX: {e}")

    track_points = [
        GeoPoint(p.latitude, p.longitude)
        for track in gpx.tracks
        for segment in track.segments
        for p in segment.points
    ]
    route_points = [
        GeoPoint(p.latitude, p.longitude)
        for route in gpx.routes
        for p in route.points
    ]
    waypoints = [GeoPoint(p.latitude, p.longitude) for p in gpx.waypoints]

    points = track_points or route_points or waypoints
    if len(points) < MIN_ROUTE_POINTS:
        raise InvalidInput(f"GPX must contain at least {MIN_ROUTE_POINTS} points")
    return points
