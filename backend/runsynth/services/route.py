"""Route geometry: loop closure and lap expansion."""

import logging
import math
import random

from runsynth.core.constants import (
    CLOSED_THRESHOLD_M,
    MIN_ROUTE_POINTS,
    NOISE_RADIUS_MAX_M,
    NOISE_RADIUS_MIN_M,
    TWO_PI,
)
from runsynth.models.activity import GeoPoint
from runsynth.services.geo import offset_point, point_distance

logger = logging.getLogger(__name__)


def close_loop(route: list[GeoPoint]) -> list[GeoPoint]:
    """Append the first point when the route does not already end near its start.

    Returns the input unchanged when the endpoints are within
    CLOSED_THRESHOLD_M, so calling this twice is the same as calling it once.
    """
    if len(route) < MIN_ROUTE_POINTS:
        return route
    first, last = route[0], route[-1]
    if point_distance(first, last) < CLOSED_THRESHOLD_M:
        return route
    return [*route, GeoPoint(first.lat, first.lng)]


def lap_offset(rng: random.Random) -> tuple[float, float]:
    """Draw one (north, east) drift in meters for a lap."""
    radius = rng.uniform(NOISE_RADIUS_MIN_M, NOISE_RADIUS_MAX_M)
    bearing = rng.random() * TWO_PI
    return radius * math.cos(bearing), radius * math.sin(bearing)


def expand_laps(
    base_route: list[GeoPoint],
    lap_count: int,
    add_noise: bool,
    rng: random.Random | None = None,
) -> list[GeoPoint]:
    """Repeat the base route `lap_count` times.

    With `add_noise` each lap (not each point) is shifted by one random
    5-10 m offset, which looks like GPS drift between loops while keeping
    the shape. A single lap is never perturbed.
    """
    laps = max(1, lap_count)
    if not add_noise or laps == 1:
        return [p for _ in range(laps) for p in base_route]

    rng = rng or random.Random()
    points: list[GeoPoint] = []
    for lap_idx in range(laps):
        north_m, east_m = lap_offset(rng)
        logger.debug("lap %d offset north=%.2fm east=%.2fm", lap_idx + 1, north_m, east_m)
        points.extend(offset_point(p, north_m, east_m) for p in base_route)
    return points
