from runsynth.core.errors import DegenerateRoute
from runsynth.models.activity import GeoPoint
from runsynth.services.geo import point_distance


def accumulate(points: list[GeoPoint]) -> tuple[list[float], float]:
    """Return (cumulative distances in meters, total distance).

    distances[0] is 0 and the list has one entry per point. Raises
    DegenerateRoute when every point coincides.
    """
    distances = [0.0] if points else []
    total = 0.0
    for prev, cur in zip(points, points[1:]):
        total += point_distance(prev, cur)
        distances.append(total)

    if total == 0:
        raise DegenerateRoute()
    return distances, total
