"""Request checks and parameter defaults applied before the pipeline runs.

Loose wire values (strings, garbage, NaN) are already turned into numbers or
None by the request schemas; this module applies defaults and ranges.
"""

import math
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from runsynth.core.config import settings
from runsynth.core.constants import (
    FIT_MAX_DISTANCE_M,
    FIT_MAX_DURATION_S,
    HR_MAX_MAX,
    HR_MAX_MIN,
    HR_REST_MAX,
    HR_REST_MIN,
    LAP_MIN_COUNT,
    MIN_ROUTE_POINTS,
    PACE_MIN_S_PER_KM,
)
from runsynth.core.errors import InvalidInput
from runsynth.models.activity import ActivityParams, GeoPoint


def _given(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


def parse_start_time(value: str | None) -> datetime:
    """Parse an ISO-8601 instant; naive values are taken as UTC."""
    if not value or not str(value).strip():
        raise InvalidInput("startTime is required")
    try:
        dt = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except ValueError:
        raise InvalidInput(f"startTime is not a valid ISO-8601 time: {value!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _coord(p: Any, name: str):
    return p.get(name) if isinstance(p, dict) else getattr(p, name, None)


def require_points(points: Sequence[Any] | None) -> list[GeoPoint]:
    """Normalize points to GeoPoint and insist on at least two of them."""
    if not points or len(points) < MIN_ROUTE_POINTS:
        raise InvalidInput(f"at least {MIN_ROUTE_POINTS} route points are required")
    out: list[GeoPoint] = []
    for idx, p in enumerate(points):
        if isinstance(p, GeoPoint):
            out.append(p)
            continue
        try:
            lat, lng = float(_coord(p, "lat")), float(_coord(p, "lng"))
        except (TypeError, ValueError):
            raise InvalidInput(f"point {idx} needs numeric lat and lng")
        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise InvalidInput(f"point {idx} needs numeric lat and lng")
        out.append(GeoPoint(lat, lng))
    return out


def resolve_pace(value: Optional[float]) -> float:
    """Default a missing/non-positive pace; reject paces too fast to encode."""
    if not _given(value) or value <= 0:
        return float(settings.default_pace_seconds_per_km)
    if value < PACE_MIN_S_PER_KM:
        raise InvalidInput(
            f"paceSecondsPerKm must be at least {PACE_MIN_S_PER_KM:.1f} s/km, got {value:g}"
        )
    return float(value)


def check_encodable(total_distance: float, pace_seconds_per_km: float) -> None:
    """Reject routes whose distance or duration cannot be stored in a FIT session."""
    if total_distance > FIT_MAX_DISTANCE_M:
        raise InvalidInput(f"route is too long ({total_distance / 1000:.0f} km)")
    duration = total_distance / 1000 * pace_seconds_per_km
    if duration > FIT_MAX_DURATION_S:
        raise InvalidInput(
            f"activity would last {duration:.0f}s; the limit is {FIT_MAX_DURATION_S:.0f}s, "
            "use a faster pace or fewer laps"
        )


def resolve_params(
    pace_seconds_per_km: Optional[float] = None,
    hr_rest: Optional[float] = None,
    hr_max: Optional[float] = None,
    lap_count: Optional[float] = None,
    variant_index: Optional[float] = None,
) -> ActivityParams:
    """Apply defaults and ranges to request values.

    Missing values fall back to configured defaults. Heart rates are
    clamped to the ranges the UI offers; a resting rate that is not below
    the max is rejected.
    """
    rest = hr_rest if _given(hr_rest) else settings.default_hr_rest
    peak = hr_max if _given(hr_max) else settings.default_hr_max
    rest = int(min(HR_REST_MAX, max(HR_REST_MIN, round(rest))))
    peak = int(min(HR_MAX_MAX, max(HR_MAX_MIN, round(peak))))
    if rest >= peak:
        raise InvalidInput(f"hrRest ({rest}) must be lower than hrMax ({peak})")

    laps = math.floor(lap_count) if _given(lap_count) and lap_count >= LAP_MIN_COUNT else LAP_MIN_COUNT
    variant = math.floor(variant_index) if _given(variant_index) and variant_index >= 1 else 1

    return ActivityParams(
        pace_seconds_per_km=resolve_pace(pace_seconds_per_km),
        hr_rest=rest,
        hr_max=peak,
        lap_count=int(laps),
        variant_index=int(variant),
    )
