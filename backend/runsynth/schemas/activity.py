import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _loose_number(value: Any) -> Optional[float]:
    """Read a number from JSON or a numeric string; anything else becomes None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class CamelModel(BaseModel):
    """Wire models use camelCase keys; attributes stay snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class PointIn(CamelModel):
    # Unreadable coordinates arrive as None and are rejected with a 400
    lat: Optional[float] = None
    lng: Optional[float] = None

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def _coord(cls, v):
        return _loose_number(v)


class ActivityRequestBase(CamelModel):
    # Garbage in these fields falls back to defaults instead of failing the request
    points: list[PointIn] = Field(default_factory=list)
    hr_rest: Optional[float] = None
    hr_max: Optional[float] = None
    lap_count: Optional[float] = None
    # Fixes the random source so a request can be reproduced
    seed: Optional[int] = None

    @field_validator("hr_rest", "hr_max", "lap_count", mode="before")
    @classmethod
    def _loose(cls, v):
        return _loose_number(v)


class PreviewRequest(ActivityRequestBase):
    start_time: Optional[str] = None
    pace_seconds_per_km: Optional[float] = None

    @field_validator("pace_seconds_per_km", mode="before")
    @classmethod
    def _loose_pace(cls, v):
        return _loose_number(v)


class ExportRequest(PreviewRequest):
    variant_index: Optional[float] = None

    @field_validator("variant_index", mode="before")
    @classmethod
    def _loose_variant(cls, v):
        return _loose_number(v)


class ExportVariant(CamelModel):
    start_time: Optional[str] = None
    pace_seconds_per_km: Optional[float] = None

    @field_validator("pace_seconds_per_km", mode="before")
    @classmethod
    def _loose_pace(cls, v):
        return _loose_number(v)


class ExportBatchRequest(ActivityRequestBase):
    """Several exports of the same route, one record per file."""

    variants: list[ExportVariant] = Field(default_factory=list)


class SampleOut(CamelModel):
    time_sec: float
    distance: float
    speed: float
    heart_rate: int
    lat: float
    lng: float


class PreviewResponse(CamelModel):
    total_distance_meters: float
    total_duration_sec: float
    # Display helpers, e.g. "0:06:40" and "6:00/km"
    duration: str
    pace: str
    samples: list[SampleOut]


class RouteImportResponse(CamelModel):
    points: list[PointIn]
    distance_meters: float
