from dataclasses import dataclass, field

from runsynth.core.constants import (
    HR_MAX_DEFAULT,
    HR_REST_DEFAULT,
    LAP_MIN_COUNT,
    PACE_DEFAULT_S_PER_KM,
)


@dataclass(frozen=True)
class GeoPoint:
    lat: float  # degrees
    lng: float  # degrees


@dataclass(frozen=True)
class ActivityParams:
    """Validated knobs for one generated activity."""

    pace_seconds_per_km: float = PACE_DEFAULT_S_PER_KM
    hr_rest: int = HR_REST_DEFAULT
    hr_max: int = HR_MAX_DEFAULT
    lap_count: int = LAP_MIN_COUNT
    variant_index: int = 1


@dataclass
class Sample:
    time_sec: float
    distance: float  # cumulative meters
    speed: float     # m/s
    heart_rate: int  # bpm
    lat: float
    lng: float


@dataclass
class ActivityResult:
    total_distance_meters: float
    total_duration_sec: float
    samples: list[Sample] = field(default_factory=list)


@dataclass
class ExportedFile:
    filename: str
    content: bytes
