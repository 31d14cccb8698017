"""Speed and heart-rate synthesis over a route.

The synthesizer shapes pace with a slow undulation plus a faster ripple,
drives heart rate from a warm-up / steady / kick intensity curve, and then
rescales every segment so the activity lasts exactly distance * pace.
Randomness only changes the shape of the signals, never the total time.
"""

import logging
import math
import random
from dataclasses import dataclass

from runsynth.core.constants import (
    BASE_SPEED_FACTOR_MIN,
    BASE_SPEED_FACTOR_RANGE,
    EFFORT_WEIGHT,
    HR_JITTER_BPM,
    HR_SMOOTHING,
    KICK_INTENSITY_END,
    KICK_INTENSITY_START,
    KICK_START_FRAC,
    LONG_WAVE_AMPLITUDE,
    LONG_WAVE_CYCLES,
    PROFILE_WEIGHT,
    SHORT_WAVE_AMPLITUDE,
    SHORT_WAVE_CYCLES,
    STEADY_INTENSITY,
    STEADY_INTENSITY_SWING,
    TWO_PI,
    WARMUP_END_FRAC,
    WARMUP_INTENSITY_END,
    WARMUP_INTENSITY_START,
)
from runsynth.core.errors import DegenerateRoute
from runsynth.models.activity import ActivityResult, GeoPoint, Sample

logger = logging.getLogger(__name__)


def _clamp(value: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, value))


@dataclass
class SpeedProfile:
    """Per-activity random draws for the speed waveform."""

    base_factor: float
    phase1: float
    phase2: float

    @classmethod
    def draw(cls, rng: random.Random) -> "SpeedProfile":
        return cls(
            base_factor=BASE_SPEED_FACTOR_MIN + rng.random() * BASE_SPEED_FACTOR_RANGE,
            phase1=rng.random() * TWO_PI,
            phase2=rng.random() * TWO_PI,
        )

    def speed_at(self, frac: float, avg_speed: float) -> float:
        long_wave = LONG_WAVE_AMPLITUDE * math.sin(TWO_PI * LONG_WAVE_CYCLES * frac + self.phase1)
        short_wave = SHORT_WAVE_AMPLITUDE * math.sin(TWO_PI * SHORT_WAVE_CYCLES * frac + self.phase2)
        return avg_speed * self.base_factor * (1 + long_wave + short_wave)


def intensity_profile(frac: float) -> float:
    """Baseline effort curve by route fraction: warm-up, steady state, finishing kick."""
    if frac < WARMUP_END_FRAC:
        f = frac / WARMUP_END_FRAC
        return WARMUP_INTENSITY_START + (WARMUP_INTENSITY_END - WARMUP_INTENSITY_START) * f
    if frac < KICK_START_FRAC:
        f = (frac - WARMUP_END_FRAC) / (KICK_START_FRAC - WARMUP_END_FRAC)
        return STEADY_INTENSITY + STEADY_INTENSITY_SWING * math.sin(TWO_PI * f)
    f = (frac - KICK_START_FRAC) / (1 - KICK_START_FRAC)
    return KICK_INTENSITY_START + (KICK_INTENSITY_END - KICK_INTENSITY_START) * f


@dataclass
class HeartRateSmoother:
    """Exponential moving average of heart rate with per-sample jitter.

    `current` is the smoothed state; jitter is applied to the emitted value
    only and never fed back.
    """

    hr_rest: int
    hr_max: int
    current: float = 0.0

    def __post_init__(self):
        self.current = float(self.hr_rest)

    def step(self, intensity: float, rng: random.Random) -> int:
        target = self.hr_rest + (self.hr_max - self.hr_rest) * intensity
        self.current += (target - self.current) * HR_SMOOTHING
        jitter = (rng.random() - 0.5) * 2 * HR_JITTER_BPM
        return int(round(_clamp(self.current + jitter, self.hr_rest, self.hr_max)))


def synthesize(
    points: list[GeoPoint],
    distances: list[float],
    total_distance: float,
    pace_seconds_per_km: float,
    hr_rest: int,
    hr_max: int,
    rng: random.Random | None = None,
) -> ActivityResult:
    """Build time-stamped samples whose final time equals distance * pace."""
    if total_distance <= 0:
        raise DegenerateRoute()
    rng = rng or random.Random()

    target_duration = total_distance / 1000 * pace_seconds_per_km
    avg_speed = total_distance / target_duration

    profile = SpeedProfile.draw(rng)
    smoother = HeartRateSmoother(hr_rest, hr_max)

    raw_speeds: list[float] = []
    heart_rates: list[int] = []
    for dist in distances:
        frac = dist / total_distance
        speed_raw = profile.speed_at(frac, avg_speed)
        raw_speeds.append(speed_raw)

        effort = _clamp(speed_raw / avg_speed, 0, 1)
        intensity = _clamp(PROFILE_WEIGHT * intensity_profile(frac) + EFFORT_WEIGHT * effort, 0, 1)
        heart_rates.append(smoother.step(intensity, rng))

    seg_durations: list[float] = []
    for i in range(1, len(distances)):
        v = raw_speeds[i] if raw_speeds[i] > 0 else avg_speed
        seg_durations.append((distances[i] - distances[i - 1]) / v)
    raw_duration = sum(seg_durations)

    scale = target_duration / raw_duration if raw_duration > 0 else 1.0
    logger.debug(
        "synthesized %d points: target=%.2fs raw=%.2fs scale=%.5f",
        len(points), target_duration, raw_duration, scale,
    )

    samples: list[Sample] = []
    t = 0.0
    for i, point in enumerate(points):
        if i > 0:
            t += seg_durations[i - 1] * scale
        samples.append(Sample(
            time_sec=t,
            distance=distances[i],
            speed=raw_speeds[i] / scale,
            heart_rate=heart_rates[i],
            lat=point.lat,
            lng=point.lng,
        ))

    total_duration = samples[-1].time_sec if samples else target_duration
    return ActivityResult(
        total_distance_meters=total_distance,
        total_duration_sec=total_duration,
        samples=samples,
    )
