"""Shared application constants.

Centralizes the geometry, pacing and heart-rate tuning values used by the
synthesis pipeline so we can document and adjust them in one place.
"""

import math

# Mean Earth radius used by the haversine formula (meters)
EARTH_RADIUS_M = 6371000.0

# Flat-earth approximation for small offsets
METERS_PER_DEG_LAT = 111320.0

TWO_PI = 2 * math.pi

# A route whose endpoints are closer than this is already a loop (meters)
CLOSED_THRESHOLD_M = 5.0
MIN_ROUTE_POINTS = 2

# Per-lap GPS drift radius bounds (meters)
NOISE_RADIUS_MIN_M = 5.0
NOISE_RADIUS_MAX_M = 10.0

# Request parameter bounds
PACE_DEFAULT_S_PER_KM = 360.0
HR_REST_MIN = 30
HR_REST_MAX = 120
HR_REST_DEFAULT = 60
HR_MAX_MIN = 100
HR_MAX_MAX = 220
HR_MAX_DEFAULT = 180
LAP_MIN_COUNT = 1

# Per-variant overall speed multiplier: [0.98, 1.04]
BASE_SPEED_FACTOR_MIN = 0.98
BASE_SPEED_FACTOR_RANGE = 0.06

# Speed waveform: one slow undulation and a 3x faster ripple per route
LONG_WAVE_AMPLITUDE = 0.04
LONG_WAVE_CYCLES = 1
SHORT_WAVE_AMPLITUDE = 0.02
SHORT_WAVE_CYCLES = 3

# Intensity profile breakpoints as fraction of route distance
WARMUP_END_FRAC = 0.1
KICK_START_FRAC = 0.8
WARMUP_INTENSITY_START = 0.4
WARMUP_INTENSITY_END = 0.8
STEADY_INTENSITY = 0.8
STEADY_INTENSITY_SWING = 0.05
KICK_INTENSITY_START = 0.85
KICK_INTENSITY_END = 0.95

# intensity = PROFILE_WEIGHT * profile + EFFORT_WEIGHT * effort
PROFILE_WEIGHT = 0.7
EFFORT_WEIGHT = 0.3

# Heart-rate exponential smoothing factor per point and jitter half-width (bpm)
HR_SMOOTHING = 0.15
HR_JITTER_BPM = 1.5

# FIT file identity placeholders
FIT_PRODUCT_ID = 1
FIT_SERIAL_NUMBER = 1
FIT_MEDIA_TYPE = "application/vnd.ant.fit"

# FIT field ranges: speed is uint16 mm/s, times are uint32 ms, distance uint32 cm
FIT_MAX_SPEED_MPS = 65535 / 1000
FIT_MAX_DURATION_S = 4294967295 / 1000
FIT_MAX_DISTANCE_M = 4294967295 / 100

# Worst-case ratio of a reported sample speed to the average speed. The
# waveform swings raw speed by at most +/-6%; duration normalization then
# divides out the base factor, leaving (1 + 0.06) / (1 - 0.06).
PEAK_SPEED_RATIO = (1 + LONG_WAVE_AMPLITUDE + SHORT_WAVE_AMPLITUDE) / (
    1 - LONG_WAVE_AMPLITUDE - SHORT_WAVE_AMPLITUDE
)

# Fastest pace whose peak sample speed still fits the FIT speed field (~17.2 s/km)
PACE_MIN_S_PER_KM = 1000 * PEAK_SPEED_RATIO / FIT_MAX_SPEED_MPS
