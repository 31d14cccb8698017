import random

import pytest

from runsynth.core.errors import DegenerateRoute
from runsynth.models.activity import GeoPoint
from runsynth.services.distance import accumulate
from runsynth.services.route import close_loop, expand_laps
from runsynth.services.synthesizer import HeartRateSmoother, intensity_profile, synthesize


LOOP = close_loop([
    GeoPoint(51.5000, -0.1200),
    GeoPoint(51.5010, -0.1180),
    GeoPoint(51.5025, -0.1185),
    GeoPoint(51.5030, -0.1210),
    GeoPoint(51.5012, -0.1225),
])


def _run(points, pace=300.0, hr_rest=55, hr_max=190, seed=1):
    distances, total = accumulate(points)
    return synthesize(points, distances, total, pace, hr_rest, hr_max, random.Random(seed))


def test_two_point_equator_scenario():
    points = [GeoPoint(0, 0), GeoPoint(0, 0.01)]
    result = _run(points, pace=360)
    assert abs(result.total_distance_meters - 1112.3) < 1.0
    assert abs(result.total_duration_sec - 400.4) < 0.5
    assert result.samples[0].time_sec == 0
    assert result.samples[-1].time_sec == result.total_duration_sec
    assert len(result.samples) == 2


@pytest.mark.parametrize("pace", [180.0, 300.0, 362.5, 900.0])
@pytest.mark.parametrize("laps", [1, 3, 7])
def test_duration_matches_distance_times_pace(pace, laps):
    route = expand_laps(LOOP, laps, add_noise=True, rng=random.Random(laps))
    result = _run(route, pace=pace, seed=laps * 13)
    expected = result.total_distance_meters / 1000 * pace
    assert result.samples[-1].time_sec == pytest.approx(expected, rel=1e-6)
    assert result.total_duration_sec == pytest.approx(expected, rel=1e-6)


@pytest.mark.parametrize("seed", range(8))
def test_heart_rate_stays_in_bounds(seed):
    route = expand_laps(LOOP, 5, add_noise=False)
    result = _run(route, hr_rest=62, hr_max=171, seed=seed)
    for s in result.samples:
        assert isinstance(s.heart_rate, int)
        assert 62 <= s.heart_rate <= 171


def test_time_and_distance_monotonic_speed_positive():
    route = expand_laps(LOOP, 4, add_noise=True, rng=random.Random(5))
    result = _run(route)
    for prev, cur in zip(result.samples, result.samples[1:]):
        assert cur.time_sec > prev.time_sec
        assert cur.distance >= prev.distance
    assert all(s.speed > 0 for s in result.samples)


def test_samples_keep_route_positions_and_distances():
    distances, total = accumulate(LOOP)
    result = synthesize(LOOP, distances, total, 330, 60, 180, random.Random(2))
    assert [s.distance for s in result.samples] == distances
    assert [(s.lat, s.lng) for s in result.samples] == [(p.lat, p.lng) for p in LOOP]


def test_average_speed_matches_pace():
    result = _run(expand_laps(LOOP, 2, add_noise=False), pace=300.0)
    avg = result.total_distance_meters / result.total_duration_sec
    assert avg == pytest.approx(1000 / 300.0, rel=1e-6)


def test_same_seed_same_samples():
    route = expand_laps(LOOP, 3, add_noise=False)
    a = _run(route, seed=42)
    b = _run(route, seed=42)
    assert a.samples == b.samples
    c = _run(route, seed=43)
    assert c.samples != a.samples


def test_heart_rate_rises_from_rest():
    route = expand_laps(LOOP, 10, add_noise=False)
    result = _run(route, hr_rest=60, hr_max=180)
    assert result.samples[0].heart_rate <= 75
    assert result.samples[-1].heart_rate > 140


def test_smoother_lags_behind_target():
    smoother = HeartRateSmoother(60, 180)
    rng = random.Random(0)
    first = smoother.step(1.0, rng)
    # one step covers only 15% of the gap to 180
    assert smoother.current == pytest.approx(60 + 120 * 0.15)
    assert 76 <= first <= 80


def test_intensity_profile_breakpoints():
    assert intensity_profile(0.0) == pytest.approx(0.4)
    assert intensity_profile(0.05) == pytest.approx(0.6)
    assert intensity_profile(0.1) == pytest.approx(0.8)
    assert 0.75 <= intensity_profile(0.5) <= 0.85
    assert intensity_profile(0.8) == pytest.approx(0.85)
    assert intensity_profile(1.0) == pytest.approx(0.95)


def test_zero_distance_rejected():
    with pytest.raises(DegenerateRoute):
        synthesize([GeoPoint(1, 1), GeoPoint(1, 1)], [0.0, 0.0], 0.0, 300, 60, 180)


def test_accumulate_rejects_coincident_points():
    with pytest.raises(DegenerateRoute):
        accumulate([GeoPoint(48.1, 11.5)] * 4)


def test_accumulate_prefix_sums():
    distances, total = accumulate(LOOP)
    assert distances[0] == 0
    assert len(distances) == len(LOOP)
    assert distances[-1] == total
    assert all(b >= a for a, b in zip(distances, distances[1:]))


def test_unnoised_laps_share_seam_timestamp():
    n = len(LOOP)
    result = _run(expand_laps(LOOP, 3, add_noise=False), seed=9)
    times = [s.time_sec for s in result.samples]
    assert len(times) == 3 * n
    seams = {k * n for k in (1, 2)}
    for i in range(1, len(times)):
        if i in seams:
            # closing point of one lap and start of the next are the same place
            assert times[i] == times[i - 1]
            assert result.samples[i].distance == result.samples[i - 1].distance
        else:
            assert times[i] > times[i - 1]
