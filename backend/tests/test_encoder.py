import io
import random
from datetime import datetime, timedelta, timezone

import pytest
from fit_tool.fit_file_builder import FitFileBuilder
from fitparse import FitFile

from runsynth.core.constants import FIT_MAX_SPEED_MPS, PACE_MIN_S_PER_KM
from runsynth.core.errors import EncodingFailure
from runsynth.models.activity import ActivityResult, GeoPoint, Sample
from runsynth.services.distance import accumulate
from runsynth.services.encoder import encode_activity
from runsynth.services.route import close_loop, expand_laps
from runsynth.services.synthesizer import synthesize


START = datetime(2025, 3, 9, 7, 30, tzinfo=timezone.utc)

ROUTE = close_loop([
    GeoPoint(-33.8700, 151.2000),
    GeoPoint(-33.8690, 151.2030),
    GeoPoint(-33.8710, 151.2050),
    GeoPoint(-33.8725, 151.2015),
])


def _semicircles(deg: float) -> int:
    return round(deg * 2**31 / 180)


def _activity(laps=2, seed=7, pace=330) -> ActivityResult:
    points = expand_laps(ROUTE, laps, add_noise=True, rng=random.Random(seed))
    distances, total = accumulate(points)
    return synthesize(points, distances, total, pace, 58, 182, random.Random(seed))


def _utc(value: datetime) -> datetime:
    # fitparse returns naive UTC datetimes; tolerate aware ones too
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _decode(content: bytes):
    ff = FitFile(io.BytesIO(content))
    return list(ff.messages)


def test_message_order():
    result = _activity()
    msgs = _decode(encode_activity(result, START))
    names = [m.name for m in msgs]
    assert names[:4] == ["file_id", "device_info", "session", "activity"]
    assert names[4:] == ["record"] * len(result.samples)


def test_file_id_and_device_info():
    msgs = _decode(encode_activity(_activity(), START))
    file_id = msgs[0]
    assert file_id.get_value("type") == "activity"
    assert file_id.get_value("manufacturer") == "development"
    assert file_id.get_value("product") == 1
    assert _utc(file_id.get_value("time_created")) == START.replace(tzinfo=None)
    assert msgs[1].get_value("serial_number") == 1


def test_session_summary():
    result = _activity()
    msgs = _decode(encode_activity(result, START))
    session = msgs[2]
    assert session.get_value("sport") == "running"
    assert session.get_value("sub_sport") == "generic"
    assert _utc(session.get_value("start_time")) == START.replace(tzinfo=None)
    assert session.get_value("total_elapsed_time") == pytest.approx(result.total_duration_sec, abs=0.01)
    assert session.get_value("total_timer_time") == pytest.approx(result.total_duration_sec, abs=0.01)
    assert session.get_value("total_distance") == pytest.approx(result.total_distance_meters, abs=0.02)
    avg = result.total_distance_meters / result.total_duration_sec
    assert session.get_value("avg_speed") == pytest.approx(avg, abs=0.002)
    end = START.replace(tzinfo=None) + timedelta(seconds=result.total_duration_sec)
    assert abs((_utc(session.get_value("timestamp")) - end).total_seconds()) <= 1

    activity = msgs[3]
    assert activity.get_value("num_sessions") == 1
    assert activity.get_value("type") == "manual"


def test_records_carry_samples():
    result = _activity()
    records = [m for m in _decode(encode_activity(result, START)) if m.name == "record"]
    assert len(records) == len(result.samples)

    prev_ts = None
    for rec, sample in zip(records, result.samples):
        assert abs(rec.get_value("position_lat") - _semicircles(sample.lat)) <= 1
        assert abs(rec.get_value("position_long") - _semicircles(sample.lng)) <= 1
        assert rec.get_value("heart_rate") == sample.heart_rate
        assert rec.get_value("distance") == pytest.approx(sample.distance, abs=0.02)
        assert rec.get_value("speed") == pytest.approx(sample.speed, abs=0.002)
        ts = _utc(rec.get_value("timestamp"))
        expected = START.replace(tzinfo=None) + timedelta(seconds=sample.time_sec)
        assert abs((ts - expected).total_seconds()) <= 1
        if prev_ts is not None:
            assert ts >= prev_ts
        prev_ts = ts


def test_encoding_is_deterministic():
    a = encode_activity(_activity(seed=3), START)
    b = encode_activity(_activity(seed=3), START)
    assert a == b


def test_minimal_activity_encodes():
    result = ActivityResult(
        total_distance_meters=100.0,
        total_duration_sec=30.0,
        samples=[
            Sample(0.0, 0.0, 3.3, 60, 10.0, 10.0),
            Sample(30.0, 100.0, 3.3, 120, 10.0009, 10.0),
        ],
    )
    msgs = _decode(encode_activity(result, START))
    assert [m.name for m in msgs].count("record") == 2


@pytest.mark.parametrize("seed", range(5))
def test_fastest_allowed_pace_encodes(seed):
    result = _activity(laps=3, seed=seed, pace=PACE_MIN_S_PER_KM)
    assert max(s.speed for s in result.samples) <= FIT_MAX_SPEED_MPS
    records = [m for m in _decode(encode_activity(result, START)) if m.name == "record"]
    assert len(records) == len(result.samples)


def test_builder_error_becomes_encoding_failure(monkeypatch):
    def broken_build(self):
        raise ValueError("field speed out of range: 70000")

    monkeypatch.setattr(FitFileBuilder, "build", broken_build)
    with pytest.raises(EncodingFailure) as exc:
        encode_activity(_activity(), START)
    assert "out of range" not in str(exc.value)
    assert isinstance(exc.value.__cause__, ValueError)
