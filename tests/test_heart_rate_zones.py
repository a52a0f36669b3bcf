"""Tests for the default heart rate zone model."""

import json

import pytest

from training_reports.services.heart_rate_zones import HeartRateZoneModel


@pytest.fixture
def model():
    return HeartRateZoneModel()


@pytest.fixture
def zones(model):
    return model.build_zones(185, 55)


def gps_track(samples):
    """GPS JSON from (seconds offset, hr) pairs."""
    return json.dumps([
        {"lat": 45.0, "lon": 5.0, "time": f"2024-03-01T10:{offset // 60:02d}:{offset % 60:02d}", "hr": hr}
        for offset, hr in samples
    ])


def test_build_zones_karvonen(zones):
    assert [(z.min, z.max) for z in zones] == [
        (120, 133), (133, 146), (146, 159), (159, 172), (172, 185),
    ]
    assert [z.zone for z in zones] == [1, 2, 3, 4, 5]
    assert zones[0].color == "#0EA5E9"


def test_default_profile_zones(model):
    zones = model.build_zones(190, 60)

    assert zones[0].min == 125
    assert zones[-1].max == 190


def test_resolve_zone_index_clamps(model, zones):
    assert model.resolve_zone_index(100, zones) == 0
    assert model.resolve_zone_index(150, zones) == 2
    assert model.resolve_zone_index(200, zones) == 4
    assert model.resolve_zone_index(150, []) == 0


def test_average_heart_rate_split(model, zones, activity_factory):
    activity = activity_factory("2024-03-01T10:00:00", duration=3600, avg_heart_rate=150)

    result = model.calculate_zone_durations(activity, zones)

    assert result.source == "average"
    assert result.durations == pytest.approx([90, 720, 2160, 540, 90])
    assert result.total_seconds == 3600


def test_samples_are_scaled_to_activity_duration(model, zones, activity_factory):
    track = gps_track([(0, 125), (10, 140), (20, 140), (30, 150)])
    activity = activity_factory("2024-03-01T10:00:00", duration=60, gps_data=track)

    result = model.calculate_zone_durations(activity, zones)

    assert result.source == "samples"
    assert result.durations == pytest.approx([20, 40, 0, 0, 0])
    assert result.total_seconds == 60


def test_sample_gaps_are_clamped(model, zones, activity_factory):
    track = gps_track([(0, 125), (120, 125)])
    activity = activity_factory("2024-03-01T10:00:00", duration=40, gps_data=track)

    result = model.calculate_zone_durations(activity, zones)

    # 120 s gap counts as 30 s, then scaled by 40/30
    assert result.durations[0] == pytest.approx(40)


def test_inconsistent_samples_fall_back_to_average(model, zones, activity_factory):
    track = gps_track([(0, 125), (10, 125), (20, 125)])
    activity = activity_factory("2024-03-01T10:00:00", duration=3600, avg_heart_rate=150, gps_data=track)

    result = model.calculate_zone_durations(activity, zones)

    assert result.source == "average"
    assert sum(result.durations) == pytest.approx(3600)


def test_unparseable_gps_data(model, zones, activity_factory):
    activity = activity_factory("2024-03-01T10:00:00", duration=600, gps_data="not json")

    result = model.calculate_zone_durations(activity, zones)

    assert result.source == "none"
    assert result.durations == [0, 0, 0, 0, 0]


def test_polarization_balanced(model):
    buckets = [
        {"zone": 1, "seconds": 4000},
        {"zone": 2, "seconds": 4000},
        {"zone": 3, "seconds": 1000},
        {"zone": 4, "seconds": 600},
        {"zone": 5, "seconds": 400},
    ]

    summary = model.build_polarization_summary(buckets)

    assert summary.percentages.low == pytest.approx(80)
    assert summary.score == 100
    assert summary.focus == "balanced"


def test_polarization_too_much_intensity(model):
    buckets = [
        {"zone": 2, "seconds": 7500},
        {"zone": 4, "seconds": 2500},
    ]

    summary = model.build_polarization_summary(buckets)

    assert summary.focus == "too much intensity"
    assert summary.target.low == 80


def test_utc_designator_sample_times(model, zones, activity_factory):
    track = json.dumps([
        {"time": f"2024-03-02T09:00:{second:02d}Z", "hr": 180}
        for second in range(0, 60, 5)
    ])
    activity = activity_factory("2024-03-02T09:00:00", duration=55, gps_data=track)

    result = model.calculate_zone_durations(activity, zones)

    assert result.source == "samples"
    assert result.durations == pytest.approx([0, 0, 0, 0, 55])


def test_out_of_range_epoch_times_are_skipped(model, zones, activity_factory):
    track = json.dumps([{"time": 1e20, "hr": 150}, {"time": 1e20 + 1000, "hr": 150}])
    activity = activity_factory("2024-03-02T09:00:00", duration=600, gps_data=track)

    result = model.calculate_zone_durations(activity, zones)

    assert result.durations == [0, 0, 0, 0, 0]
    assert result.total_seconds == 0


def test_out_of_range_epoch_times_fall_back_to_average(model, zones, activity_factory):
    track = json.dumps([{"time": 1e20, "hr": 150}, {"time": 1e20 + 1000, "hr": 150}])
    activity = activity_factory("2024-03-02T09:00:00", duration=600, avg_heart_rate=150, gps_data=track)

    result = model.calculate_zone_durations(activity, zones)

    assert result.source == "average"
    assert sum(result.durations) == pytest.approx(600)


def test_epoch_millis_sample_times(model, zones, activity_factory):
    start = 1709370000000
    track = json.dumps([{"time": start + 10000 * i, "hr": 140} for i in range(4)])
    activity = activity_factory("2024-03-02T09:00:00", duration=30, gps_data=track)

    result = model.calculate_zone_durations(activity, zones)

    assert result.durations == pytest.approx([0, 30, 0, 0, 0])


def test_zero_time_points_are_ignored(model, zones, activity_factory):
    track = json.dumps([
        {"time": 0, "hr": 125},
        {"time": "2024-03-02T09:00:10", "hr": 140},
        {"time": "2024-03-02T09:00:20", "hr": 140},
    ])
    activity = activity_factory("2024-03-02T09:00:00", duration=10, gps_data=track)

    result = model.calculate_zone_durations(activity, zones)

    assert result.source == "samples"
    assert result.durations == pytest.approx([0, 10, 0, 0, 0])


def test_gaps_touching_unparseable_times_are_skipped(model, zones, activity_factory):
    track = json.dumps([
        {"time": "2024-03-02T09:00:00", "hr": 125},
        {"time": "not a time", "hr": 190},
        {"time": "2024-03-02T09:00:10", "hr": 140},
        {"time": "2024-03-02T09:00:20", "hr": 140},
    ])
    activity = activity_factory("2024-03-02T09:00:00", duration=20, gps_data=track)

    result = model.calculate_zone_durations(activity, zones)

    assert result.durations == pytest.approx([10, 10, 0, 0, 0])


def test_non_finite_heart_rate_samples_are_ignored(model, zones, activity_factory):
    track = json.dumps([
        {"time": "2024-03-02T09:00:00", "hr": float("nan")},
        {"time": "2024-03-02T09:00:10", "hr": 140},
        {"time": "2024-03-02T09:00:20", "hr": 140},
    ])
    activity = activity_factory("2024-03-02T09:00:00", duration=10, gps_data=track)

    result = model.calculate_zone_durations(activity, zones)

    assert result.durations == pytest.approx([0, 10, 0, 0, 0])
