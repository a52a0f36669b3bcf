"""Tests for the period summary."""

from training_reports.analytics.summary import calculate_summary, count_activities


def test_summary_totals(sample_activities):
    summary = calculate_summary(sample_activities)

    assert summary.total_activities == 6
    assert summary.total_distance == 102100
    assert summary.total_duration == 25200
    assert summary.total_elevation == 660
    assert summary.total_calories == 4050
    assert summary.total_trimp == 425


def test_averages_skip_missing_samples(sample_activities):
    summary = calculate_summary(sample_activities)

    # (138 + 152 + 145 + 158) / 4 = 148.25
    assert summary.average_heart_rate == 148
    # (28 + 12 + 25 + 11) / 4
    assert summary.average_speed == 19.0


def test_indoor_outdoor_partition(sample_activities):
    summary = calculate_summary(sample_activities)

    assert summary.indoor.activities == 3
    assert summary.indoor.distance == 29000
    assert summary.indoor.duration == 9900
    assert summary.indoor.trimp == 100
    assert summary.outdoor.activities == 3
    assert summary.outdoor.elevation == 660
    assert summary.indoor.activities + summary.outdoor.activities == summary.total_activities
    assert summary.indoor.distance + summary.outdoor.distance == summary.total_distance


def test_empty_period():
    summary = calculate_summary([])

    assert summary.total_activities == 0
    assert summary.total_distance == 0
    assert summary.average_heart_rate is None
    assert summary.average_speed is None
    assert summary.indoor.activities == 0
    assert summary.outdoor.activities == 0


def test_average_speed_rounds_half_up(activity_factory):
    activities = [
        activity_factory("2024-01-01T10:00:00", avg_speed=12.2, avg_heart_rate=140),
        activity_factory("2024-01-02T10:00:00", avg_speed=12.3, avg_heart_rate=141),
    ]

    summary = calculate_summary(activities)

    assert summary.average_speed == 12.3
    assert summary.average_heart_rate == 141


def test_count_activities(sample_activities):
    counts = count_activities(sample_activities)

    assert counts.indoor == 3
    assert counts.outdoor == 3
    assert counts.total == 6
