"""Tests for indoor/outdoor classification."""

import json

import pytest

from training_reports.analytics.classification import is_indoor_activity


@pytest.mark.parametrize("sub_sport", ["Home Trainer", "Virtual", "Treadmill", "Indoor Rowing", "Pool"])
def test_indoor_sub_sports(activity_factory, sub_sport):
    activity = activity_factory("2024-01-01T10:00:00", type="Ride", sub_sport=sub_sport)
    assert is_indoor_activity(activity)


@pytest.mark.parametrize("activity_type", ["Rowing", "Strength", "Yoga"])
def test_indoor_types(activity_factory, activity_type):
    assert is_indoor_activity(activity_factory("2024-01-01T10:00:00", type=activity_type))


def test_walk_without_gps_is_indoor(activity_factory):
    assert is_indoor_activity(activity_factory("2024-01-01T10:00:00", type="Walk"))


def test_walk_with_gps_is_outdoor(activity_factory):
    gps = json.dumps([{"lat": 45.0, "lon": 5.0, "time": "2024-01-01T10:00:00"}])
    assert not is_indoor_activity(activity_factory("2024-01-01T10:00:00", type="Walk", gps_data=gps))


def test_outdoor_by_default(activity_factory):
    assert not is_indoor_activity(activity_factory("2024-01-01T10:00:00", type="Ride", sub_sport="Road"))
    assert not is_indoor_activity(activity_factory("2024-01-01T10:00:00", type="Run"))


def test_type_match_is_case_sensitive(activity_factory):
    assert not is_indoor_activity(activity_factory("2024-01-01T10:00:00", type="yoga"))
