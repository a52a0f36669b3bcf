"""Pytest configuration and fixtures."""

import itertools
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from training_reports.errors import UserNotFoundError
from training_reports.models.activity import Activity, PersonalRecord, UserProfile
from training_reports.storage.database.manager import DatabaseManager


class InMemoryStore:
    """User, activity and record store backed by plain lists."""

    def __init__(self, users=None, activities=None, records=None):
        self.users = {user.id: user for user in users or []}
        self.activities = list(activities or [])
        self.records = list(records or [])
        self.activity_queries = []
        self.record_queries = []

    def find_user(self, user_id):
        if user_id not in self.users:
            raise UserNotFoundError(user_id)
        return self.users[user_id]

    def query_by_user_and_date_range(self, user_id, start, end):
        self.activity_queries.append((user_id, start, end))
        matches = [
            a for a in self.activities
            if a.user_id == user_id and start <= a.date <= end
        ]
        return sorted(matches, key=lambda a: a.date)

    def query_by_user_and_date_range_and_types(self, user_id, start, end, record_types):
        self.record_queries.append((user_id, start, end, list(record_types)))
        matches = [
            r for r in self.records
            if r.user_id == user_id and start <= r.achieved_at <= end and r.record_type in record_types
        ]
        return sorted(matches, key=lambda r: r.achieved_at, reverse=True)


_ids = itertools.count(1)


def make_activity(date, **fields):
    """Build an activity for user 1; ``date`` may be a datetime or ISO string."""
    if isinstance(date, str):
        date = datetime.fromisoformat(date)
    fields.setdefault("id", next(_ids))
    fields.setdefault("user_id", 1)
    fields.setdefault("type", "Ride")
    return Activity(date=date, **fields)


def make_record(achieved_at, value, previous_value=None, **fields):
    if isinstance(achieved_at, str):
        achieved_at = datetime.fromisoformat(achieved_at)
    fields.setdefault("id", next(_ids))
    fields.setdefault("user_id", 1)
    fields.setdefault("record_type", "max_distance")
    fields.setdefault("activity_type", "Ride")
    fields.setdefault("unit", "km")
    return PersonalRecord(achieved_at=achieved_at, value=value, previous_value=previous_value, **fields)


@pytest.fixture
def activity_factory():
    return make_activity


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def user():
    return UserProfile(id=1, fc_max=185, fc_rest=55)


@pytest.fixture
def store(user):
    return InMemoryStore(users=[user])


@pytest.fixture
def sample_activities():
    """A varied month of training in March 2024."""
    return [
        make_activity("2024-03-02T09:00:00", type="Ride", distance=42000, duration=5400,
                      elevation_gain=450, trimp=95, calories=1100, avg_heart_rate=138, avg_speed=28.0),
        make_activity("2024-03-04T18:30:00", type="Run", distance=10000, duration=3000,
                      elevation_gain=60, trimp=70, calories=650, avg_heart_rate=152, avg_speed=12.0),
        make_activity("2024-03-06T07:00:00", type="Ride", sub_sport="Home Trainer", distance=25000,
                      duration=3600, trimp=80, calories=700, avg_heart_rate=145, avg_speed=25.0),
        make_activity("2024-03-09T10:00:00", type="Walk", distance=4000, duration=2700,
                      calories=200),
        make_activity("2024-03-12T12:00:00", type="Yoga", duration=3600, trimp=20),
        make_activity("2024-03-20T08:00:00", type="Run", distance=21100, duration=6900,
                      elevation_gain=150, trimp=160, calories=1400, avg_heart_rate=158, avg_speed=11.0),
    ]


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory(prefix="training_reports_test_") as temp_dir:
        db = DatabaseManager(db_path=str(Path(temp_dir) / "reports.db"))
        yield db
        db.engine.dispose()
