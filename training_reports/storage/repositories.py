"""Data access contracts used by the report generator."""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from training_reports.models.activity import Activity, PersonalRecord, UserProfile


class UserProfileStore(Protocol):
    def find_user(self, user_id: int) -> UserProfile:
        """Return the user's profile or raise UserNotFoundError."""
        ...


class ActivityStore(Protocol):
    def query_by_user_and_date_range(
        self, user_id: int, start: datetime, end: datetime
    ) -> list[Activity]:
        """Activities with ``start <= date <= end``, ascending by date."""
        ...


class PersonalRecordStore(Protocol):
    def query_by_user_and_date_range_and_types(
        self, user_id: int, start: datetime, end: datetime, record_types: Sequence[str]
    ) -> list[PersonalRecord]:
        """Records achieved in ``[start, end]`` of the given types, newest first."""
        ...
