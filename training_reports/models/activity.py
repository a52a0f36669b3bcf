"""Input data models: activities, personal records and user profiles."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Activity(BaseModel):
    """Model for one completed training session."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True, allow_inf_nan=False)

    # Core identifiers
    id: int
    user_id: Optional[int] = None
    date: datetime
    type: str
    sub_sport: Optional[str] = None

    # Volume
    distance: Optional[float] = None  # meters
    duration: Optional[float] = None  # seconds
    elevation_gain: Optional[float] = None

    # Load and energy
    trimp: Optional[float] = None
    calories: Optional[float] = None

    # Averages
    avg_heart_rate: Optional[float] = None
    avg_speed: Optional[float] = None

    # Raw GPS track (JSON list of samples)
    gps_data: Optional[str] = None

    @property
    def has_gps(self) -> bool:
        return bool(self.gps_data)


class PersonalRecord(BaseModel):
    """Best-ever value for a record type within an activity type.

    ``previous_value`` is ``None`` for the first record of its type.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: int
    user_id: Optional[int] = None
    activity_id: Optional[int] = None
    record_type: str
    activity_type: str
    value: float
    unit: str
    achieved_at: datetime
    previous_value: Optional[float] = None

    @property
    def is_first(self) -> bool:
        return self.previous_value is None


class UserProfile(BaseModel):
    """Heart rate settings of a user."""

    id: int
    fc_max: Optional[int] = None
    fc_rest: Optional[int] = None
