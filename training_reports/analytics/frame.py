"""Polars view of activity collections."""

from collections.abc import Sequence

import polars as pl

from training_reports.analytics.classification import is_indoor_activity
from training_reports.models.activity import Activity

ACTIVITY_SCHEMA = {
    "id": pl.Int64,
    "date": pl.Datetime,
    "month": pl.Int32,
    "type": pl.Utf8,
    "sub_sport": pl.Utf8,
    "distance": pl.Float64,
    "duration": pl.Float64,
    "elevation_gain": pl.Float64,
    "trimp": pl.Float64,
    "calories": pl.Float64,
    "avg_heart_rate": pl.Float64,
    "avg_speed": pl.Float64,
    "indoor": pl.Boolean,
}


def activities_to_frame(activities: Sequence[Activity]) -> pl.DataFrame:
    """One row per activity, in input order, with its indoor flag."""
    rows = [
        {
            "id": activity.id,
            "date": activity.date.replace(tzinfo=None),
            "month": activity.date.month,
            "type": activity.type,
            "sub_sport": activity.sub_sport,
            "distance": activity.distance,
            "duration": activity.duration,
            "elevation_gain": activity.elevation_gain,
            "trimp": activity.trimp,
            "calories": activity.calories,
            "avg_heart_rate": activity.avg_heart_rate,
            "avg_speed": activity.avg_speed,
            "indoor": is_indoor_activity(activity),
        }
        for activity in activities
    ]
    return pl.DataFrame(rows, schema=ACTIVITY_SCHEMA)


def sampled(column: str) -> pl.Expr:
    """True where ``column`` holds a usable (non-null, non-zero) value."""
    return pl.col(column).is_not_null() & (pl.col(column) != 0)
