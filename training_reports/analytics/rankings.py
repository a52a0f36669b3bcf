"""Top activities of a period."""

from collections.abc import Sequence

from training_reports.config import TOP_ACTIVITIES_LIMIT
from training_reports.models.activity import Activity
from training_reports.models.report import ReportActivity, TopActivities

RANKED_FIELDS = {
    "by_distance": "distance",
    "by_duration": "duration",
    "by_trimp": "trimp",
    "by_elevation": "elevation_gain",
}


def to_report_activity(activity: Activity) -> ReportActivity:
    return ReportActivity(
        id=activity.id,
        date=activity.date.date(),
        type=activity.type,
        sub_sport=activity.sub_sport,
        distance=activity.distance or 0,
        duration=activity.duration or 0,
        trimp=activity.trimp,
        elevation_gain=activity.elevation_gain,
        avg_heart_rate=activity.avg_heart_rate,
        avg_speed=activity.avg_speed,
    )


def rank_activities(
    activities: Sequence[Activity], field: str, limit: int = TOP_ACTIVITIES_LIMIT
) -> list[ReportActivity]:
    """Activities with a positive ``field``, highest first.

    Ties keep the input (chronological) order since ``sorted`` is stable.
    """
    candidates = [a for a in activities if (getattr(a, field) or 0) > 0]
    ranked = sorted(candidates, key=lambda a: getattr(a, field), reverse=True)
    return [to_report_activity(a) for a in ranked[:limit]]


def get_top_activities(activities: Sequence[Activity], limit: int = TOP_ACTIVITIES_LIMIT) -> TopActivities:
    """Top activities by distance, duration, TRIMP and elevation gain."""
    return TopActivities(**{
        name: rank_activities(activities, field, limit)
        for name, field in RANKED_FIELDS.items()
    })
