"""Period totals with indoor/outdoor sub-totals."""

from collections.abc import Iterable

from training_reports.analytics.classification import is_indoor_activity
from training_reports.analytics.rounding import average
from training_reports.models.activity import Activity
from training_reports.models.report import ActivitiesCount, ReportSummary


def calculate_summary(activities: Iterable[Activity]) -> ReportSummary:
    """Aggregate totals and averages over the period's activities.

    Missing numeric fields count as zero. Heart rate and speed averages only
    include activities that recorded them and are ``None`` when none did.
    """
    summary = ReportSummary()
    hr_sum = hr_count = 0
    speed_sum = speed_count = 0

    for activity in activities:
        distance = activity.distance or 0
        duration = activity.duration or 0
        elevation = activity.elevation_gain or 0
        trimp = activity.trimp or 0

        summary.total_activities += 1
        summary.total_distance += distance
        summary.total_duration += duration
        summary.total_elevation += elevation
        summary.total_calories += activity.calories or 0
        summary.total_trimp += trimp

        if activity.avg_heart_rate:
            hr_sum += activity.avg_heart_rate
            hr_count += 1
        if activity.avg_speed:
            speed_sum += activity.avg_speed
            speed_count += 1

        bucket = summary.indoor if is_indoor_activity(activity) else summary.outdoor
        bucket.activities += 1
        bucket.distance += distance
        bucket.duration += duration
        bucket.elevation += elevation
        bucket.trimp += trimp

    summary.average_heart_rate = average(hr_sum, hr_count)
    summary.average_speed = average(speed_sum, speed_count, digits=1)
    return summary


def count_activities(activities: Iterable[Activity]) -> ActivitiesCount:
    """Count indoor, outdoor and total activities."""
    counts = ActivitiesCount()
    for activity in activities:
        if is_indoor_activity(activity):
            counts.indoor += 1
        else:
            counts.outdoor += 1
        counts.total += 1
    return counts

