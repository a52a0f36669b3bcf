"""Per-type and per-month breakdowns of a period."""

import logging
from collections.abc import Sequence

import polars as pl

from training_reports.analytics.frame import activities_to_frame, sampled
from training_reports.analytics.period import MONTH_NAMES
from training_reports.analytics.rounding import average, round_int
from training_reports.models.activity import Activity
from training_reports.models.report import MonthlyBreakdown, TypeSummary

logger = logging.getLogger(__name__)


def calculate_by_type(activities: Sequence[Activity]) -> list[TypeSummary]:
    """Group activities by their exact ``type``.

    Groups are sorted by activity count, most frequent first; ties keep the
    order in which the types first appear.
    """
    df = activities_to_frame(activities)
    if df.is_empty():
        return []

    by_type = (
        df
        .group_by("type", maintain_order=True)
        .agg(
            pl.len().alias("count"),
            pl.col("distance").fill_null(0).sum().alias("distance"),
            pl.col("duration").fill_null(0).sum().alias("duration"),
            pl.col("trimp").fill_null(0).sum().alias("trimp"),
            pl.col("indoor").sum().alias("indoor"),
            (~pl.col("indoor")).sum().alias("outdoor"),
        )
        .sort("count", descending=True, maintain_order=True)
    )

    return [TypeSummary(**row) for row in by_type.iter_rows(named=True)]


def calculate_monthly_breakdown(activities: Sequence[Activity]) -> list[MonthlyBreakdown]:
    """Twelve monthly buckets, January to December.

    Activities are assigned by calendar month only, so the input must already
    be restricted to a single year. Months without activities are kept with
    zero totals and ``None`` averages.
    """
    df = activities_to_frame(activities)

    per_month = df.group_by("month").agg(
        pl.len().alias("activities"),
        pl.col("distance").fill_null(0).sum().alias("distance"),
        pl.col("duration").fill_null(0).sum().alias("duration"),
        pl.col("elevation_gain").fill_null(0).sum().alias("elevation"),
        pl.col("trimp").fill_null(0).sum().alias("trimp"),
        pl.col("avg_speed").filter(sampled("avg_speed")).sum().alias("speed_sum"),
        sampled("avg_speed").sum().alias("speed_count"),
        pl.col("avg_heart_rate").filter(sampled("avg_heart_rate")).sum().alias("hr_sum"),
        sampled("avg_heart_rate").sum().alias("hr_count"),
    )

    months = pl.DataFrame({"month": list(range(1, 13))}, schema={"month": pl.Int32})
    monthly = months.join(per_month, on="month", how="left").sort("month")

    breakdown = []
    for row in monthly.iter_rows(named=True):
        month = row["month"]
        breakdown.append(MonthlyBreakdown(
            month=month,
            month_name=MONTH_NAMES[month - 1],
            activities=row["activities"] or 0,
            distance=round_int(row["distance"] or 0),
            duration=round_int(row["duration"] or 0),
            elevation=round_int(row["elevation"] or 0),
            trimp=round_int(row["trimp"] or 0),
            avg_speed=average(row["speed_sum"] or 0, row["speed_count"] or 0, digits=1),
            avg_heart_rate=average(row["hr_sum"] or 0, row["hr_count"] or 0),
        ))

    logger.debug(f"Monthly breakdown built from {len(df)} activities")
    return breakdown
