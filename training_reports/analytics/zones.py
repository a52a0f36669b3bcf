"""Heart rate zone distribution over a period."""

import logging
from collections.abc import Sequence

from training_reports.analytics.rounding import percentage, round_half_up, round_int
from training_reports.models.activity import Activity
from training_reports.models.report import ZoneBucket
from training_reports.models.training import HeartRateZoneDefinition, PolarizationSummary
from training_reports.services.heart_rate_zones import HeartRateZoneModel

logger = logging.getLogger(__name__)


def sum_zone_durations(
    activities: Sequence[Activity],
    zones: Sequence[HeartRateZoneDefinition],
    zone_model: HeartRateZoneModel,
) -> list[float]:
    """Sum per-activity zone durations element-wise.

    A duration array shorter than the zone list contributes zero to the
    missing zones; extra entries are ignored.
    """
    totals = [0.0] * len(zones)
    for activity in activities:
        durations = zone_model.calculate_zone_durations(activity, zones).durations
        for index, seconds in enumerate(durations[:len(totals)]):
            totals[index] += seconds or 0
    return totals


def calculate_zone_distribution(
    activities: Sequence[Activity],
    zones: Sequence[HeartRateZoneDefinition],
    zone_model: HeartRateZoneModel,
) -> tuple[list[ZoneBucket], PolarizationSummary]:
    """Time, hours and share spent in each zone, plus the polarization summary.

    Args:
        activities: Activities of the period
        zones: Ordered zone definitions
        zone_model: Splits one activity into per-zone seconds and summarizes
            polarization

    Returns:
        Tuple of (zone buckets, polarization summary)
    """
    totals = sum_zone_durations(activities, zones, zone_model)
    total_seconds = sum(totals)

    buckets = [
        ZoneBucket(
            zone=zone.zone,
            name=zone.name,
            description=zone.description,
            min=zone.min,
            max=zone.max,
            color=zone.color,
            seconds=round_int(seconds),
            hours=round_half_up(seconds / 3600, 2),
            percentage=percentage(seconds, total_seconds),
        )
        for zone, seconds in zip(zones, totals)
    ]
    logger.debug(f"Zone distribution over {len(activities)} activities: {total_seconds:.0f}s total")

    polarization = zone_model.build_polarization_summary(
        [{"zone": bucket.zone, "seconds": bucket.seconds} for bucket in buckets]
    )
    return buckets, polarization
