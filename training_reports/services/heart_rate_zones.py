"""Heart rate zones (Karvonen method), per-activity zone times and polarization."""

import json
import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Optional

from training_reports.analytics.rounding import round_half_up, round_int
from training_reports.models.activity import Activity
from training_reports.models.training import (
    HeartRateZoneDefinition,
    IntensityBands,
    PolarizationSummary,
    ZoneDurationResult,
)

logger = logging.getLogger(__name__)

ZONE_PALETTE = ["#0EA5E9", "#22C55E", "#FACC15", "#F97316", "#EF4444"]

# (name, description, lower bound as a fraction of heart rate reserve)
ZONE_LAYOUT = [
    ("Z1 - Recovery", "Warm-up and very easy endurance", 0.5),
    ("Z2 - Endurance", "Aerobic base, long sessions", 0.6),
    ("Z3 - Tempo", "Tempo, moderate intensity", 0.7),
    ("Z4 - Threshold", "Lactate threshold work", 0.8),
    ("Z5 - VO2 max", "Very hard efforts", 0.9),
]

# Bounds on the gap between two heart rate samples, in seconds
MIN_SAMPLE_GAP = 1
MAX_SAMPLE_GAP = 30

# Accepted ratio between activity duration and sampled time
MIN_SAMPLE_SCALE = 0.3
MAX_SAMPLE_SCALE = 3

POLARIZATION_TARGET = IntensityBands(low=80, moderate=10, high=10)

POLARIZATION_MESSAGES = {
    "balanced": "Distribution close to 80/10/10, keep it up.",
    "insufficient base": "Add Z1/Z2 volume to build your aerobic base.",
    "missing high intensity": "Add Z4/Z5 blocks to stimulate your VO2 max.",
    "too much intensity": "Watch your fatigue: high intensity is taking a large share.",
}


class HeartRateZoneModel:
    """Build heart rate zones and split activities across them."""

    def build_zones(self, fc_max: int, fc_rest: int) -> list[HeartRateZoneDefinition]:
        """Build five zones from maximum and resting heart rate.

        Args:
            fc_max: Maximum heart rate
            fc_rest: Resting heart rate

        Returns:
            Zone definitions ordered from easiest to hardest
        """
        reserve = fc_max - fc_rest
        zones = []
        for index, (name, description, lower) in enumerate(ZONE_LAYOUT):
            if index + 1 < len(ZONE_LAYOUT):
                upper = round_int(fc_rest + ZONE_LAYOUT[index + 1][2] * reserve)
            else:
                upper = fc_max
            zones.append(HeartRateZoneDefinition(
                zone=index + 1,
                name=name,
                description=description,
                min=round_int(fc_rest + lower * reserve),
                max=upper,
                color=ZONE_PALETTE[index],
            ))
        return zones

    @staticmethod
    def resolve_zone_index(value: float, zones: Sequence[HeartRateZoneDefinition]) -> int:
        """Index of the zone containing ``value``, clamped to the first/last zone."""
        if not zones:
            return 0

        for index, zone in enumerate(zones):
            if zone.min <= value <= zone.max:
                return index

        return 0 if value < zones[0].min else len(zones) - 1

    def calculate_zone_durations(
        self,
        activity: Activity,
        zones: Sequence[HeartRateZoneDefinition],
    ) -> ZoneDurationResult:
        """Seconds spent in each zone during one activity.

        Heart rate samples from the GPS track are used when available and
        consistent with the activity duration; otherwise the average heart rate
        is spread around its zone (60% in it, 20% below, 15% above, 5% across
        the rest).
        """
        durations = [0.0] * len(zones)
        total_seconds = 0.0
        source = "none"
        activity_duration = activity.duration or 0

        samples = self._heart_rate_samples(activity)
        if len(samples) > 1:
            source = "samples"
            for (current_time, hr), (next_time, _) in zip(samples, samples[1:]):
                if current_time is None or next_time is None:
                    continue
                delta = (next_time - current_time).total_seconds()
                if delta <= 0:
                    continue
                delta = min(max(delta, MIN_SAMPLE_GAP), MAX_SAMPLE_GAP)
                durations[self.resolve_zone_index(hr, zones)] += delta
                total_seconds += delta

        if source == "samples" and total_seconds > 0 and activity_duration > 0:
            scale = activity_duration / total_seconds
            if MIN_SAMPLE_SCALE < scale < MAX_SAMPLE_SCALE:
                durations = [seconds * scale for seconds in durations]
                total_seconds = activity_duration
            else:
                source = "none"
                total_seconds = 0.0
                durations = [0.0] * len(zones)

        if (source != "samples" or total_seconds == 0) and activity.avg_heart_rate and zones:
            source = "average"
            durations = self._spread_average(activity.avg_heart_rate, activity_duration, zones)
            total_seconds = activity_duration

        return ZoneDurationResult(durations=durations, total_seconds=total_seconds, source=source)

    def build_polarization_summary(self, zone_buckets: Sequence[dict]) -> PolarizationSummary:
        """Compare low (Z1-Z2), moderate (Z3) and high (Z4-Z5) time with 80/10/10.

        Args:
            zone_buckets: Items with ``zone`` and ``seconds`` keys

        Returns:
            PolarizationSummary with totals, percentages, score and advice
        """
        totals = IntensityBands(
            low=sum(b["seconds"] for b in zone_buckets if b["zone"] in (1, 2)),
            moderate=sum(b["seconds"] for b in zone_buckets if b["zone"] == 3),
            high=sum(b["seconds"] for b in zone_buckets if b["zone"] in (4, 5)),
        )
        total_seconds = totals.low + totals.moderate + totals.high

        def to_percent(value: float) -> float:
            return value / total_seconds * 100 if total_seconds > 0 else 0

        percentages = IntensityBands(
            low=to_percent(totals.low),
            moderate=to_percent(totals.moderate),
            high=to_percent(totals.high),
        )

        deviation = (
            abs(percentages.low - POLARIZATION_TARGET.low)
            + abs(percentages.moderate - POLARIZATION_TARGET.moderate)
            + abs(percentages.high - POLARIZATION_TARGET.high)
        )
        score = max(0, 100 - deviation * 0.8)

        focus = "balanced"
        if percentages.low < 70:
            focus = "insufficient base"
        elif percentages.high < 8:
            focus = "missing high intensity"
        elif percentages.high > 20:
            focus = "too much intensity"

        return PolarizationSummary(
            totals=totals,
            percentages=percentages,
            target=POLARIZATION_TARGET.model_copy(),
            score=round_half_up(score, 1),
            focus=focus,
            message=POLARIZATION_MESSAGES[focus],
        )

    @staticmethod
    def _spread_average(
        avg_heart_rate: float,
        duration: float,
        zones: Sequence[HeartRateZoneDefinition],
    ) -> list[float]:
        index = HeartRateZoneModel.resolve_zone_index(avg_heart_rate, zones)
        durations = [0.0] * len(zones)
        durations[index] = duration * 0.6
        if index > 0:
            durations[index - 1] = duration * 0.2
        if index < len(zones) - 1:
            durations[index + 1] = duration * 0.15

        remaining = duration * 0.05
        for i in range(len(zones)):
            if abs(i - index) > 1:
                durations[i] = remaining / max(1, len(zones) - 3)
        return durations

    def _heart_rate_samples(self, activity: Activity) -> list[tuple[Optional[datetime], float]]:
        """Time-ordered (timestamp, hr) pairs parsed from the GPS track.

        Points with a positive heart rate and a non-empty time are kept even
        when the time cannot be parsed; their timestamp is ``None``, they sort
        first and every gap touching them is skipped.
        """
        if not activity.gps_data:
            return []

        try:
            points = json.loads(activity.gps_data)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Could not parse GPS data for activity {activity.id}: {e}")
            return []

        if not isinstance(points, list):
            return []

        samples = []
        for point in points:
            if not isinstance(point, dict):
                continue
            hr = point.get("hr")
            if not isinstance(hr, (int, float)) or isinstance(hr, bool) or not hr > 0:
                continue
            if not point.get("time"):
                continue
            samples.append((self._parse_point_time(point["time"]), hr))

        samples.sort(key=lambda sample: sample[0].timestamp() if sample[0] else 0)
        return samples

    @staticmethod
    def _parse_point_time(value) -> Optional[datetime]:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            try:
                return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                return None
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
