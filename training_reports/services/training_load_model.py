"""TRIMP and CTL/ATL/TSB training load model."""

import logging
from collections.abc import Sequence
from datetime import date, timedelta
from typing import Optional

import polars as pl

from training_reports.analytics.rounding import round_half_up, round_int
from training_reports.config import ATL_DAYS, CTL_DAYS
from training_reports.models.activity import Activity
from training_reports.models.training import TrainingLoadDay, TrainingLoadResult, TrainingLoadStatus

logger = logging.getLogger(__name__)

# (exclusive lower TSB bound, status, recommendation), checked in order
TSB_STATUSES = [
    (25, "fresh", "You are very fresh: a good moment for a race or a hard session."),
    (5, "rested", "You are well rested, with a good fitness/fatigue balance."),
    (-10, "optimal", "Optimal zone to progress. Keep going!"),
    (-30, "tired", "Fatigue is building up. Plan more recovery."),
]
OVERREACHED = ("overreached", "Overtraining risk! Take some rest.")


class TrainingLoadModel:
    """Exponential moving averages of daily TRIMP.

    CTL (fitness) averages over ``ctl_days``, ATL (fatigue) over ``atl_days``
    and TSB (form) is their difference.
    """

    def __init__(self, ctl_days: int = CTL_DAYS, atl_days: int = ATL_DAYS):
        self.ctl_days = ctl_days
        self.atl_days = atl_days

    @staticmethod
    def calculate_trimp(duration: float, avg_heart_rate: float, fc_max: int, fc_rest: int) -> int:
        """Training impulse: minutes weighted by heart rate reserve zone (1-5)."""
        reserve = fc_max - fc_rest
        if reserve <= 0:
            return 0
        hrr = (avg_heart_rate - fc_rest) / reserve * 100

        if hrr >= 90:
            coefficient = 5
        elif hrr >= 80:
            coefficient = 4
        elif hrr >= 70:
            coefficient = 3
        elif hrr >= 60:
            coefficient = 2
        else:
            coefficient = 1

        return round_int(duration / 60 * coefficient)

    def daily_trimp(self, activities: Sequence[Activity], total_days: int, end_date: date) -> pl.DataFrame:
        """One row per calendar day of the window with the summed TRIMP.

        Activities outside the window are ignored.
        """
        start_date = end_date - timedelta(days=total_days - 1)
        days = pl.DataFrame(
            {"date": pl.date_range(start_date, end_date, "1d", eager=True)}
        )

        loads = pl.DataFrame(
            {
                "date": [activity.date.date() for activity in activities],
                "trimp": [float(activity.trimp or 0) for activity in activities],
            },
            schema={"date": pl.Date, "trimp": pl.Float64},
        )
        per_day = loads.group_by("date").agg(pl.col("trimp").sum())

        return (
            days
            .join(per_day, on="date", how="left")
            .with_columns(pl.col("trimp").fill_null(0.0))
            .sort("date")
        )

    def calculate_training_load(
        self,
        activities: Sequence[Activity],
        total_days: int,
        end_date: Optional[date] = None,
    ) -> TrainingLoadResult:
        """Compute the daily CTL/ATL/TSB series over ``total_days`` days.

        Args:
            activities: Activities inside the window
            total_days: Number of days in the window
            end_date: Last day of the window (default: today)

        Returns:
            TrainingLoadResult with the daily history and the latest status
        """
        if end_date is None:
            end_date = date.today()

        if total_days <= 0:
            return TrainingLoadResult(history=[], current=self._status(None))

        frame = self.daily_trimp(activities, total_days, end_date).with_columns(
            pl.col("trimp").ewm_mean(alpha=2 / (self.ctl_days + 1), adjust=False).alias("ctl"),
            pl.col("trimp").ewm_mean(alpha=2 / (self.atl_days + 1), adjust=False).alias("atl"),
        )

        history = [
            TrainingLoadDay(
                date=row["date"],
                trimp=row["trimp"],
                ctl=round_half_up(row["ctl"], 1),
                atl=round_half_up(row["atl"], 1),
                tsb=round_half_up(row["ctl"] - row["atl"], 1),
            )
            for row in frame.iter_rows(named=True)
        ]
        logger.debug(f"Training load computed over {total_days} days ending {end_date}")

        return TrainingLoadResult(
            history=history,
            current=self._status(history[-1] if history else None),
        )

    @staticmethod
    def _status(day: Optional[TrainingLoadDay]) -> TrainingLoadStatus:
        ctl = day.ctl if day else 0
        atl = day.atl if day else 0
        tsb = day.tsb if day else 0

        status, recommendation = OVERREACHED
        for threshold, name, advice in TSB_STATUSES:
            if tsb > threshold:
                status, recommendation = name, advice
                break

        return TrainingLoadStatus(ctl=ctl, atl=atl, tsb=tsb, status=status, recommendation=recommendation)
