"""Training load (CTL/ATL) evolution over a report period."""

import logging
from datetime import date

from training_reports.analytics.period import days_between, end_of_day, shift_days, start_of_day
from training_reports.analytics.rounding import round_half_up
from training_reports.config import TRAINING_LOAD_LOOKBACK_DAYS
from training_reports.models.report import ReportTrainingLoad
from training_reports.services.training_load_model import TrainingLoadModel
from training_reports.storage.repositories import ActivityStore

logger = logging.getLogger(__name__)


def calculate_period_training_load(
    user_id: int,
    start_date: date,
    end_date: date,
    activity_store: ActivityStore,
    load_model: TrainingLoadModel,
    lookback_days: int = TRAINING_LOAD_LOOKBACK_DAYS,
) -> ReportTrainingLoad:
    """CTL/ATL at the start and end of the period, with the daily history.

    The series is computed from ``lookback_days`` before the period start so
    the moving averages are warmed up, then the period itself is sliced out.
    ``lookback_days`` must match the CTL window of ``load_model``.

    Args:
        user_id: Owner of the activities
        start_date: First day of the period
        end_date: Last day of the period
        activity_store: Source of the extended activity window
        load_model: CTL/ATL time-series model
        lookback_days: Warm-up days fetched before the period

    Returns:
        ReportTrainingLoad for the period
    """
    extended_start = shift_days(start_date, -lookback_days)
    activities = activity_store.query_by_user_and_date_range(
        user_id, start_of_day(extended_start), end_of_day(end_date)
    )

    total_days = days_between(extended_start, end_date) + 1
    days_in_period = days_between(start_date, end_date) + 1
    logger.debug(
        f"Training load window {extended_start} -> {end_date}: "
        f"{len(activities)} activities over {total_days} days"
    )

    result = load_model.calculate_training_load(activities, total_days, end_date=end_date)
    history = result.history[lookback_days:lookback_days + days_in_period]

    first_ctl, first_atl = (history[0].ctl, history[0].atl) if history else (0, 0)
    last_ctl, last_atl = (history[-1].ctl, history[-1].atl) if history else (0, 0)

    return ReportTrainingLoad(
        start_ctl=first_ctl,
        end_ctl=last_ctl,
        ctl_change=round_half_up(last_ctl - first_ctl, 1),
        start_atl=first_atl,
        end_atl=last_atl,
        atl_change=round_half_up(last_atl - first_atl, 1),
        history=history,
    )
