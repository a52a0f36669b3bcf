"""Report period resolution and the calendar helpers it relies on."""

import calendar
import logging
from datetime import date, datetime, time, timedelta

from training_reports.models.report import PeriodType, ReportPeriod

logger = logging.getLogger(__name__)

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def normalize_month(month: int, year: int) -> tuple[int, int]:
    """Fold an out-of-range month into the neighbouring years.

    Month 13 of 2024 is January 2025, month 0 is December of the previous year.
    """
    years, month_index = divmod(month - 1, 12)
    return month_index + 1, year + years


def start_of_month(month: int, year: int) -> date:
    month, year = normalize_month(month, year)
    return date(year, month, 1)


def end_of_month(month: int, year: int) -> date:
    month, year = normalize_month(month, year)
    return date(year, month, calendar.monthrange(year, month)[1])


def start_of_year(year: int) -> date:
    return date(year, 1, 1)


def end_of_year(year: int) -> date:
    return date(year, 12, 31)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max)


def days_between(start: date, end: date) -> int:
    """Whole days from ``start`` to ``end`` (negative if ``end`` is earlier)."""
    return (end - start).days


def shift_days(day: date, days: int) -> date:
    return day + timedelta(days=days)


def month_label(month: int, year: int) -> str:
    month, year = normalize_month(month, year)
    return f"{MONTH_NAMES[month - 1]} {year}"


def year_label(year: int) -> str:
    return f"Year {year}"


def resolve_period(period_type: PeriodType, year: int, month: int = None) -> ReportPeriod:
    """Build the inclusive period covered by a monthly or annual report.

    Args:
        period_type: ``"monthly"`` or ``"annual"``
        year: Calendar year
        month: Month number, required for monthly reports

    Returns:
        ReportPeriod with start/end dates and a display label
    """
    if period_type == "monthly":
        if month is None:
            raise TypeError("Monthly periods need a month")
        start, end = start_of_month(month, year), end_of_month(month, year)
        label = month_label(month, year)
    else:
        start, end = start_of_year(year), end_of_year(year)
        label = year_label(year)

    logger.debug(f"Resolved {period_type} period {start} -> {end} ({label})")
    return ReportPeriod(type=period_type, start_date=start, end_date=end, label=label)
