"""Tests for report period resolution."""

from datetime import date

import pytest

from training_reports.analytics.period import (
    days_between,
    end_of_day,
    end_of_month,
    normalize_month,
    resolve_period,
)


def test_monthly_period_bounds():
    period = resolve_period("monthly", 2024, 2)

    assert period.type == "monthly"
    assert period.start_date == date(2024, 2, 1)
    assert period.end_date == date(2024, 2, 29)  # leap year
    assert period.label == "February 2024"


def test_annual_period_bounds():
    period = resolve_period("annual", 2023)

    assert period.start_date == date(2023, 1, 1)
    assert period.end_date == date(2023, 12, 31)
    assert period.label == "Year 2023"


def test_month_overflow_rolls_into_adjacent_year():
    assert normalize_month(13, 2024) == (1, 2025)
    assert normalize_month(0, 2024) == (12, 2023)

    period = resolve_period("monthly", 2024, 13)
    assert period.start_date == date(2025, 1, 1)
    assert period.end_date == date(2025, 1, 31)
    assert period.label == "January 2025"


def test_monthly_period_requires_month():
    with pytest.raises(TypeError):
        resolve_period("monthly", 2024)


def test_calendar_helpers():
    assert end_of_month(4, 2024) == date(2024, 4, 30)
    assert days_between(date(2024, 1, 1), date(2024, 1, 31)) == 30
    assert end_of_day(date(2024, 1, 31)).hour == 23


def test_period_serializes_with_camel_case_keys():
    dumped = resolve_period("monthly", 2024, 3).model_dump(mode="json", by_alias=True)

    assert dumped == {
        "type": "monthly",
        "startDate": "2024-03-01",
        "endDate": "2024-03-31",
        "label": "March 2024",
    }
