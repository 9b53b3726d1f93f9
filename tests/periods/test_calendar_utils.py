from __future__ import annotations

from datetime import date

import pytest

from src.hr_payroll.hr_payroll.core.exceptions import ValidationError
from src.hr_payroll.hr_payroll.periods.calendar_utils import (
    current_month_period,
    days_in_period,
    is_holiday,
    is_weekend,
    make_period,
    parse_period_key,
    period_key,
    period_key_from_label,
    previous_month_period,
    working_days,
)
from src.hr_payroll.hr_payroll.periods.model import Holiday


def test_period_key_is_zero_padded_and_sorts_chronologically():
    keys = [period_key(2026, 9), period_key(2026, 0), period_key(2025, 11)]
    assert keys == ["2026-10", "2026-01", "2025-12"]
    assert sorted(keys) == ["2025-12", "2026-01", "2026-10"]


def test_make_period_label_uses_month_name():
    period = make_period(2026, 2)
    assert period.key == "2026-03"
    assert period.label == "March 2026"


@pytest.mark.parametrize("month_index", [-1, 12])
def test_month_index_out_of_range_is_rejected(month_index):
    with pytest.raises(ValidationError):
        period_key(2026, month_index)


def test_days_in_period_handles_leap_years():
    assert len(days_in_period(2024, 1)) == 29
    assert len(days_in_period(2026, 1)) == 28
    assert days_in_period(2026, 2)[0] == date(2026, 3, 1)
    assert days_in_period(2026, 2)[-1] == date(2026, 3, 31)


def test_is_weekend():
    assert is_weekend(date(2026, 3, 7))  # Saturday
    assert is_weekend(date(2026, 3, 8))  # Sunday
    assert not is_weekend(date(2026, 3, 2))


def test_is_holiday_only_considers_the_queried_month():
    holidays = [Holiday(holiday_id="h1", date=date(2026, 3, 10), name="Founders Day")]

    assert is_holiday(date(2026, 3, 10), holidays)
    assert not is_holiday(date(2026, 3, 11), holidays)
    assert not is_holiday(date(2026, 3, 10), holidays, year=2026, month_index=3)


def test_working_days_skip_weekends_and_same_month_holidays():
    assert len(working_days(2026, 2, [])) == 22

    holidays = [
        Holiday(holiday_id="h1", date=date(2026, 3, 10), name="Weekday holiday"),
        Holiday(holiday_id="h2", date=date(2026, 3, 7), name="Saturday holiday"),
        Holiday(holiday_id="h3", date=date(2026, 4, 1), name="Next month"),
    ]
    days = working_days(2026, 2, holidays)
    assert len(days) == 21
    assert date(2026, 3, 10) not in days


def test_current_month_period():
    period = current_month_period(date(2026, 12, 31))
    assert (period.year, period.month_index, period.key) == (2026, 11, "2026-12")


def test_previous_month_period_wraps_year():
    assert previous_month_period(date(2026, 1, 15)).key == "2025-12"
    assert previous_month_period(date(2026, 3, 31)).key == "2026-02"


def test_period_key_from_label():
    assert period_key_from_label("March 2026") == "2026-03"
    assert period_key_from_label("not a month") == ""
    assert period_key_from_label("") == ""


@pytest.mark.parametrize("key", ["2026-13", "abc", "", "2026/03", 202603, None])
def test_parse_period_key_rejects_garbage(key):
    with pytest.raises(ValidationError):
        parse_period_key(key)
