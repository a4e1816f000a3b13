"""
Tests for the working-day calendar engine.

Covers:
- Weekday convention (0 = Sunday)
- Working-day counting with weekends and holidays
- Month-level statistics (holidays, weekends, working days)
"""

import pytest

from payroll_engines.calendar import (
    build_month_calendar,
    count_weekend_days,
    count_working_days,
    holiday_days_for_month,
    is_weekend,
    weekday_index,
)
from payroll_kernel.domain.periods import MonthPeriod
from tests.factories import make_holiday


class TestWeekday:
    def test_sunday_is_zero(self):
        assert weekday_index(2025, 3, 2) == 0

    def test_saturday_is_six(self):
        assert weekday_index(2025, 3, 1) == 6

    def test_midweek(self):
        # 2025-01-01 was a Wednesday.
        assert weekday_index(2025, 1, 1) == 3

    @pytest.mark.parametrize("day, expected", [(1, True), (2, True), (3, False), (7, False)])
    def test_is_weekend(self, day, expected):
        assert is_weekend(2025, 3, day) is expected


class TestCountWorkingDays:
    def test_full_february_2025(self):
        assert count_working_days(2025, 2, 1, 28) == 20

    def test_full_march_2025(self):
        assert count_working_days(2025, 3, 1, 31) == 21

    def test_holiday_on_weekday_excluded(self):
        assert count_working_days(2025, 1, 1, 31, {1}) == 22

    def test_holiday_on_weekend_counted_once(self):
        assert count_working_days(2025, 1, 1, 31, {4}) == 23

    def test_start_after_end_is_zero(self):
        assert count_working_days(2025, 3, 20, 10) == 0

    def test_single_weekend_day(self):
        assert count_working_days(2025, 3, 1, 1) == 0

    def test_accepts_any_iterable_of_days(self):
        assert count_working_days(2025, 1, 1, 3, [1, 2]) == 1


class TestMonthCalendar:
    def test_weekend_days(self):
        assert count_weekend_days(2025, 2) == 8
        assert count_weekend_days(2025, 3) == 10

    def test_holidays_outside_month_ignored(self):
        period = MonthPeriod(2025, 1)
        holidays = [make_holiday("2025-01-01"), make_holiday("2025-02-03")]
        assert holiday_days_for_month(holidays, period) == frozenset({1})

    def test_statistics(self):
        cal = build_month_calendar(
            MonthPeriod(2025, 1),
            [make_holiday("2025-01-01"), make_holiday("2025-01-04"), make_holiday("2025-01-01", "dup")],
        )
        assert cal.holidays_count == 2
        assert cal.weekend_days == 8
        assert cal.working_days == 22
        assert cal.days_in_month == 31

    def test_working_days_between(self):
        cal = build_month_calendar(MonthPeriod(2025, 2))
        assert cal.working_days_between(1, 14) == 10
        assert cal.working_days_between(15, 28) == 10

    def test_working_days_identity(self):
        """working + weekend + weekday holidays == days in month."""
        cal = build_month_calendar(
            MonthPeriod(2025, 1), [make_holiday("2025-01-01"), make_holiday("2025-01-06")],
        )
        assert cal.working_days + cal.weekend_days + 2 == cal.days_in_month
