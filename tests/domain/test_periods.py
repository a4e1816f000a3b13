"""Tests for MonthPeriod parsing, boundaries and stepping."""

from datetime import date

import pytest

from payroll_kernel.domain.periods import MonthPeriod, day_of_month, month_window
from payroll_kernel.exceptions import InvalidMonthFormatError


class TestParse:
    def test_valid(self):
        assert MonthPeriod.parse("2025-03") == MonthPeriod(2025, 3)

    @pytest.mark.parametrize("value", [
        None, "", "2025-3", "2025/03", "03-2025", "2025-13", "2025-00", "2025-03-01", 202503,
    ])
    def test_invalid(self, value):
        with pytest.raises(InvalidMonthFormatError) as exc_info:
            MonthPeriod.parse(value)
        assert exc_info.value.value == value
        assert exc_info.value.code == "INVALID_MONTH_FORMAT"

    def test_constructor_rejects_bad_month(self):
        with pytest.raises(InvalidMonthFormatError):
            MonthPeriod(2025, 13)


class TestBoundaries:
    def test_february_leap_year(self):
        period = MonthPeriod(2024, 2)
        assert period.days_in_month == 29
        assert period.end_iso == "2024-02-29"

    def test_start_and_end(self):
        period = MonthPeriod(2025, 4)
        assert period.start_iso == "2025-04-01"
        assert period.end_iso == "2025-04-30"

    def test_contains(self):
        period = MonthPeriod(2025, 4)
        assert period.contains("2025-04-01")
        assert period.contains("2025-04-30")
        assert not period.contains("2025-05-01")
        assert not period.contains("2025-03-31")

    def test_label_and_key(self):
        period = MonthPeriod(2025, 1)
        assert period.label == "Jan 2025"
        assert period.key == "2025-01"
        assert str(period) == "2025-01"

    def test_containing(self):
        assert MonthPeriod.containing(date(2025, 12, 31)) == MonthPeriod(2025, 12)

    def test_day_of_month(self):
        assert day_of_month("2025-04-09") == 9


class TestStepping:
    def test_previous_crosses_year(self):
        assert MonthPeriod(2025, 1).previous() == MonthPeriod(2024, 12)

    def test_shift_forward(self):
        assert MonthPeriod(2024, 11).shift(3) == MonthPeriod(2025, 2)

    def test_window_oldest_first(self):
        window = month_window(MonthPeriod(2025, 3), 3)
        assert [p.key for p in window] == ["2025-01", "2025-02", "2025-03"]

    def test_window_across_year(self):
        window = month_window(MonthPeriod(2025, 1), 2)
        assert [p.key for p in window] == ["2024-12", "2025-01"]

    def test_ordering(self):
        assert MonthPeriod(2024, 12) < MonthPeriod(2025, 1)
