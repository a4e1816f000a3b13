"""
payroll_engines.calendar -- Weekend detection and working-day counting.

Responsibility:
    Decide whether a day is a weekend and count the working days in a
    day range of one month, excluding weekends and a pre-filtered set of
    holiday day numbers.  Builds the month-level statistics every salary
    report carries (holiday count, weekend count, total working days).

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Weekday numbering follows the 0 = Sunday convention
      (``weekday_index``); Saturday (6) and Sunday (0) are weekends.
    - ``count_working_days`` is inclusive and returns 0 for an empty range.
    - Holiday sets hold bare day-of-month numbers already restricted to the
      target month.  ``holiday_days_for_month`` performs that restriction
      by ISO string comparison.
    - working_days == days_in_month - weekend_days - |holidays on weekdays|.

Failure modes:
    - ValueError from ``datetime.date`` if a day outside the month is
      checked by ``is_weekend`` directly.
"""

from __future__ import annotations

import calendar as _calendar
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from payroll_kernel.domain.periods import MonthPeriod, day_of_month
from payroll_kernel.domain.records import Holiday

SUNDAY = 0
SATURDAY = 6
WEEKEND_DAYS = frozenset({SUNDAY, SATURDAY})


def weekday_index(year: int, month: int, day: int) -> int:
    """Day of week with 0 = Sunday ... 6 = Saturday."""
    return date(year, month, day).isoweekday() % 7


def is_weekend(year: int, month: int, day: int) -> bool:
    """True iff the date falls on a Saturday or Sunday."""
    return weekday_index(year, month, day) in WEEKEND_DAYS


def count_working_days(
    year: int,
    month: int,
    start_day: int,
    end_day: int,
    holiday_days: Iterable[int] = frozenset(),
) -> int:
    """
    Count days in ``[start_day, end_day]`` that are neither weekend nor holiday.

    Returns 0 when ``start_day > end_day``.
    """
    if start_day > end_day:
        return 0
    holidays = holiday_days if isinstance(holiday_days, (set, frozenset)) else frozenset(holiday_days)
    return sum(
        1
        for day in range(start_day, end_day + 1)
        if not is_weekend(year, month, day) and day not in holidays
    )


def count_weekend_days(year: int, month: int) -> int:
    """Number of Saturdays and Sundays in the month."""
    days_in_month = _calendar.monthrange(year, month)[1]
    return sum(1 for day in range(1, days_in_month + 1) if is_weekend(year, month, day))


def holiday_days_for_month(
    holidays: Iterable[Holiday],
    period: MonthPeriod,
) -> frozenset[int]:
    """Day-of-month numbers of the holidays that fall inside ``period``."""
    return frozenset(
        day_of_month(h.date) for h in holidays if period.contains(h.date)
    )


@dataclass(frozen=True)
class MonthCalendar:
    """Working-day statistics for one month."""

    period: MonthPeriod
    holiday_days: frozenset[int]
    holidays_count: int
    weekend_days: int
    working_days: int

    @property
    def days_in_month(self) -> int:
        return self.period.days_in_month

    def working_days_between(self, start_day: int, end_day: int) -> int:
        return count_working_days(
            self.period.year, self.period.month, start_day, end_day, self.holiday_days,
        )


def build_month_calendar(
    period: MonthPeriod,
    holidays: Iterable[Holiday] = (),
) -> MonthCalendar:
    """
    Compute the month-level statistics for ``period``.

    ``holidays_count`` counts distinct holiday days in the month, including
    those that fall on a weekend.
    """
    holiday_days = holiday_days_for_month(holidays, period)
    return MonthCalendar(
        period=period,
        holiday_days=holiday_days,
        holidays_count=len(holiday_days),
        weekend_days=count_weekend_days(period.year, period.month),
        working_days=count_working_days(
            period.year, period.month, 1, period.days_in_month, holiday_days,
        ),
    )
