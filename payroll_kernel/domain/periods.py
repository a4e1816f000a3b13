"""
Month periods -- the calendar-month unit every report is computed over.

Responsibility:
    Parse and validate ``YYYY-MM`` month selectors, expose the month's
    first/last day as ISO ``YYYY-MM-DD`` strings, and step backwards and
    forwards month by month for the trend report window.

Architecture position:
    Kernel > Domain -- pure value object, zero I/O.

Invariants enforced:
    - Month boundaries are exposed as ISO strings.  Boundary checks in the
      engines compare ISO strings lexicographically; they never parse a
      date and compare in a local time zone.
    - ``MonthPeriod`` is immutable and hashable; ordering is chronological.

Failure modes:
    - InvalidMonthFormatError from ``MonthPeriod.parse`` when the selector
      does not match ``YYYY-MM`` or names month 00 / 13+.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date

from payroll_kernel.exceptions import InvalidMonthFormatError

MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}$")

_MONTH_ABBR = (
    "", "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True, order=True)
class MonthPeriod:
    """A single calendar month."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise InvalidMonthFormatError(f"{self.year:04d}-{self.month:02d}")

    @classmethod
    def parse(cls, value: object) -> MonthPeriod:
        """Parse a ``YYYY-MM`` selector.

        Raises:
            InvalidMonthFormatError: if ``value`` is not a ``YYYY-MM`` string
                naming a real month.
        """
        if not isinstance(value, str) or not MONTH_PATTERN.match(value):
            raise InvalidMonthFormatError(value)
        year, month = (int(part) for part in value.split("-"))
        if not 1 <= month <= 12:
            raise InvalidMonthFormatError(value)
        return cls(year, month)

    @classmethod
    def containing(cls, day: date) -> MonthPeriod:
        """The month that contains ``day``."""
        return cls(day.year, day.month)

    @property
    def key(self) -> str:
        """``YYYY-MM`` selector for this month."""
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    @property
    def start_iso(self) -> str:
        """First day as ``YYYY-MM-DD``."""
        return f"{self.key}-01"

    @property
    def end_iso(self) -> str:
        """Last day as ``YYYY-MM-DD``."""
        return f"{self.key}-{self.days_in_month:02d}"

    @property
    def label(self) -> str:
        """Human label, e.g. ``Jan 2025``."""
        return f"{_MONTH_ABBR[self.month]} {self.year}"

    def contains(self, iso_date: str) -> bool:
        """True if the ISO date string falls inside this month."""
        return self.start_iso <= iso_date <= self.end_iso

    def shift(self, months: int) -> MonthPeriod:
        """Return the month ``months`` steps away (negative = earlier)."""
        index = self.year * 12 + (self.month - 1) + months
        return MonthPeriod(index // 12, index % 12 + 1)

    def previous(self) -> MonthPeriod:
        return self.shift(-1)

    def __str__(self) -> str:
        return self.key


def month_window(end: MonthPeriod, months: int) -> list[MonthPeriod]:
    """The ``months`` consecutive months ending at ``end``, oldest first."""
    return [end.shift(-offset) for offset in range(months - 1, -1, -1)]


def day_of_month(iso_date: str) -> int:
    """Day-of-month number of an ISO ``YYYY-MM-DD`` string."""
    return int(iso_date[8:10])
