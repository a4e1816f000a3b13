"""
payroll_services.workforce_summary -- Headcount and salary distribution.

Dashboard figures over a user's employee list: headcount, salary statistics,
position breakdown, salary ranges and the next few holidays.  Uses the
employee record's current ``salary`` only; salary history and proration do
not apply here.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from payroll_kernel.domain.records import Employee, Holiday
from payroll_kernel.domain.values import ZERO, round_money
from payroll_kernel.logging_config import get_logger

logger = get_logger("services.workforce_summary")

UNASSIGNED_POSITION = "Not Assigned"

# (label, exclusive upper bound); the last bucket is open-ended.
SALARY_RANGES: tuple[tuple[str, Decimal | None], ...] = (
    ("$0 - $1k", Decimal("1000")),
    ("$1k - $2k", Decimal("2000")),
    ("$2k - $5k", Decimal("5000")),
    ("$5k - $10k", Decimal("10000")),
    ("$10k+", None),
)


def salary_range_label(salary: Decimal) -> str:
    for label, upper in SALARY_RANGES:
        if upper is None or salary < upper:
            return label
    return SALARY_RANGES[-1][0]


@dataclass(frozen=True)
class WorkforceSummary:
    as_of: date
    total_employees: int
    active_employees: int
    average_salary: Decimal
    total_salary_expense: Decimal
    position_breakdown: tuple[tuple[str, int], ...]
    salary_ranges: tuple[tuple[str, int], ...]
    upcoming_holidays: tuple[Holiday, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "as_of": self.as_of.isoformat(),
            "total_employees": self.total_employees,
            "active_employees": self.active_employees,
            "average_salary": self.average_salary,
            "total_salary_expense": self.total_salary_expense,
            "position_breakdown": [
                {"position": position, "count": count}
                for position, count in self.position_breakdown
            ],
            "salary_ranges": [
                {"range": label, "count": count} for label, count in self.salary_ranges
            ],
            "upcoming_holidays": [
                {"name": h.name, "date": h.date} for h in self.upcoming_holidays
            ],
        }


def summarize_workforce(
    employees: Iterable[Employee],
    upcoming_holidays: Iterable[Holiday],
    as_of: date,
    holidays_limit: int = 5,
) -> WorkforceSummary:
    """
    Summarize a workforce.

    Active employees are those without an end date.  Salary statistics only
    count positive salaries; range buckets count every employee.  Holidays
    before ``as_of`` are dropped and the rest listed soonest first, up to
    ``holidays_limit``.
    """
    employees = tuple(employees)
    as_of_iso = as_of.isoformat()

    positive = [e.salary for e in employees if e.salary > 0]
    total = sum(positive, ZERO)
    average = round_money(total / len(positive)) if positive else ZERO

    positions: dict[str, int] = {}
    for employee in employees:
        key = employee.position or UNASSIGNED_POSITION
        positions[key] = positions.get(key, 0) + 1

    ranges = {label: 0 for label, _ in SALARY_RANGES}
    for employee in employees:
        ranges[salary_range_label(employee.salary)] += 1

    holidays = tuple(
        sorted(
            (h for h in upcoming_holidays if h.date >= as_of_iso),
            key=lambda h: h.date,
        )
    )[:holidays_limit]

    summary = WorkforceSummary(
        as_of=as_of,
        total_employees=len(employees),
        active_employees=sum(1 for e in employees if e.end_date is None),
        average_salary=average,
        total_salary_expense=round_money(total),
        position_breakdown=tuple(positions.items()),
        salary_ranges=tuple(ranges.items()) if employees else (),
        upcoming_holidays=holidays,
    )
    logger.info("workforce_summary_computed", extra={
        "as_of": as_of_iso,
        "total_employees": summary.total_employees,
        "active_employees": summary.active_employees,
    })
    return summary
