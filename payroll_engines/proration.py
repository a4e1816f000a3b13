"""
payroll_engines.proration -- Active-window derivation and prorated base pay.

Responsibility:
    Work out which days of the month an employee was active for, and
    integrate their (piecewise-constant) daily rate over the working days
    of that window, splitting the month at every in-month salary change.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Consumes the output of ``payroll_engines.salary_history`` and the
    ``MonthCalendar`` from ``payroll_engines.calendar``.

Invariants enforced:
    - Daily rate = salary / total working days of the WHOLE month, not of
      the sub-period the salary applies to.  A month with zero working days
      has a daily rate of zero.
    - Only working days (not weekend, not holiday) accrue pay.
    - A change applies only if its day lies in [period_start, effective_end];
      changes dated before the employee's start or after their end day are
      ignored for proration.
    - Intermediate amounts are never rounded; the accrued total is rounded
      once to 2 places (halves towards positive infinity).
    - Determinism: identical inputs produce identical outputs.

Failure modes:
    None -- empty change lists and zero-working-day months are valid input.

Usage:
    window = derive_active_window(employee, period)
    if window is not None:
        result = prorate(
            base_salary=resolved.base_salary,
            in_month_changes=resolved.in_month_changes,
            window=window,
            month_calendar=month_calendar,
        )
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from payroll_kernel.domain.periods import MonthPeriod, day_of_month
from payroll_kernel.domain.records import Employee, SalaryChange
from payroll_kernel.domain.values import ZERO, round_money
from payroll_kernel.logging_config import get_logger
from payroll_engines.calendar import MonthCalendar
from payroll_engines.tracer import traced_engine

logger = get_logger("engines.proration")


@dataclass(frozen=True)
class ActiveWindow:
    """Inclusive day-of-month range the employee was employed for."""

    start_day: int
    end_day: int


@dataclass(frozen=True)
class ProrationSegment:
    """One constant-salary stretch of the active window."""

    start_day: int
    end_day: int
    salary: Decimal
    working_days: int
    amount: Decimal  # unrounded


@dataclass(frozen=True)
class ProrationResult:
    """Accrued base pay for the month."""

    accrued: Decimal  # rounded to 2 places
    days_worked: int
    segments: tuple[ProrationSegment, ...]


def derive_active_window(employee: Employee, period: MonthPeriod) -> ActiveWindow | None:
    """
    Day range inside ``period`` the employee was active for.

    Returns ``None`` when the employee starts after the month or ended
    before it.  Comparisons are on ISO date strings.
    """
    month_start = period.start_iso
    month_end = period.end_iso

    if employee.start_date > month_end:
        return None
    if employee.end_date is not None and employee.end_date < month_start:
        return None

    start_day = day_of_month(employee.start_date) if period.contains(employee.start_date) else 1
    end_day = (
        day_of_month(employee.end_date)
        if employee.end_date is not None and period.contains(employee.end_date)
        else period.days_in_month
    )
    return ActiveWindow(start_day=start_day, end_day=end_day)


def daily_rate(salary: Decimal, total_working_days: int) -> Decimal:
    """Salary per working day of the month; zero when the month has none."""
    if total_working_days <= 0:
        return ZERO
    return salary / Decimal(total_working_days)


@traced_engine(
    "proration", "1.0",
    fingerprint_fields=("base_salary", "in_month_changes", "window", "month_calendar"),
)
def prorate(
    *,
    base_salary: Decimal,
    in_month_changes: Sequence[SalaryChange] = (),
    window: ActiveWindow,
    month_calendar: MonthCalendar,
) -> ProrationResult:
    """
    Accrue base pay over the active window.

    Preconditions:
        ``in_month_changes`` are sorted ascending by effective_date and all
        fall inside ``month_calendar.period``.

    Postconditions:
        accrued == round(sum(segment.amount), 2) where each segment amount is
        segment.salary / total_working_days * segment.working_days.
    """
    total = month_calendar.working_days
    segments: list[ProrationSegment] = []

    current_salary = base_salary
    period_start = window.start_day

    for change in in_month_changes:
        change_day = change.day
        if not period_start <= change_day <= window.end_day:
            continue
        days = month_calendar.working_days_between(period_start, change_day - 1)
        segments.append(ProrationSegment(
            start_day=period_start,
            end_day=change_day - 1,
            salary=current_salary,
            working_days=days,
            amount=daily_rate(current_salary, total) * days,
        ))
        current_salary = change.new_salary
        period_start = change_day

    days = month_calendar.working_days_between(period_start, window.end_day)
    segments.append(ProrationSegment(
        start_day=period_start,
        end_day=window.end_day,
        salary=current_salary,
        working_days=days,
        amount=daily_rate(current_salary, total) * days,
    ))

    days_worked = month_calendar.working_days_between(window.start_day, window.end_day)
    accrued = round_money(sum((s.amount for s in segments), ZERO))

    logger.debug("proration_calculated", extra={
        "month": month_calendar.period.key,
        "base_salary": str(base_salary),
        "segments": len(segments),
        "days_worked": days_worked,
        "total_working_days": total,
        "accrued": str(accrued),
    })

    return ProrationResult(
        accrued=accrued,
        days_worked=days_worked,
        segments=tuple(segments),
    )
