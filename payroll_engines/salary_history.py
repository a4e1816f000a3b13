"""
payroll_engines.salary_history -- Salary in effect for an employee in a month.

Responsibility:
    For one employee and one target month, determine the base salary in
    effect at the start of the month and the salary changes that take
    effect inside the month.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Consumed by the monthly salary report ahead of proration.

Invariants enforced:
    - Changes are bucketed by comparing ISO ``effective_date`` strings with
      the month's first/last day strings (never parsed dates):
        before:   effective_date <= month_start
        in_month: month_start < effective_date <= month_end
        after:    effective_date >  month_end
    - Input order does not matter; every bucket is sorted ascending by
      effective_date before use (stable for equal dates).
    - Base salary priority:
        1. new_salary of the latest change in ``before``
        2. old_salary of the earliest change in ``in_month``
        3. old_salary of the earliest change in ``after``
        4. the employee's stored salary
      Each change's own fields are trusted; adjacent changes whose
      old/new salaries disagree are tolerated.

Failure modes:
    None -- an empty change list resolves to the fallback salary.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from payroll_kernel.domain.periods import MonthPeriod
from payroll_kernel.domain.records import SalaryChange
from payroll_kernel.logging_config import get_logger
from payroll_engines.tracer import traced_engine

logger = get_logger("engines.salary_history")


class BaseSalarySource(str, Enum):
    """Where the month-start salary was taken from."""

    CHANGE_BEFORE = "change_before"  # new_salary of latest change on/before month start
    CHANGE_IN_MONTH = "change_in_month"  # old_salary of earliest in-month change
    CHANGE_AFTER = "change_after"  # old_salary of earliest future change
    EMPLOYEE_RECORD = "employee_record"  # no history at all


@dataclass(frozen=True)
class PartitionedChanges:
    """An employee's salary changes split around one month."""

    before: tuple[SalaryChange, ...]
    in_month: tuple[SalaryChange, ...]
    after: tuple[SalaryChange, ...]


@dataclass(frozen=True)
class ResolvedSalary:
    """Salary at month start plus the in-month changes to prorate over."""

    base_salary: Decimal
    source: BaseSalarySource
    in_month_changes: tuple[SalaryChange, ...]

    @property
    def changed_in_month(self) -> bool:
        return bool(self.in_month_changes)


def partition_changes(
    period: MonthPeriod,
    changes: Iterable[SalaryChange],
) -> PartitionedChanges:
    """Sort changes by effective date and split them around ``period``."""
    month_start = period.start_iso
    month_end = period.end_iso
    ordered = sorted(changes, key=lambda c: c.effective_date)

    before: list[SalaryChange] = []
    in_month: list[SalaryChange] = []
    after: list[SalaryChange] = []
    for change in ordered:
        if change.effective_date <= month_start:
            before.append(change)
        elif change.effective_date <= month_end:
            in_month.append(change)
        else:
            after.append(change)

    return PartitionedChanges(tuple(before), tuple(in_month), tuple(after))


@traced_engine("salary_history", "1.0", fingerprint_fields=("period", "fallback_salary", "changes"))
def resolve_salary_history(
    *,
    period: MonthPeriod,
    fallback_salary: Decimal,
    changes: Iterable[SalaryChange] = (),
) -> ResolvedSalary:
    """
    Resolve the base salary at the start of ``period``.

    Args:
        period: Target month.
        fallback_salary: The employee's stored salary, used only when no
            change record exists at all.
        changes: The employee's salary changes, in any order.

    Returns:
        ResolvedSalary with the base salary, where it came from, and the
        in-month changes sorted ascending.
    """
    parts = partition_changes(period, changes)

    if parts.before:
        base, source = parts.before[-1].new_salary, BaseSalarySource.CHANGE_BEFORE
    elif parts.in_month:
        base, source = parts.in_month[0].old_salary, BaseSalarySource.CHANGE_IN_MONTH
    elif parts.after:
        base, source = parts.after[0].old_salary, BaseSalarySource.CHANGE_AFTER
    else:
        base, source = fallback_salary, BaseSalarySource.EMPLOYEE_RECORD

    logger.debug("salary_history_resolved", extra={
        "month": period.key,
        "base_salary": str(base),
        "source": source.value,
        "changes_before": len(parts.before),
        "changes_in_month": len(parts.in_month),
        "changes_after": len(parts.after),
    })

    return ResolvedSalary(
        base_salary=base,
        source=source,
        in_month_changes=parts.in_month,
    )
