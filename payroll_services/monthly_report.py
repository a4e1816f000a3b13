"""
payroll_services.monthly_report -- Per-employee salary rows for one month.

Responsibility:
    Orchestrate the pure engines for every employee of a snapshot in a
    single target month: active window -> salary history -> proration ->
    adjustments, then apply salary deferrals, deferred carry-over and
    insurance deductions, and surface the month-level statistics.

Architecture position:
    Services -- orchestration over engines.  Stateless: every call is a
    pure function of (period, snapshot, configuration).  No I/O; the
    snapshot is fetched by the caller (see ``payroll_service``).

Invariants enforced:
    - The month calendar (holiday set, working-day total) is computed once
      per month and shared by all employees.
    - net = round(effective_accrued + additions + carry_over
                  - deductions - insurance_deduction, 2)
      which reduces to round(accrued + additions - deductions, 2) when no
      deferral or insurance record applies.
    - Employees outside the month (not started yet / already left) get a
      row whose money fields and days_worked are all zero.
    - A salary note is attached iff the employee had in-month changes.
    - Running the report twice on identical input yields identical rows.

Failure modes:
    - EmployeeComputationError if an unexpected arithmetic/value error
      occurs for one employee; carries employee_id and month.
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from payroll_config.schema import AccrualConfig
from payroll_engines.adjustments import EMPTY_TOTALS, aggregate_adjustments, build_direction_map
from payroll_engines.calendar import MonthCalendar, build_month_calendar
from payroll_engines.proration import derive_active_window, prorate
from payroll_engines.salary_history import resolve_salary_history
from payroll_kernel.domain.periods import MonthPeriod
from payroll_kernel.domain.records import (
    AdjustmentDirection,
    AdjustmentEntry,
    Employee,
    InsuranceRecord,
    PayrollSnapshot,
    SalaryDeferral,
)
from payroll_kernel.domain.values import ZERO, round_money
from payroll_kernel.exceptions import EmployeeComputationError
from payroll_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.monthly_report")

SALARY_CHANGED_NOTE = "Salary changed during this month"


@dataclass(frozen=True)
class SalaryRow:
    """One employee's salary figures for the month."""

    employee: Employee
    days_worked: int
    total_days: int
    accrued_salary: Decimal
    total_additions: Decimal
    total_deductions: Decimal
    net_salary: Decimal
    salary_note: str | None = None
    original_accrued: Decimal = ZERO
    insurance_deduction: Decimal = ZERO
    carry_over: Decimal = ZERO
    is_active: bool = True
    is_deferred: bool = False
    deferral_id: str | None = None
    is_mid_month_starter: bool = False
    base_salary: Decimal | None = None
    adjustments: tuple[AdjustmentEntry, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "employee": {
                "id": self.employee.id,
                "first_name": self.employee.first_name,
                "last_name": self.employee.last_name,
                "start_date": self.employee.start_date,
                "end_date": self.employee.end_date,
                "personal_id": self.employee.personal_id,
                "position": self.employee.position,
                "salary": self.base_salary if self.base_salary is not None else self.employee.salary,
            },
            "days_worked": self.days_worked,
            "total_days": self.total_days,
            "accrued_salary": self.accrued_salary,
            "original_accrued": self.original_accrued,
            "total_additions": round_money(self.total_additions),
            "total_deductions": round_money(self.total_deductions),
            "insurance_deduction": round_money(self.insurance_deduction),
            "carry_over": round_money(self.carry_over),
            "net_salary": self.net_salary,
            "is_deferred": self.is_deferred,
            "deferral_id": self.deferral_id,
            "is_mid_month_starter": self.is_mid_month_starter,
            "salary_note": self.salary_note,
            "deductions": [
                {"type": e.type, "amount": e.amount, "date": e.date}
                for e in self.adjustments
            ],
        }


@dataclass(frozen=True)
class MonthlyReport:
    """Salary rows plus month-level statistics."""

    period: MonthPeriod
    holidays_count: int
    weekend_days: int
    working_days: int
    salaries: tuple[SalaryRow, ...] = field(default_factory=tuple)

    @property
    def month(self) -> str:
        return self.period.key

    @property
    def active_rows(self) -> tuple[SalaryRow, ...]:
        return tuple(row for row in self.salaries if row.is_active)

    @property
    def total_accrued(self) -> Decimal:
        return sum((row.accrued_salary for row in self.salaries), ZERO)

    @property
    def total_additions(self) -> Decimal:
        return sum((row.total_additions for row in self.salaries), ZERO)

    @property
    def total_deductions(self) -> Decimal:
        """Adjustment deductions plus insurance deductions."""
        return sum(
            (row.total_deductions + row.insurance_deduction for row in self.salaries), ZERO,
        )

    @property
    def total_net(self) -> Decimal:
        return sum((row.net_salary for row in self.salaries), ZERO)

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "holidays_count": self.holidays_count,
            "weekend_days": self.weekend_days,
            "working_days": self.working_days,
            "salaries": [row.to_dict() for row in self.salaries],
        }


def _deferral_maps(
    deferrals: Iterable[SalaryDeferral],
    period: MonthPeriod,
) -> tuple[dict[str, SalaryDeferral], dict[str, Decimal]]:
    """(employee -> deferral this month, employee -> amount deferred last month)."""
    current: dict[str, SalaryDeferral] = {}
    previous: dict[str, Decimal] = {}
    previous_key = period.previous().key
    for deferral in deferrals:
        if deferral.month == period.key:
            current[deferral.employee_id] = deferral
        elif deferral.month == previous_key:
            previous[deferral.employee_id] = deferral.deferred_amount
    return current, previous


def _insurance_by_personal_id(
    records: Iterable[InsuranceRecord],
    period: MonthPeriod,
) -> dict[str, Decimal]:
    """personal_id -> premium for records dated inside the month; last wins."""
    by_id: dict[str, Decimal] = {}
    for record in records:
        if record.personal_id and period.contains(record.date):
            by_id[record.personal_id.strip()] = record.amount
    return by_id


class MonthlySalaryReport:
    """
    Computes the monthly salary report for a snapshot.

    Contract:
        No I/O, no clock access.  All records are passed in via the
        snapshot; configuration is fixed at construction.
    """

    def __init__(self, config: AccrualConfig | None = None):
        self.config = config or AccrualConfig()

    def compute(self, period: MonthPeriod, snapshot: PayrollSnapshot) -> MonthlyReport:
        """
        Compute every employee's row for ``period``.

        Args:
            period: Target month.
            snapshot: The user's records.  Collections may cover more than
                the month; each engine filters what applies.

        Returns:
            MonthlyReport whose rows follow ``snapshot.employees`` order.
        """
        t0 = time.monotonic()
        with LogContext.bind(month=period.key):
            logger.info("monthly_report_started", extra={
                "employee_count": len(snapshot.employees),
            })

            month_calendar = build_month_calendar(period, snapshot.holidays)
            directions = build_direction_map(
                self.config.merged_adjustment_types(snapshot.adjustment_types)
            )
            current_deferrals, previous_deferrals = _deferral_maps(snapshot.deferrals, period)
            insurance = _insurance_by_personal_id(snapshot.insurance, period)

            rows = tuple(
                self._employee_row(
                    employee=employee,
                    period=period,
                    month_calendar=month_calendar,
                    snapshot=snapshot,
                    directions=directions,
                    deferral=current_deferrals.get(employee.id),
                    carry_over=previous_deferrals.get(employee.id, ZERO),
                    insurance=insurance,
                )
                for employee in snapshot.employees
            )

            report = MonthlyReport(
                period=period,
                holidays_count=month_calendar.holidays_count,
                weekend_days=month_calendar.weekend_days,
                working_days=month_calendar.working_days,
                salaries=rows,
            )

            logger.info("monthly_report_completed", extra={
                "working_days": report.working_days,
                "holidays_count": report.holidays_count,
                "active_employees": len(report.active_rows),
                "total_net": str(report.total_net),
                "duration_ms": round((time.monotonic() - t0) * 1000, 2),
            })
        return report

    def _employee_row(
        self,
        *,
        employee: Employee,
        period: MonthPeriod,
        month_calendar: MonthCalendar,
        snapshot: PayrollSnapshot,
        directions: dict[str, AdjustmentDirection | None],
        deferral: SalaryDeferral | None,
        carry_over: Decimal,
        insurance: dict[str, Decimal],
    ) -> SalaryRow:
        try:
            with LogContext.bind(employee_id=employee.id):
                return self._compute_row(
                    employee=employee,
                    period=period,
                    month_calendar=month_calendar,
                    snapshot=snapshot,
                    directions=directions,
                    deferral=deferral,
                    carry_over=carry_over,
                    insurance=insurance,
                )
        except (ArithmeticError, ValueError, TypeError) as exc:
            logger.error("employee_salary_failed", exc_info=True, extra={
                "employee_id": employee.id,
            })
            raise EmployeeComputationError(employee.id, period.key, str(exc)) from exc

    def _compute_row(
        self,
        *,
        employee: Employee,
        period: MonthPeriod,
        month_calendar: MonthCalendar,
        snapshot: PayrollSnapshot,
        directions: dict[str, AdjustmentDirection | None],
        deferral: SalaryDeferral | None,
        carry_over: Decimal,
        insurance: dict[str, Decimal],
    ) -> SalaryRow:
        window = derive_active_window(employee, period)
        if window is None:
            return SalaryRow(
                employee=employee,
                days_worked=0,
                total_days=month_calendar.working_days,
                accrued_salary=ZERO,
                total_additions=ZERO,
                total_deductions=ZERO,
                net_salary=ZERO,
                is_active=False,
            )

        resolved = resolve_salary_history(
            period=period,
            fallback_salary=employee.salary,
            changes=snapshot.changes_for(employee.id),
        )
        proration = prorate(
            base_salary=resolved.base_salary,
            in_month_changes=resolved.in_month_changes,
            window=window,
            month_calendar=month_calendar,
        )
        entries = snapshot.adjustments_for(employee.id)
        totals = aggregate_adjustments(
            entries, directions, period, self.config.unmapped_adjustment_direction,
        ) if entries else EMPTY_TOTALS

        insurance_deduction = (
            insurance.get(employee.personal_id.strip(), ZERO) if employee.personal_id else ZERO
        )
        is_deferred = deferral is not None
        effective_accrued = ZERO if is_deferred else proration.accrued
        net = round_money(
            effective_accrued
            + totals.total_additions
            + carry_over
            - totals.total_deductions
            - insurance_deduction
        )

        return SalaryRow(
            employee=employee,
            days_worked=proration.days_worked,
            total_days=month_calendar.working_days,
            accrued_salary=effective_accrued,
            total_additions=totals.total_additions,
            total_deductions=totals.total_deductions,
            net_salary=net,
            salary_note=SALARY_CHANGED_NOTE if resolved.changed_in_month else None,
            original_accrued=proration.accrued,
            insurance_deduction=insurance_deduction,
            carry_over=carry_over,
            is_deferred=is_deferred,
            deferral_id=deferral.id if deferral is not None else None,
            is_mid_month_starter=period.start_iso < employee.start_date <= period.end_iso,
            base_salary=None if resolved.changed_in_month else resolved.base_salary,
            adjustments=totals.entries,
        )
