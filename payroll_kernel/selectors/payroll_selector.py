"""
Module: payroll_kernel.selectors.payroll_selector
Responsibility: Fetch everything one user's salary reports need, in a single
    pass, and hand it back as a ``PayrollSnapshot`` of domain records.
Architecture position: Kernel > Selectors.  May import from models/,
    domain/ and selectors/base.py.

Invariants enforced:
    - Every query is scoped by ``user_id``.  Salary changes are scoped
      through their employee.
    - Window filters (for a window of months ``start..end``):
        holidays, insurance lines   -> start.start_iso <= date <= end.end_iso
        adjustment entries          -> date <= end.end_iso (no lower bound)
        salary deferrals            -> month in window or the month before it
        employees, salary changes,
        adjustment types            -> unfiltered
    - Orderings are deterministic: employees by (last_name, first_name, id),
      dated records by (date, id).  Insurance lines for the same person are
      therefore "last by date wins".

Failure modes:
    - ValueError from the domain records if a stored row is malformed
      (unparseable date, negative adjustment amount).
"""

from datetime import date

from sqlalchemy import select

from payroll_kernel.domain.periods import MonthPeriod, month_window
from payroll_kernel.domain.records import (
    AdjustmentDirection,
    AdjustmentEntry,
    AdjustmentTypeDef,
    Employee,
    Holiday,
    InsuranceRecord,
    PayrollSnapshot,
    SalaryChange,
    SalaryDeferral,
)
from payroll_kernel.domain.values import to_iso_date, to_optional_iso_date
from payroll_kernel.logging_config import get_logger
from payroll_kernel.models.adjustment import EmployeeUnitModel, UnitTypeModel
from payroll_kernel.models.calendar import HolidayModel
from payroll_kernel.models.deferral import SalaryDeferralModel
from payroll_kernel.models.employee import EmployeeModel, SalaryChangeModel
from payroll_kernel.models.insurance import InsuranceRecordModel
from payroll_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.payroll")


def _to_employee(row: EmployeeModel) -> Employee:
    return Employee(
        id=str(row.id),
        start_date=to_iso_date(row.start_date),
        salary=row.salary,
        end_date=to_optional_iso_date(row.end_date),
        personal_id=row.personal_id or None,
        first_name=row.first_name or "",
        last_name=row.last_name or "",
        position=row.position,
    )


class PayrollSnapshotSelector(BaseSelector[EmployeeModel]):
    """
    Read side of the accrual reports.

    Contract:
        ``load`` returns a snapshot covering a window of months so the trend
        report can compute every month from one fetch.  A single-month
        report passes the same month as start and end.
    """

    def employees(self, user_id: str) -> tuple[Employee, ...]:
        """All of the user's employees, employed or not."""
        stmt = (
            select(EmployeeModel)
            .where(EmployeeModel.user_id == user_id)
            .order_by(EmployeeModel.last_name, EmployeeModel.first_name, EmployeeModel.id)
        )
        return tuple(_to_employee(row) for row in self.session.scalars(stmt))

    def upcoming_holidays(self, user_id: str, as_of: date, limit: int) -> tuple[Holiday, ...]:
        """The next ``limit`` holidays on or after ``as_of``, soonest first."""
        stmt = (
            select(HolidayModel)
            .where(HolidayModel.user_id == user_id, HolidayModel.date >= as_of)
            .order_by(HolidayModel.date, HolidayModel.id)
            .limit(limit)
        )
        return tuple(
            Holiday(date=to_iso_date(row.date), name=row.name or "")
            for row in self.session.scalars(stmt)
        )

    def load(
        self,
        user_id: str,
        window_start: MonthPeriod,
        window_end: MonthPeriod,
    ) -> PayrollSnapshot:
        """
        Fetch a user's records for the months ``window_start..window_end``.

        Args:
            user_id: Owner of the records.
            window_start: First month of the window (inclusive).
            window_end: Last month of the window (inclusive).
        """
        first_day = date.fromisoformat(window_start.start_iso)
        last_day = date.fromisoformat(window_end.end_iso)

        employees = self.employees(user_id)
        employee_ids = [e.id for e in employees]

        changes: tuple[SalaryChange, ...] = ()
        if employee_ids:
            change_rows = self.session.scalars(
                select(SalaryChangeModel)
                .join(EmployeeModel, SalaryChangeModel.employee_id == EmployeeModel.id)
                .where(EmployeeModel.user_id == user_id)
                .order_by(SalaryChangeModel.effective_date, SalaryChangeModel.id)
            )
            changes = tuple(
                SalaryChange(
                    employee_id=str(row.employee_id),
                    effective_date=to_iso_date(row.effective_date),
                    old_salary=row.old_salary,
                    new_salary=row.new_salary,
                )
                for row in change_rows
            )

        holidays = tuple(
            Holiday(date=to_iso_date(row.date), name=row.name or "")
            for row in self.session.scalars(
                select(HolidayModel)
                .where(
                    HolidayModel.user_id == user_id,
                    HolidayModel.date >= first_day,
                    HolidayModel.date <= last_day,
                )
                .order_by(HolidayModel.date, HolidayModel.id)
            )
        )

        adjustments = tuple(
            AdjustmentEntry(
                employee_id=str(row.employee_id),
                type=row.unit_type or "",
                amount=row.amount,
                date=to_iso_date(row.date),
            )
            for row in self.session.scalars(
                select(EmployeeUnitModel)
                .where(EmployeeUnitModel.user_id == user_id, EmployeeUnitModel.date <= last_day)
                .order_by(EmployeeUnitModel.date, EmployeeUnitModel.id)
            )
        )

        adjustment_types = tuple(
            AdjustmentTypeDef(
                name=(row.name or "").strip(),
                direction=AdjustmentDirection.coerce(row.direction),
            )
            for row in self.session.scalars(
                select(UnitTypeModel)
                .where(UnitTypeModel.user_id == user_id)
                .order_by(UnitTypeModel.name, UnitTypeModel.id)
            )
        )

        window = month_window(window_end, _months_between(window_start, window_end))
        deferral_months = [window_start.previous().key] + [p.key for p in window]
        deferrals = tuple(
            SalaryDeferral(
                employee_id=str(row.employee_id),
                month=row.month,
                deferred_amount=row.deferred_amount,
                id=str(row.id),
            )
            for row in self.session.scalars(
                select(SalaryDeferralModel)
                .where(
                    SalaryDeferralModel.user_id == user_id,
                    SalaryDeferralModel.month.in_(deferral_months),
                )
                .order_by(SalaryDeferralModel.month, SalaryDeferralModel.id)
            )
        )

        insurance = tuple(
            InsuranceRecord(
                personal_id=(row.personal_id or "").strip(),
                amount=row.amount,
                date=to_iso_date(row.date),
            )
            for row in self.session.scalars(
                select(InsuranceRecordModel)
                .where(
                    InsuranceRecordModel.user_id == user_id,
                    InsuranceRecordModel.date >= first_day,
                    InsuranceRecordModel.date <= last_day,
                )
                .order_by(InsuranceRecordModel.date, InsuranceRecordModel.id)
            )
        )

        logger.debug("payroll_snapshot_loaded", extra={
            "window_start": window_start.key,
            "window_end": window_end.key,
            "employees": len(employees),
            "salary_changes": len(changes),
            "holidays": len(holidays),
            "adjustments": len(adjustments),
            "deferrals": len(deferrals),
            "insurance": len(insurance),
        })

        return PayrollSnapshot(
            employees=employees,
            salary_changes=changes,
            holidays=holidays,
            adjustments=adjustments,
            adjustment_types=adjustment_types,
            deferrals=deferrals,
            insurance=insurance,
        )


def _months_between(start: MonthPeriod, end: MonthPeriod) -> int:
    """Inclusive month count from ``start`` to ``end`` (at least 1)."""
    return max(1, (end.year - start.year) * 12 + (end.month - start.month) + 1)
