"""
Pure domain layer.

This module contains pure data transfer objects and domain logic
with NO dependencies on:
- ORM (SQLAlchemy)
- Database
- Time/clock (other than the injectable Clock)
- I/O

All domain objects are immutable and deterministic.
"""

from payroll_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from payroll_kernel.domain.periods import MonthPeriod, day_of_month, month_window
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
from payroll_kernel.domain.values import ZERO, round_money, to_decimal, to_iso_date

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "MonthPeriod",
    "day_of_month",
    "month_window",
    "AdjustmentDirection",
    "AdjustmentEntry",
    "AdjustmentTypeDef",
    "Employee",
    "Holiday",
    "InsuranceRecord",
    "PayrollSnapshot",
    "SalaryChange",
    "SalaryDeferral",
    "ZERO",
    "round_money",
    "to_decimal",
    "to_iso_date",
]
