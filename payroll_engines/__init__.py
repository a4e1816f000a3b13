"""
Module: payroll_engines
Responsibility:
    Package entrypoint that re-exports all public symbols from the pure
    calculation engine sub-modules.  This is the canonical import surface
    for the report layer (payroll_services).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import payroll_kernel.domain, payroll_kernel.logging_config and
    sibling engine modules.  MUST NOT import payroll_services,
    payroll_config, the ORM, or selectors.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``.
      Months are passed in as explicit ``MonthPeriod`` parameters.
    - Decimal-only arithmetic: all monetary amounts use ``Decimal``.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from payroll_engines.calendar import build_month_calendar
    from payroll_engines.salary_history import resolve_salary_history
    from payroll_engines.proration import derive_active_window, prorate
    from payroll_engines.adjustments import aggregate_adjustments
"""

from payroll_engines.adjustments import (
    AdjustmentTotals,
    aggregate_adjustments,
    build_direction_map,
    resolve_direction,
)
from payroll_engines.calendar import (
    MonthCalendar,
    build_month_calendar,
    count_weekend_days,
    count_working_days,
    holiday_days_for_month,
    is_weekend,
    weekday_index,
)
from payroll_engines.proration import (
    ActiveWindow,
    ProrationResult,
    ProrationSegment,
    daily_rate,
    derive_active_window,
    prorate,
)
from payroll_engines.salary_history import (
    BaseSalarySource,
    PartitionedChanges,
    ResolvedSalary,
    partition_changes,
    resolve_salary_history,
)
from payroll_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    # adjustments
    "AdjustmentTotals",
    "aggregate_adjustments",
    "build_direction_map",
    "resolve_direction",
    # calendar
    "MonthCalendar",
    "build_month_calendar",
    "count_weekend_days",
    "count_working_days",
    "holiday_days_for_month",
    "is_weekend",
    "weekday_index",
    # proration
    "ActiveWindow",
    "ProrationResult",
    "ProrationSegment",
    "daily_rate",
    "derive_active_window",
    "prorate",
    # salary history
    "BaseSalarySource",
    "PartitionedChanges",
    "ResolvedSalary",
    "partition_changes",
    "resolve_salary_history",
    # tracer
    "compute_input_fingerprint",
    "traced_engine",
]
