"""
payroll_services.trend_report -- Month-by-month payroll totals.

Responsibility:
    Run the monthly salary report for each of the last N months ending at a
    given month and reduce every month to one totals row.

Architecture position:
    Services -- orchestration over ``monthly_report``.  No I/O; one snapshot
    covering the whole window is passed in.

Invariants enforced:
    - Rows are ordered oldest month first, whatever the execution mode.
    - Each month is computed by exactly the monthly report used for single
      months, so a trend row always agrees with that month's report:
          total_accrued    = sum of row accrued_salary
          total_additions  = sum of row total_additions
          total_deductions = sum of row total_deductions + insurance_deduction
          net_salary       = sum of row net_salary
          active_employees = rows whose employee was employed in the month
    - Months are independent: with ``max_workers`` they are computed on a
      thread pool and the result is identical to the sequential run.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from payroll_config.schema import AccrualConfig
from payroll_kernel.domain.periods import MonthPeriod, month_window
from payroll_kernel.domain.records import PayrollSnapshot
from payroll_kernel.domain.values import round_money
from payroll_kernel.exceptions import InvalidTrendWindowError
from payroll_kernel.logging_config import LogContext, get_logger
from payroll_services.monthly_report import MonthlyReport, MonthlySalaryReport

logger = get_logger("services.trend_report")


@dataclass(frozen=True)
class MonthReportRow:
    """Totals for one month of the trend."""

    period: MonthPeriod
    active_employees: int
    total_accrued: Decimal
    total_additions: Decimal
    total_deductions: Decimal
    net_salary: Decimal

    @property
    def month(self) -> str:
        return self.period.key

    @property
    def label(self) -> str:
        return self.period.label

    @classmethod
    def from_monthly_report(cls, report: MonthlyReport) -> MonthReportRow:
        return cls(
            period=report.period,
            active_employees=len(report.active_rows),
            total_accrued=round_money(report.total_accrued),
            total_additions=round_money(report.total_additions),
            total_deductions=round_money(report.total_deductions),
            net_salary=round_money(report.total_net),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "label": self.label,
            "active_employees": self.active_employees,
            "total_accrued": self.total_accrued,
            "total_additions": self.total_additions,
            "total_deductions": self.total_deductions,
            "net_salary": self.net_salary,
        }


@dataclass(frozen=True)
class TrendReport:
    rows: tuple[MonthReportRow, ...]

    @property
    def months(self) -> list[str]:
        return [row.month for row in self.rows]

    def to_dict(self) -> dict[str, Any]:
        return {"report": [row.to_dict() for row in self.rows]}


class SalaryTrendReport:
    """
    Computes per-month totals over a window of months.

    Contract:
        No I/O, no clock access.  The end month is supplied by the caller.
    """

    def __init__(self, config: AccrualConfig | None = None):
        self.config = config or AccrualConfig()
        self._monthly = MonthlySalaryReport(self.config)

    def compute(
        self,
        end_period: MonthPeriod,
        months: int,
        snapshot: PayrollSnapshot,
        max_workers: int | None = None,
    ) -> TrendReport:
        """
        Build the trend ending at ``end_period`` (inclusive).

        Args:
            end_period: Newest month of the window.
            months: Window length, >= 1.
            snapshot: Records covering the whole window.
            max_workers: Thread count; ``None`` falls back to the configured
                value, and a resolved ``None`` or 1 runs sequentially.

        Raises:
            InvalidTrendWindowError: if ``months`` is not a positive integer.
                User input goes through ``parse_trend_window`` first.
        """
        if isinstance(months, bool) or not isinstance(months, int) or months < 1:
            raise InvalidTrendWindowError(months)

        workers = max_workers if max_workers is not None else self.config.trend_max_workers
        periods = month_window(end_period, months)
        context = LogContext.get_all()

        t0 = time.monotonic()
        logger.info("salary_trend_started", extra={
            "end_month": end_period.key,
            "months": months,
            "max_workers": workers,
        })

        def run(period: MonthPeriod) -> MonthReportRow:
            # Worker threads do not inherit the caller's context variables.
            with LogContext.bind(**context):
                return MonthReportRow.from_monthly_report(
                    self._monthly.compute(period, snapshot)
                )

        if workers and workers > 1 and len(periods) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                rows = tuple(executor.map(run, periods))
        else:
            rows = tuple(run(period) for period in periods)

        logger.info("salary_trend_completed", extra={
            "end_month": end_period.key,
            "months": months,
            "duration_ms": round((time.monotonic() - t0) * 1000, 2),
        })
        return TrendReport(rows=rows)
