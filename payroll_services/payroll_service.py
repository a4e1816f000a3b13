"""
PayrollAccrualService -- entry point for the salary reports.

Responsibility:
    Validate caller input, fetch the user's records once through the
    selector, bind log context, and delegate to the pure report classes.

Architecture position:
    Services -- the only layer that touches a database session and a clock.
    Report classes below it (``monthly_report``, ``trend_report``,
    ``workforce_summary``) never perform I/O.

Invariants enforced:
    - The month string must be ``YYYY-MM``; anything else raises
      InvalidMonthFormatError before any query runs.
    - The trend window is read like a query-string value: a leading integer
      is taken from strings, and anything missing, empty, non-numeric or
      below 1 falls back to the configured default.  Only the month format
      is a hard input failure.
    - "Now" comes from the injected Clock, never from the system time
      directly, so trend windows and holiday look-ahead are reproducible.
    - The session is only read from; this service never commits.

Failure modes:
    - InvalidMonthFormatError on a malformed month.
    - EmployeeComputationError propagated from the monthly report.
    - SQLAlchemy errors propagate unchanged.
"""

from __future__ import annotations

import math
import re
from uuid import uuid4

from sqlalchemy.orm import Session

from payroll_config import get_active_config
from payroll_config.schema import AccrualConfig
from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.domain.periods import MonthPeriod, month_window
from payroll_kernel.logging_config import LogContext, get_logger
from payroll_kernel.selectors.payroll_selector import PayrollSnapshotSelector
from payroll_services.monthly_report import MonthlyReport, MonthlySalaryReport
from payroll_services.trend_report import SalaryTrendReport, TrendReport
from payroll_services.workforce_summary import WorkforceSummary, summarize_workforce

logger = get_logger("services.payroll")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_trend_window(months: object, default: int) -> int:
    """
    Normalize a trend window argument.

    Strings contribute their leading integer (``"6"``, ``" 6 "``, ``"6m"``);
    ints are used as given and finite floats are truncated.  Anything that
    yields no number, or a number below 1, gives ``default``.
    """
    value: int | None = None
    if isinstance(months, int) and not isinstance(months, bool):
        value = months
    elif isinstance(months, float) and math.isfinite(months):
        value = int(months)
    elif isinstance(months, str):
        match = _LEADING_INT.match(months)
        if match:
            value = int(match.group(1))

    if value is None or value < 1:
        logger.debug("trend_window_defaulted", extra={
            "requested": repr(months),
            "default": default,
        })
        return default
    return value


class PayrollAccrualService:
    """
    Salary reports for one database session.

    Usage:
        with session_scope() as session:
            service = PayrollAccrualService(session, clock=SystemClock())
            report = service.salary_report(user_id, "2025-03")
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: AccrualConfig | None = None,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._config = config or get_active_config()
        self._selector = PayrollSnapshotSelector(session)
        self._monthly = MonthlySalaryReport(self._config)
        self._trend = SalaryTrendReport(self._config)

    @property
    def config(self) -> AccrualConfig:
        return self._config

    def salary_report(self, user_id: str, month: object) -> MonthlyReport:
        """
        Per-employee salary rows for ``month`` (``YYYY-MM``).

        Raises:
            InvalidMonthFormatError: if ``month`` is missing or malformed.
        """
        period = MonthPeriod.parse(month)
        with LogContext.bind(correlation_id=str(uuid4()), user_id=user_id, month=period.key):
            snapshot = self._selector.load(user_id, period, period)
            return self._monthly.compute(period, snapshot)

    def salary_trend(self, user_id: str, months: object = None) -> TrendReport:
        """
        Totals for the last ``months`` months ending with the current month.

        ``months`` may be missing or unusable; see ``parse_trend_window``.
        """
        window = parse_trend_window(months, self._config.trend_default_months)
        end = MonthPeriod.containing(self._clock.today())
        start = month_window(end, window)[0]
        with LogContext.bind(correlation_id=str(uuid4()), user_id=user_id):
            snapshot = self._selector.load(user_id, start, end)
            return self._trend.compute(end, window, snapshot)

    def workforce_summary(self, user_id: str) -> WorkforceSummary:
        """Headcount, salary distribution and upcoming holidays as of today."""
        as_of = self._clock.today()
        limit = self._config.upcoming_holidays_limit
        with LogContext.bind(correlation_id=str(uuid4()), user_id=user_id):
            return summarize_workforce(
                self._selector.employees(user_id),
                self._selector.upcoming_holidays(user_id, as_of, limit),
                as_of,
                holidays_limit=limit,
            )
