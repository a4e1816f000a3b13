"""
Module: payroll_services
Responsibility:
    Report orchestration over the pure engines, plus the session-bound
    ``PayrollAccrualService`` entry point.

Architecture position:
    Services -- may import payroll_engines, payroll_config and
    payroll_kernel.  Only ``payroll_service`` touches a session or a clock.
"""

from payroll_services.monthly_report import (
    MonthlyReport,
    MonthlySalaryReport,
    SalaryRow,
)
from payroll_services.payroll_service import PayrollAccrualService, parse_trend_window
from payroll_services.trend_report import MonthReportRow, SalaryTrendReport, TrendReport
from payroll_services.workforce_summary import WorkforceSummary, summarize_workforce

__all__ = [
    "MonthReportRow",
    "MonthlyReport",
    "MonthlySalaryReport",
    "PayrollAccrualService",
    "SalaryRow",
    "SalaryTrendReport",
    "TrendReport",
    "WorkforceSummary",
    "parse_trend_window",
    "summarize_workforce",
]
