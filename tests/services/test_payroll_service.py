"""
End-to-end tests for PayrollAccrualService over an in-memory database.

The deterministic clock is pinned to 2025-03-10, so the trend window ends
with March 2025.
"""

from datetime import date
from decimal import Decimal

import pytest

from payroll_kernel.exceptions import InvalidMonthFormatError
from payroll_services.payroll_service import PayrollAccrualService, parse_trend_window


@pytest.fixture
def service(session, deterministic_clock, accrual_config):
    return PayrollAccrualService(session, clock=deterministic_clock, config=accrual_config)


class TestParseTrendWindow:
    @pytest.mark.parametrize(
        "value, expected",
        [(6, 6), ("4", 4), (" 2 ", 2), ("3m", 3), ("1.5", 1), (2.0, 2), (2.9, 2)],
    )
    def test_leading_integer_used(self, value, expected):
        assert parse_trend_window(value, 12) == expected

    @pytest.mark.parametrize(
        "value", [None, "", "   ", 0, -3, "0", "-2", "abc", True, False, [], float("nan")],
    )
    def test_unusable_values_fall_back_to_default(self, value):
        assert parse_trend_window(value, 12) == 12


class TestSalaryReport:
    def test_invalid_month_rejected(self, service, user_id):
        with pytest.raises(InvalidMonthFormatError):
            service.salary_report(user_id, "March 2025")

    def test_report_from_database(self, service, seed, user_id):
        emp = seed.employee(start_date=date(2024, 1, 1), salary="2000", personal_id="77")
        seed.salary_change(emp, date(2025, 2, 15), "1000", "2000")
        seed.holiday(date(2025, 2, 3))
        seed.unit_type("Bonus", "addition")
        seed.unit(emp, "Bonus", "100", date(2025, 2, 20))
        seed.unit(emp, "Advance", "40", date(2024, 12, 1))
        seed.unit(emp, "Bonus", "500", date(2025, 3, 1))
        seed.insurance("77", "15", date(2025, 2, 10))

        report = service.salary_report(user_id, "2025-02")

        assert report.working_days == 19
        assert report.holidays_count == 1
        row = report.salaries[0]
        # 1000/19 * 9 working days before the 15th + 2000/19 * 10 after
        assert row.days_worked == 19
        assert row.accrued_salary == Decimal("1526.32")
        assert row.total_additions == Decimal("100")
        assert row.total_deductions == Decimal("40")
        assert row.insurance_deduction == Decimal("15")
        assert row.net_salary == Decimal("1571.32")
        assert row.salary_note is not None

    def test_other_users_data_invisible(self, service, seed, user_id):
        seed.employee(start_date=date(2024, 1, 1), salary="1000")
        seed.employee(start_date=date(2024, 1, 1), salary="9000", owner="someone-else")
        seed.holiday(date(2025, 2, 3), owner="someone-else")

        report = service.salary_report(user_id, "2025-02")

        assert len(report.salaries) == 1
        assert report.holidays_count == 0

    def test_deferral_round_trip(self, service, seed, user_id):
        emp = seed.employee(start_date=date(2024, 1, 1), salary="1000")
        seed.deferral(emp, "2025-01", "1000")
        current = seed.deferral(emp, "2025-02", "1000")

        row = service.salary_report(user_id, "2025-02").salaries[0]

        assert row.deferral_id == str(current.id)
        assert row.is_deferred is True
        assert row.carry_over == Decimal("1000")
        assert row.net_salary == Decimal("1000.00")

    def test_rows_ordered_by_last_name(self, service, seed, user_id):
        seed.employee(start_date=date(2024, 1, 1), salary="1000", last_name="Zed")
        seed.employee(start_date=date(2024, 1, 1), salary="1000", last_name="Abe")
        names = [r.employee.last_name for r in service.salary_report(user_id, "2025-02").salaries]
        assert names == ["Abe", "Zed"]

    def test_logs_bound_to_user(self, service, seed, user_id, captured_logs):
        seed.employee(start_date=date(2024, 1, 1), salary="1000")
        service.salary_report(user_id, "2025-02")
        completed = [r for r in captured_logs() if r["message"] == "monthly_report_completed"]
        assert completed[0]["user_id"] == user_id
        assert "correlation_id" in completed[0]


class TestSalaryTrend:
    def test_window_ends_at_clock_month(self, service, seed, user_id):
        seed.employee(start_date=date(2024, 1, 1), salary="1000")
        report = service.salary_trend(user_id, 3)
        assert report.months == ["2025-01", "2025-02", "2025-03"]
        assert [row.total_accrued for row in report.rows] == [Decimal("1000.00")] * 3

    def test_default_window_from_config(self, service, user_id):
        report = service.salary_trend(user_id)
        assert len(report.rows) == 12
        assert report.months[0] == "2024-04"

    @pytest.mark.parametrize("months", ["", "0", "abc", 0])
    def test_unusable_window_uses_default(self, service, user_id, months):
        report = service.salary_trend(user_id, months)
        assert len(report.rows) == 12
        assert report.months[-1] == "2025-03"

    def test_trend_matches_monthly_reports(self, service, seed, user_id):
        emp = seed.employee(start_date=date(2025, 1, 20), salary="1500")
        seed.salary_change(emp, date(2025, 3, 17), "1500", "1800")
        seed.unit(emp, "Advance", "75", date(2025, 2, 4))

        trend = service.salary_trend(user_id, 3)

        for row in trend.rows:
            monthly = service.salary_report(user_id, row.month)
            assert row.net_salary == monthly.total_net
            assert row.total_accrued == monthly.total_accrued


class TestWorkforceSummary:
    def test_summary_from_database(self, service, seed, user_id):
        seed.employee(start_date=date(2024, 1, 1), salary="1500", position="Clerk")
        seed.employee(start_date=date(2024, 1, 1), salary="12000", end_date=date(2025, 1, 1))
        seed.holiday(date(2025, 3, 9), "Yesterday")
        for month in range(4, 11):
            seed.holiday(date(2025, month, 1), f"H{month}")

        summary = service.workforce_summary(user_id)

        assert summary.as_of == date(2025, 3, 10)
        assert summary.total_employees == 2
        assert summary.active_employees == 1
        assert summary.average_salary == Decimal("6750.00")
        assert [h.name for h in summary.upcoming_holidays] == ["H4", "H5", "H6", "H7", "H8"]


class TestPackagedConfiguration:
    """Service built without an explicit config loads the shipped YAML."""

    @pytest.fixture
    def default_service(self, session, deterministic_clock):
        return PayrollAccrualService(session, clock=deterministic_clock)

    def test_undefined_types_are_deductions(self, default_service, seed, user_id):
        emp = seed.employee(start_date=date(2024, 1, 1), salary="1000")
        seed.unit(emp, "Overtime", "100", date(2025, 2, 10))
        seed.unit(emp, "Bonus", "50", date(2025, 2, 11))

        row = default_service.salary_report(user_id, "2025-02").salaries[0]

        assert row.total_additions == Decimal("0")
        assert row.total_deductions == Decimal("150")
        assert row.net_salary == Decimal("850.00")

    def test_user_types_decide_direction(self, default_service, seed, user_id):
        emp = seed.employee(start_date=date(2024, 1, 1), salary="1000")
        seed.unit_type("Bonus", "addition")
        seed.unit(emp, "Bonus", "50", date(2025, 2, 11))

        row = default_service.salary_report(user_id, "2025-02").salaries[0]

        assert row.net_salary == Decimal("1050.00")
