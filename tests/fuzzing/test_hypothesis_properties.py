"""
Hypothesis-based property tests for the accrual engines and monthly report.

Properties:
- Calendar identity: working + weekend + weekday holidays == days in month
- No history, no in-month change: net == round(accrued + additions - deductions, 2)
- Full-month employee with no changes accrues exactly the salary
- Idempotence: the same snapshot always yields the same report
- Inactive employees get all-zero money fields
- Working days within a window never exceed the month's total
"""

from decimal import Decimal

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

from payroll_engines.calendar import build_month_calendar, is_weekend
from payroll_kernel.domain.periods import MonthPeriod
from payroll_kernel.domain.records import (
    AdjustmentDirection,
    AdjustmentEntry,
    AdjustmentTypeDef,
    Employee,
    Holiday,
    PayrollSnapshot,
)
from payroll_kernel.domain.values import round_money
from payroll_services.monthly_report import MonthlySalaryReport

amounts = st.decimals(
    min_value=Decimal("0"), max_value=Decimal("100000"), places=2,
    allow_nan=False, allow_infinity=False,
)


@composite
def periods(draw) -> MonthPeriod:
    return MonthPeriod(draw(st.integers(2000, 2040)), draw(st.integers(1, 12)))


@composite
def holidays_in(draw, period: MonthPeriod) -> list[Holiday]:
    days = draw(st.sets(st.integers(1, period.days_in_month), max_size=8))
    return [Holiday(date=f"{period.key}-{d:02d}") for d in sorted(days)]


@composite
def month_with_holidays(draw):
    period = draw(periods())
    return period, draw(holidays_in(period))


@composite
def adjustments_for(draw, emp_id: str, period: MonthPeriod) -> list[AdjustmentEntry]:
    entries = draw(st.lists(
        st.tuples(
            st.sampled_from(["Bonus", "Advance", "Mystery"]),
            amounts,
            st.integers(1, period.days_in_month),
        ),
        max_size=6,
    ))
    return [
        AdjustmentEntry(employee_id=emp_id, type=t, amount=a, date=f"{period.key}-{d:02d}")
        for t, a, d in entries
    ]


TYPES = (
    AdjustmentTypeDef("Bonus", AdjustmentDirection.ADDITION),
    AdjustmentTypeDef("Advance", AdjustmentDirection.DEDUCTION),
)


class TestCalendarProperties:
    @given(month_with_holidays())
    def test_working_days_identity(self, data):
        period, holidays = data
        cal = build_month_calendar(period, holidays)
        weekday_holidays = sum(
            1 for h in holidays if not is_weekend(period.year, period.month, int(h.date[8:]))
        )
        assert cal.working_days + cal.weekend_days + weekday_holidays == period.days_in_month

    @given(month_with_holidays(), st.integers(1, 31), st.integers(1, 31))
    def test_window_never_exceeds_total(self, data, a, b):
        period, holidays = data
        cal = build_month_calendar(period, holidays)
        start, end = sorted((min(a, period.days_in_month), min(b, period.days_in_month)))
        assert 0 <= cal.working_days_between(start, end) <= cal.working_days


class TestReportProperties:
    @settings(suppress_health_check=[HealthCheck.too_slow], deadline=None)
    @given(st.data())
    def test_net_formula_without_changes(self, data):
        period = data.draw(periods())
        salary = data.draw(amounts)
        entries = data.draw(adjustments_for("e1", period))
        snapshot = PayrollSnapshot(
            employees=(Employee(id="e1", start_date="1999-01-01", salary=salary),),
            holidays=tuple(data.draw(holidays_in(period))),
            adjustments=tuple(entries),
            adjustment_types=TYPES,
        )
        row = MonthlySalaryReport().compute(period, snapshot).salaries[0]
        assert row.net_salary == round_money(
            row.accrued_salary + row.total_additions - row.total_deductions
        )
        assert row.total_additions == sum(
            (e.amount for e in entries if e.type == "Bonus"), Decimal("0")
        )

    @settings(deadline=None)
    @given(periods(), amounts)
    def test_full_month_accrues_salary(self, period, salary):
        snapshot = PayrollSnapshot(
            employees=(Employee(id="e1", start_date="1999-01-01", salary=salary),),
        )
        row = MonthlySalaryReport().compute(period, snapshot).salaries[0]
        assert row.accrued_salary == round_money(salary)
        assert row.days_worked == row.total_days

    @settings(suppress_health_check=[HealthCheck.too_slow], deadline=None)
    @given(st.data())
    def test_idempotent(self, data):
        period = data.draw(periods())
        snapshot = PayrollSnapshot(
            employees=(Employee(id="e1", start_date=f"{period.key}-02", salary=data.draw(amounts)),),
            holidays=tuple(data.draw(holidays_in(period))),
            adjustments=tuple(data.draw(adjustments_for("e1", period))),
            adjustment_types=TYPES,
        )
        report = MonthlySalaryReport()
        assert report.compute(period, snapshot) == report.compute(period, snapshot)

    @settings(deadline=None)
    @given(periods(), amounts)
    def test_inactive_employee_zero(self, period, salary):
        ended = period.previous().end_iso
        snapshot = PayrollSnapshot(
            employees=(Employee(id="e1", start_date="1999-01-01", salary=salary, end_date=ended),),
            adjustments=(AdjustmentEntry("e1", "Bonus", Decimal("10"), "1999-01-01"),),
            adjustment_types=TYPES,
        )
        row = MonthlySalaryReport().compute(period, snapshot).salaries[0]
        assert row.days_worked == 0
        assert row.accrued_salary == row.total_additions == row.total_deductions == Decimal("0")
        assert row.net_salary == Decimal("0")
