"""Tests for PayrollSnapshotSelector window filtering and DTO conversion."""

from datetime import date
from decimal import Decimal

from payroll_kernel.domain.periods import MonthPeriod
from payroll_kernel.domain.records import AdjustmentDirection, Employee
from payroll_kernel.selectors.payroll_selector import PayrollSnapshotSelector

JAN = MonthPeriod(2025, 1)
MAR = MonthPeriod(2025, 3)


class TestLoad:
    def test_returns_domain_records(self, session, seed, user_id):
        emp = seed.employee(start_date=date(2024, 5, 6), salary="1500", personal_id="42")
        snapshot = PayrollSnapshotSelector(session).load(user_id, MAR, MAR)
        (employee,) = snapshot.employees
        assert isinstance(employee, Employee)
        assert employee.id == str(emp.id)
        assert employee.start_date == "2024-05-06"
        assert employee.salary == Decimal("1500")
        assert employee.end_date is None

    def test_window_filters(self, session, seed, user_id):
        emp = seed.employee(start_date=date(2024, 1, 1), salary="1000")
        seed.holiday(date(2024, 12, 25))
        seed.holiday(date(2025, 1, 1))
        seed.holiday(date(2025, 3, 31))
        seed.holiday(date(2025, 4, 1))
        seed.unit(emp, "Bonus", "1", date(2023, 6, 1))
        seed.unit(emp, "Bonus", "2", date(2025, 3, 31))
        seed.unit(emp, "Bonus", "3", date(2025, 4, 1))
        seed.deferral(emp, "2024-11", "1")
        seed.deferral(emp, "2024-12", "2")
        seed.deferral(emp, "2025-02", "3")
        seed.deferral(emp, "2025-04", "4")
        seed.insurance("1", "5", date(2024, 12, 31))
        seed.insurance("1", "6", date(2025, 2, 14))

        snapshot = PayrollSnapshotSelector(session).load(user_id, JAN, MAR)

        assert [h.date for h in snapshot.holidays] == ["2025-01-01", "2025-03-31"]
        assert [e.amount for e in snapshot.adjustments] == [Decimal("1"), Decimal("2")]
        assert [d.month for d in snapshot.deferrals] == ["2024-12", "2025-02"]
        assert [i.date for i in snapshot.insurance] == ["2025-02-14"]

    def test_salary_changes_scoped_through_employee(self, session, seed, user_id):
        mine = seed.employee(start_date=date(2024, 1, 1), salary="1000")
        theirs = seed.employee(start_date=date(2024, 1, 1), salary="1000", owner="other")
        seed.salary_change(mine, date(2025, 2, 1), "1000", "1100")
        seed.salary_change(theirs, date(2025, 2, 1), "1000", "5000")

        snapshot = PayrollSnapshotSelector(session).load(user_id, MAR, MAR)

        assert len(snapshot.salary_changes) == 1
        assert snapshot.changes_for(str(mine.id))[0].new_salary == Decimal("1100")

    def test_unit_type_directions_coerced(self, session, seed, user_id):
        seed.unit_type("Bonus", "Addition")
        seed.unit_type("Gym", "weird")
        snapshot = PayrollSnapshotSelector(session).load(user_id, MAR, MAR)
        directions = {t.name: t.direction for t in snapshot.adjustment_types}
        assert directions == {"Bonus": AdjustmentDirection.ADDITION, "Gym": None}

    def test_empty_user(self, session, user_id):
        snapshot = PayrollSnapshotSelector(session).load(user_id, MAR, MAR)
        assert snapshot.employees == ()
        assert snapshot.salary_changes == ()

    def test_read_only(self, session, seed, user_id):
        seed.employee(start_date=date(2024, 1, 1), salary="1000")
        PayrollSnapshotSelector(session).load(user_id, MAR, MAR)
        assert not session.new
        assert not session.dirty


class TestUpcomingHolidays:
    def test_limit_and_order(self, session, seed, user_id):
        for day in (20, 5, 15, 10):
            seed.holiday(date(2025, 3, day), f"d{day}")
        holidays = PayrollSnapshotSelector(session).upcoming_holidays(user_id, date(2025, 3, 10), 2)
        assert [h.name for h in holidays] == ["d10", "d15"]
