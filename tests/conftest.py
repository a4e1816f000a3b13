"""
Pytest fixtures for the payroll accrual test suite.

Provides:
- In-memory SQLite sessions through payroll_kernel.db.engine
- A deterministic clock
- Record builders for snapshots and database rows
- Structured log capture
"""

import json
import logging
from datetime import UTC, datetime
from decimal import Decimal
from io import StringIO
from typing import Generator
from uuid import uuid4

import pytest
from sqlalchemy.orm import Session

from payroll_config.schema import AccrualConfig
from payroll_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from payroll_kernel.domain.clock import DeterministicClock
from payroll_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from payroll_kernel.models import (
    EmployeeModel,
    EmployeeUnitModel,
    HolidayModel,
    InsuranceRecordModel,
    SalaryChangeModel,
    SalaryDeferralModel,
    UnitTypeModel,
)

TEST_DATABASE_URL = "sqlite://"


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture payroll_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            MonthlySalaryReport().compute(period, snapshot)
            logs = captured_logs()
            assert any(r["message"] == "monthly_report_completed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("payroll_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """Fresh in-memory database per test."""
    init_engine_from_url(TEST_DATABASE_URL)
    create_tables()
    db_session = get_session()
    try:
        yield db_session
    finally:
        db_session.close()
        drop_tables()
        reset_engine()


@pytest.fixture
def user_id() -> str:
    return "user-" + uuid4().hex[:8]


@pytest.fixture
def seed(session: Session, user_id: str):
    """
    Insert ORM rows for ``user_id`` and flush.

    Returns a namespace of small helpers; each returns the created row.
    """

    class _Seed:
        def employee(self, *, start_date, salary, end_date=None, first_name="Ann",
                     last_name="Lee", personal_id=None, position=None, owner=None):
            row = EmployeeModel(
                user_id=owner or user_id,
                first_name=first_name,
                last_name=last_name,
                start_date=start_date,
                end_date=end_date,
                salary=Decimal(str(salary)),
                personal_id=personal_id,
                position=position,
            )
            session.add(row)
            session.flush()
            return row

        def salary_change(self, employee, effective_date, old, new):
            row = SalaryChangeModel(
                employee_id=employee.id,
                effective_date=effective_date,
                old_salary=Decimal(str(old)),
                new_salary=Decimal(str(new)),
            )
            session.add(row)
            session.flush()
            return row

        def holiday(self, day, name="Holiday", owner=None):
            row = HolidayModel(user_id=owner or user_id, date=day, name=name)
            session.add(row)
            session.flush()
            return row

        def unit_type(self, name, direction):
            row = UnitTypeModel(user_id=user_id, name=name, direction=direction)
            session.add(row)
            session.flush()
            return row

        def unit(self, employee, unit_type, amount, day):
            row = EmployeeUnitModel(
                user_id=user_id,
                employee_id=employee.id,
                unit_type=unit_type,
                amount=Decimal(str(amount)),
                date=day,
            )
            session.add(row)
            session.flush()
            return row

        def deferral(self, employee, month, amount):
            row = SalaryDeferralModel(
                user_id=user_id,
                employee_id=employee.id,
                month=month,
                deferred_amount=Decimal(str(amount)),
            )
            session.add(row)
            session.flush()
            return row

        def insurance(self, personal_id, amount, day):
            row = InsuranceRecordModel(
                user_id=user_id,
                personal_id=personal_id,
                amount=Decimal(str(amount)),
                date=day,
            )
            session.add(row)
            session.flush()
            return row

    return _Seed()


# =============================================================================
# Clock and config fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock():
    """Clock pinned to 2025-03-10 09:00 UTC."""
    return DeterministicClock(datetime(2025, 3, 10, 9, 0, tzinfo=UTC))


@pytest.fixture
def accrual_config() -> AccrualConfig:
    return AccrualConfig()
