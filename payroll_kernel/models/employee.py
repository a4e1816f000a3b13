"""
Module: payroll_kernel.models.employee
Responsibility: ORM persistence for employees and their salary change history.
Architecture position: Kernel > Models.  May import from db/base.py only.
    MUST NOT import from selectors/, domain/, or outer layers.

Invariants enforced:
    - Every employee belongs to one user (``user_id``).
    - ``salary`` is the current monthly salary; history lives in
      ``salary_changes`` rows, each pointing at its employee.
    - A null ``end_date`` means the employee is still employed.

Failure modes:
    - IntegrityError when a salary change references a missing employee.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from payroll_kernel.db.base import Base, UserScopedMixin


class EmployeeModel(UserScopedMixin, Base):
    """An employee on a user's payroll."""

    __tablename__ = "employees"

    first_name: Mapped[str] = mapped_column(String(100), default="")
    last_name: Mapped[str] = mapped_column(String(100), default="")
    start_date: Mapped[date]
    end_date: Mapped[date | None] = mapped_column(nullable=True)
    salary: Mapped[Decimal] = mapped_column(default=Decimal("0"))
    personal_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    position: Mapped[str | None] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<EmployeeModel {self.last_name}, {self.first_name}>"


class SalaryChangeModel(Base):
    """One salary change, effective from ``effective_date`` inclusive."""

    __tablename__ = "salary_changes"
    __table_args__ = (
        Index("idx_salary_change_employee_date", "employee_id", "effective_date"),
    )

    employee_id: Mapped[UUID] = mapped_column(ForeignKey("employees.id"))
    effective_date: Mapped[date]
    old_salary: Mapped[Decimal]
    new_salary: Mapped[Decimal]
