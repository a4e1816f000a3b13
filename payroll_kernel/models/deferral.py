"""
Module: payroll_kernel.models.deferral
Responsibility: ORM persistence for salary deferrals.  A deferral row for
    month M holds back the employee's accrued salary in M; the amount is paid
    out as carry-over in M + 1.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - At most one deferral per (user, employee, month).
"""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from payroll_kernel.db.base import Base, UserScopedMixin


class SalaryDeferralModel(UserScopedMixin, Base):
    __tablename__ = "salary_deferrals"
    __table_args__ = (
        UniqueConstraint("user_id", "employee_id", "month", name="uq_salary_deferral_month"),
    )

    employee_id: Mapped[UUID] = mapped_column(ForeignKey("employees.id"))
    month: Mapped[str] = mapped_column(String(7))
    deferred_amount: Mapped[Decimal]
