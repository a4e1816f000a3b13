"""
Module: payroll_kernel.models.adjustment
Responsibility: ORM persistence for salary adjustment entries ("employee
    units") and the user's adjustment type definitions.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - ``UnitTypeModel.direction`` is stored as free text.  Only
      ``addition`` and ``deduction`` are meaningful; the engines treat
      anything else as unmapped.
    - ``EmployeeUnitModel.unit_type`` references a type by name, not by key,
      so a deleted or renamed type leaves entries unmapped rather than
      orphaned.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from payroll_kernel.db.base import Base, UserScopedMixin


class UnitTypeModel(UserScopedMixin, Base):
    """A named adjustment type and whether it adds to or deducts from pay."""

    __tablename__ = "unit_types"

    name: Mapped[str] = mapped_column(String(100))
    direction: Mapped[str] = mapped_column(String(20), default="deduction")


class EmployeeUnitModel(UserScopedMixin, Base):
    """A dated adjustment amount for one employee."""

    __tablename__ = "employee_units"
    __table_args__ = (
        Index("idx_employee_unit_user_date", "user_id", "date"),
    )

    employee_id: Mapped[UUID] = mapped_column(ForeignKey("employees.id"))
    unit_type: Mapped[str] = mapped_column(String(100))
    amount: Mapped[Decimal]
    date: Mapped[date]
