"""
Module: payroll_kernel.models.insurance
Responsibility: ORM persistence for imported insurance premium lines.
    Lines are matched to employees by ``personal_id``, not by key, because
    they arrive from the insurer's export.
Architecture position: Kernel > Models.  May import from db/base.py only.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from payroll_kernel.db.base import Base, UserScopedMixin


class InsuranceRecordModel(UserScopedMixin, Base):
    """One premium line from an insurer's list."""

    __tablename__ = "insurance_list"
    __table_args__ = (
        Index("idx_insurance_user_date", "user_id", "date"),
    )

    personal_id: Mapped[str] = mapped_column(String(32))
    amount: Mapped[Decimal]
    date: Mapped[date]
