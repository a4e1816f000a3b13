"""
Module: payroll_kernel.models.calendar
Responsibility: ORM persistence for a user's public holidays.
Architecture position: Kernel > Models.  May import from db/base.py only.
"""

from datetime import date

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from payroll_kernel.db.base import Base, UserScopedMixin


class HolidayModel(UserScopedMixin, Base):
    """A non-working calendar day."""

    __tablename__ = "holidays"
    __table_args__ = (
        Index("idx_holiday_user_date", "user_id", "date"),
    )

    date: Mapped[date]
    name: Mapped[str] = mapped_column(String(200), default="")
