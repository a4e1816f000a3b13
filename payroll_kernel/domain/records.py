"""
Payroll input records (``payroll_kernel.domain.records``).

Responsibility
--------------
Frozen dataclass value objects for everything the accrual engines consume:
employees, salary changes, holidays, adjustment entries ("units"),
adjustment type definitions, salary deferrals and insurance records, plus
the ``PayrollSnapshot`` that bundles one user's records for a report run.

Architecture position
---------------------
**Kernel domain layer** -- pure data definitions with ZERO I/O.  Built by
the selector layer (from ORM rows) or directly by callers/tests (from
plain dicts via ``from_dict``).

Invariants enforced
-------------------
* All records are ``frozen=True``.
* All monetary fields are ``Decimal``; dates are ISO ``YYYY-MM-DD`` strings.
* Adjustment amounts are non-negative.

Failure modes
-------------
* ``ValueError`` on unparseable dates or negative adjustment amounts.
* Unknown adjustment direction strings are NOT an error here; they resolve
  to ``None`` and the aggregator applies the configured default.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Self

from payroll_kernel.domain.values import (
    ZERO,
    to_decimal,
    to_iso_date,
    to_optional_iso_date,
)


class AdjustmentDirection(str, Enum):
    """Which side of net salary an adjustment type lands on."""

    ADDITION = "addition"
    DEDUCTION = "deduction"

    @classmethod
    def coerce(cls, value: object) -> AdjustmentDirection | None:
        """Map a stored direction string to a member, or ``None`` if unknown."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None


@dataclass(frozen=True)
class Employee:
    """An employee as seen by the accrual engine."""

    id: str
    start_date: str
    salary: Decimal = ZERO
    end_date: str | None = None
    personal_id: str | None = None
    first_name: str = ""
    last_name: str = ""
    position: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=str(data["id"]),
            start_date=to_iso_date(data["start_date"]),
            salary=to_decimal(data.get("salary")),
            end_date=to_optional_iso_date(data.get("end_date")),
            personal_id=(
                str(data["personal_id"]) if data.get("personal_id") not in (None, "") else None
            ),
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            position=data.get("position"),
        )


@dataclass(frozen=True)
class SalaryChange:
    """From ``effective_date`` onward the employee earns ``new_salary``."""

    employee_id: str
    effective_date: str
    old_salary: Decimal
    new_salary: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            employee_id=str(data["employee_id"]),
            effective_date=to_iso_date(data["effective_date"]),
            old_salary=to_decimal(data.get("old_salary")),
            new_salary=to_decimal(data.get("new_salary")),
        )

    @property
    def day(self) -> int:
        return int(self.effective_date[8:10])


@dataclass(frozen=True)
class Holiday:
    """A non-working day, excluded regardless of weekday."""

    date: str
    name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(date=to_iso_date(data["date"]), name=data.get("name") or "")


@dataclass(frozen=True)
class AdjustmentEntry:
    """
    A per-employee addition or deduction ("unit").

    Applies to every month whose last day is on or after ``date``.
    """

    employee_id: str
    type: str
    amount: Decimal
    date: str

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(
                f"Adjustment amount cannot be negative: {self.amount} "
                f"(employee {self.employee_id}, type {self.type!r})"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            employee_id=str(data["employee_id"]),
            type=str(data.get("type") or ""),
            amount=to_decimal(data.get("amount")),
            date=to_iso_date(data["date"]),
        )


@dataclass(frozen=True)
class AdjustmentTypeDef:
    """Maps an adjustment type name to its direction."""

    name: str
    direction: AdjustmentDirection | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            name=str(data["name"]).strip(),
            direction=AdjustmentDirection.coerce(data.get("direction")),
        )


@dataclass(frozen=True)
class SalaryDeferral:
    """Accrued salary for ``month`` is withheld and paid the month after."""

    employee_id: str
    month: str
    deferred_amount: Decimal
    id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            employee_id=str(data["employee_id"]),
            month=str(data["month"]),
            deferred_amount=to_decimal(data.get("deferred_amount")),
            id=str(data["id"]) if data.get("id") is not None else None,
        )


@dataclass(frozen=True)
class InsuranceRecord:
    """Insurance premium for one insured person, matched by ``personal_id``."""

    personal_id: str
    amount: Decimal
    date: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            personal_id=str(data.get("personal_id") or "").strip(),
            amount=to_decimal(data.get("amount")),
            date=to_iso_date(data["date"]),
        )


@dataclass(frozen=True)
class PayrollSnapshot:
    """
    Every input one user's reports need, fetched once.

    The trend report filters this snapshot per month; it never refetches.
    All collections default to empty.
    """

    employees: tuple[Employee, ...] = ()
    salary_changes: tuple[SalaryChange, ...] = ()
    holidays: tuple[Holiday, ...] = ()
    adjustments: tuple[AdjustmentEntry, ...] = ()
    adjustment_types: tuple[AdjustmentTypeDef, ...] = ()
    deferrals: tuple[SalaryDeferral, ...] = ()
    insurance: tuple[InsuranceRecord, ...] = ()
    _changes_by_employee: dict[str, tuple[SalaryChange, ...]] = field(
        default=None, init=False, repr=False, compare=False,
    )
    _adjustments_by_employee: dict[str, tuple[AdjustmentEntry, ...]] = field(
        default=None, init=False, repr=False, compare=False,
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "_changes_by_employee", _group(self.salary_changes))
        object.__setattr__(self, "_adjustments_by_employee", _group(self.adjustments))

    @classmethod
    def from_dicts(
        cls,
        *,
        employees: list[dict[str, Any]] | None = None,
        salary_changes: list[dict[str, Any]] | None = None,
        holidays: list[dict[str, Any]] | None = None,
        adjustments: list[dict[str, Any]] | None = None,
        adjustment_types: list[dict[str, Any]] | None = None,
        deferrals: list[dict[str, Any]] | None = None,
        insurance: list[dict[str, Any]] | None = None,
    ) -> Self:
        """Build a snapshot from raw record dicts; ``None`` means empty."""
        return cls(
            employees=tuple(Employee.from_dict(d) for d in employees or ()),
            salary_changes=tuple(SalaryChange.from_dict(d) for d in salary_changes or ()),
            holidays=tuple(Holiday.from_dict(d) for d in holidays or ()),
            adjustments=tuple(AdjustmentEntry.from_dict(d) for d in adjustments or ()),
            adjustment_types=tuple(AdjustmentTypeDef.from_dict(d) for d in adjustment_types or ()),
            deferrals=tuple(SalaryDeferral.from_dict(d) for d in deferrals or ()),
            insurance=tuple(InsuranceRecord.from_dict(d) for d in insurance or ()),
        )

    def changes_for(self, employee_id: str) -> tuple[SalaryChange, ...]:
        return self._changes_by_employee.get(employee_id, ())

    def adjustments_for(self, employee_id: str) -> tuple[AdjustmentEntry, ...]:
        return self._adjustments_by_employee.get(employee_id, ())


def _group(records) -> dict[str, tuple]:
    grouped: dict[str, list] = {}
    for record in records:
        grouped.setdefault(record.employee_id, []).append(record)
    return {key: tuple(value) for key, value in grouped.items()}
