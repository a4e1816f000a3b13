"""
payroll_engines.adjustments -- Addition/deduction totals for an employee-month.

Responsibility:
    Sum an employee's adjustment entries ("units") into total additions and
    total deductions for a target month, using the type-name -> direction
    mapping defined by the user.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - An entry applies to a month iff ``entry.date <= month_end`` (ISO
      string comparison).  There is no lower bound: an entry keeps applying
      to every later month until it is removed at the source.
    - Direction is looked up by exact type name.  A type that is unmapped,
      or mapped to an unknown direction, falls back to ``unmapped_direction``
      (deduction unless configured otherwise).  Never raises.
    - Totals are exact Decimal sums; rounding happens when net salary is
      surfaced, not here.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal

from payroll_kernel.domain.periods import MonthPeriod
from payroll_kernel.domain.records import (
    AdjustmentDirection,
    AdjustmentEntry,
    AdjustmentTypeDef,
)
from payroll_kernel.domain.values import ZERO
from payroll_kernel.logging_config import get_logger

logger = get_logger("engines.adjustments")


@dataclass(frozen=True)
class AdjustmentTotals:
    """Additions and deductions applying to one employee in one month."""

    total_additions: Decimal
    total_deductions: Decimal
    entries: tuple[AdjustmentEntry, ...]

    @property
    def net_effect(self) -> Decimal:
        return self.total_additions - self.total_deductions


EMPTY_TOTALS = AdjustmentTotals(ZERO, ZERO, ())


def build_direction_map(
    type_defs: Iterable[AdjustmentTypeDef],
) -> dict[str, AdjustmentDirection | None]:
    """Type name -> direction; later definitions of the same name win."""
    return {d.name: d.direction for d in type_defs}


def resolve_direction(
    type_name: str,
    directions: Mapping[str, AdjustmentDirection | None],
    unmapped_direction: AdjustmentDirection = AdjustmentDirection.DEDUCTION,
) -> AdjustmentDirection:
    """Direction of ``type_name``, defaulting for unmapped/unknown types."""
    direction = directions.get(type_name)
    return direction if direction is not None else unmapped_direction


def aggregate_adjustments(
    entries: Iterable[AdjustmentEntry],
    directions: Mapping[str, AdjustmentDirection | None],
    period: MonthPeriod,
    unmapped_direction: AdjustmentDirection = AdjustmentDirection.DEDUCTION,
) -> AdjustmentTotals:
    """
    Total an employee's additions and deductions for ``period``.

    Args:
        entries: The employee's adjustment entries (any dates).
        directions: Mapping from ``build_direction_map``.
        period: Target month; only entries dated on or before its last day count.
        unmapped_direction: Direction for types absent from ``directions``.
    """
    month_end = period.end_iso
    additions = ZERO
    deductions = ZERO
    applied: list[AdjustmentEntry] = []
    unmapped: set[str] = set()

    for entry in entries:
        if entry.date > month_end:
            continue
        applied.append(entry)
        if directions.get(entry.type) is None:
            unmapped.add(entry.type)
        if resolve_direction(entry.type, directions, unmapped_direction) is AdjustmentDirection.ADDITION:
            additions += entry.amount
        else:
            deductions += entry.amount

    if unmapped:
        logger.debug("adjustment_types_unmapped", extra={
            "month": period.key,
            "types": sorted(unmapped),
            "applied_direction": unmapped_direction.value,
        })

    return AdjustmentTotals(
        total_additions=additions,
        total_deductions=deductions,
        entries=tuple(applied),
    )
