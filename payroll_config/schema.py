"""
Accrual configuration schema (``payroll_config.schema``).

Frozen dataclasses describing the tunable parts of the accrual engine.
Values come from YAML (see ``payroll_config.loader``); defaults here match
the shipped ``defaults/accrual.yaml``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from payroll_kernel.domain.records import AdjustmentDirection, AdjustmentTypeDef
from payroll_kernel.exceptions import ConfigurationError


@dataclass(frozen=True)
class AccrualConfig:
    """
    Configuration for the salary and trend reports.

    Attributes:
        unmapped_adjustment_direction: Direction applied to adjustment
            entries whose type has no definition (or an unknown direction).
        default_adjustment_types: Definitions every user gets; a user's own
            stored definition of the same name takes precedence.
        trend_default_months: Window used when the caller does not pass one.
        trend_max_workers: Thread count for computing trend months
            concurrently; ``None`` computes them sequentially.
        upcoming_holidays_limit: How many upcoming holidays the workforce
            summary lists.
        checksum: SHA-256 of the source document (empty for in-code configs).
    """

    unmapped_adjustment_direction: AdjustmentDirection = AdjustmentDirection.DEDUCTION
    default_adjustment_types: tuple[AdjustmentTypeDef, ...] = ()
    trend_default_months: int = 12
    trend_max_workers: int | None = None
    upcoming_holidays_limit: int = 5
    checksum: str = ""

    def __post_init__(self) -> None:
        if self.trend_default_months < 1:
            raise ConfigurationError(
                "trend_default_months", f"must be positive, got {self.trend_default_months}"
            )
        if self.trend_max_workers is not None and self.trend_max_workers < 1:
            raise ConfigurationError(
                "trend_max_workers", f"must be positive or null, got {self.trend_max_workers}"
            )
        if self.upcoming_holidays_limit < 0:
            raise ConfigurationError(
                "upcoming_holidays_limit",
                f"cannot be negative, got {self.upcoming_holidays_limit}",
            )

    def merged_adjustment_types(
        self,
        stored: Iterable[AdjustmentTypeDef],
    ) -> tuple[AdjustmentTypeDef, ...]:
        """Defaults first, then the user's stored definitions (which win)."""
        return tuple(self.default_adjustment_types) + tuple(stored)
