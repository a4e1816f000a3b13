"""
Configuration Loader (``payroll_config.loader``).

Responsibility
--------------
Loads an accrual YAML document and parses it into the typed
``payroll_config.schema.AccrualConfig`` dataclass.  Runtime callers go
through ``payroll_config.get_active_config()`` rather than calling these
functions directly.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* Adjustment directions must be ``addition`` or ``deduction``; anything
  else in the configuration file is rejected (unlike stored user data,
  where an unknown direction silently falls back to the default).
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Adjustment type without ``name``  -> ``KeyError`` propagates.
* Bad direction  -> ``InvalidAdjustmentDirectionError``.
* Out-of-range numbers  -> ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from payroll_config.schema import AccrualConfig
from payroll_kernel.domain.records import AdjustmentDirection, AdjustmentTypeDef
from payroll_kernel.exceptions import ConfigurationError, InvalidAdjustmentDirectionError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_direction(type_name: str, value: Any) -> AdjustmentDirection:
    """Parse a configured direction, rejecting unknown values."""
    direction = AdjustmentDirection.coerce(value)
    if direction is None:
        raise InvalidAdjustmentDirectionError(type_name, value)
    return direction


def parse_adjustment_type(data: dict[str, Any]) -> AdjustmentTypeDef:
    """Parse one ``adjustment_types`` entry."""
    name = str(data["name"]).strip()
    return AdjustmentTypeDef(name=name, direction=parse_direction(name, data.get("direction")))


def _optional_int(
    data: dict[str, Any], key: str, default: int | None, nullable: bool = False,
) -> int | None:
    if key not in data:
        return default
    value = data[key]
    if value is None and nullable:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(key, f"must be an integer, got {value!r}")
    return value


def parse_accrual_config(data: dict[str, Any], checksum: str = "") -> AccrualConfig:
    """
    Parse an ``AccrualConfig`` from the top-level ``accrual`` mapping.

    Accepts either the document root or its ``accrual`` section.
    """
    section = data.get("accrual", data) or {}

    unmapped = section.get("unmapped_adjustment_direction", "deduction")
    trend = section.get("trend", {}) or {}
    summary = section.get("workforce_summary", {}) or {}

    defaults = AccrualConfig()
    return AccrualConfig(
        unmapped_adjustment_direction=parse_direction("<unmapped>", unmapped),
        default_adjustment_types=tuple(
            parse_adjustment_type(item) for item in section.get("adjustment_types", []) or []
        ),
        trend_default_months=_optional_int(trend, "default_months", defaults.trend_default_months),
        trend_max_workers=_optional_int(trend, "max_workers", defaults.trend_max_workers, nullable=True),
        upcoming_holidays_limit=_optional_int(
            summary, "upcoming_holidays_limit", defaults.upcoming_holidays_limit
        ),
        checksum=checksum,
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
