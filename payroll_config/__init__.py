"""
payroll_config -- single public entrypoint for accrual configuration.

Responsibility:
    Provides the way to obtain configuration at runtime through
    ``get_active_config()``.  Returns a frozen ``AccrualConfig``.  YAML
    loading is internal tooling and not called by the report layer.

Architecture position:
    Configuration -- sits above ``payroll_kernel`` and below
    ``payroll_services``.  Engines MUST NOT import from ``payroll_config``;
    the report layer passes the relevant values in as plain parameters.

Failure modes:
    - ``FileNotFoundError`` -- the requested configuration file is missing.
    - ``yaml.YAMLError`` -- the file is not valid YAML.
    - ``ConfigurationError`` / ``InvalidAdjustmentDirectionError`` -- the
      document parses but holds invalid values.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``PAYROLL_CONFIG_TRACE`` log entry with the source path and checksum,
    tying each report run to the exact configuration that governed it.
"""

from __future__ import annotations

from pathlib import Path

from payroll_config.loader import compute_checksum, load_yaml_file, parse_accrual_config
from payroll_config.schema import AccrualConfig
from payroll_kernel.logging_config import get_logger

_logger = get_logger("config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults" / "accrual.yaml"


def get_active_config(path: Path | str | None = None) -> AccrualConfig:
    """Load, validate and return the accrual configuration.

    Args:
        path: YAML file to load.  Defaults to the packaged
            ``defaults/accrual.yaml``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If a value is out of range or a direction is
            not ``addition``/``deduction``.
    """
    source = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    data = load_yaml_file(source)
    checksum = compute_checksum(data)
    config = parse_accrual_config(data, checksum=checksum)

    _logger.info(
        "PAYROLL_CONFIG_TRACE",
        extra={
            "trace_type": "PAYROLL_CONFIG_TRACE",
            "source": str(source),
            "checksum": checksum,
            "adjustment_type_count": len(config.default_adjustment_types),
            "unmapped_adjustment_direction": config.unmapped_adjustment_direction.value,
            "trend_default_months": config.trend_default_months,
        },
    )
    return config


__all__ = [
    "AccrualConfig",
    "DEFAULT_CONFIG_PATH",
    "get_active_config",
]
