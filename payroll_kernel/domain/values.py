"""
Money and date value helpers shared by records, engines and reports.

Invariants enforced:
    - No floats in arithmetic.  ``to_decimal`` converts through ``str`` so a
      float coming from a JSON payload keeps its printed value.
    - ``round_money`` is the only rounding function used for surfaced
      figures.  Halves round towards positive infinity (2.345 -> 2.35,
      -2.345 -> -2.34), 2 places by default.
    - Dates inside the engines are ISO ``YYYY-MM-DD`` strings.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation

ZERO = Decimal("0")
MONEY_DECIMAL_PLACES = 2
DEFAULT_ROUNDING: str | None = None


def to_decimal(value: object) -> Decimal:
    """
    Coerce a stored amount to ``Decimal``.

    ``None`` and empty strings are treated as zero (absent data contributes
    nothing).  Unparseable strings also map to zero, matching how the
    stored figures are read elsewhere in the application.
    """
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Boolean is not a monetary amount")
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        return ZERO


def round_money(
    value: Decimal,
    decimal_places: int = MONEY_DECIMAL_PLACES,
    rounding: str | None = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Round a monetary value to ``decimal_places`` places.

    Without an explicit ``rounding`` mode a half is rounded up for positive
    values and towards zero for negative ones, so every half moves towards
    positive infinity.

    Preconditions: value is a Decimal.
    Postconditions: Returns value quantized to the requested places.
    """
    if rounding is None:
        rounding = ROUND_HALF_UP if value >= 0 else ROUND_HALF_DOWN
    quantize_str = "0." + "0" * decimal_places
    return value.quantize(Decimal(quantize_str), rounding=rounding)


def to_iso_date(value: object) -> str:
    """
    Normalize a date-like value to an ISO ``YYYY-MM-DD`` string.

    Accepts ``date``/``datetime`` objects and strings; timestamps such as
    ``2025-01-15T00:00:00Z`` are cut to their date part without any time
    zone conversion.

    Raises:
        ValueError: if the value is not a recognisable date.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        candidate = value.strip()[:10]
        # Validates the calendar date; the string itself is what we keep.
        date.fromisoformat(candidate)
        return candidate
    raise ValueError(f"Cannot interpret {value!r} as a date")


def to_optional_iso_date(value: object) -> str | None:
    """Like ``to_iso_date`` but ``None``/empty stay ``None``."""
    if value is None or value == "":
        return None
    return to_iso_date(value)
