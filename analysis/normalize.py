"""Numeric normalization for aggregate records.

Records arrive from the data source with full-precision floats and the odd
null. Charts display two fractional digits and treat missing values as zero,
so every record is normalized once before it reaches layout or rendering.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Final

from .dto import Record

DECIMAL_PLACES: Final[int] = 2

_QUANTUM: Final[Decimal] = Decimal(1).scaleb(-DECIMAL_PLACES)


def round_value(value: int | float | Decimal) -> int | float | Decimal:
    """Round a numeric value to two fractional digits.

    Ties are resolved half-up (away from zero) on the exact binary value of a
    float, so `0.125` becomes `0.13` while `1.005` (stored as 1.00499...)
    becomes `1.0`. Integers are returned unchanged and non-finite values pass
    through. Precision grows with the magnitude, so large values never fail.

    Args:
        value: Numeric value to round.

    Returns:
        The rounded value, preserving the input's numeric type.
    """

    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return value
        return float(_quantize(Decimal(value)))
    if not value.is_finite():
        return value
    return _quantize(value)


def _quantize(value: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + DECIMAL_PLACES + 2)
        ctx.Emax = max(ctx.Emax, value.adjusted())
        return value.quantize(_QUANTUM, rounding=ROUND_HALF_UP)


def normalize_value(value: object) -> object:
    """Normalize a single field value (round numbers, zero-fill nulls)."""

    if value is None:
        return 0
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return round_value(value)
    return value


def normalize_record(record: Record) -> dict[str, object]:
    """Return a normalized copy of a record.

    Args:
        record: Mapping of field name to value. It is never mutated.

    Returns:
        A new dict with numeric values rounded to two decimals and `None`
        values replaced by `0`. Strings (including numeric-looking ones) and
        booleans are passed through unchanged.
    """

    return {key: normalize_value(value) for key, value in record.items()}


def normalize_records(records: Iterable[Record]) -> tuple[dict[str, object], ...]:
    """Normalize every record, preserving order."""

    return tuple(normalize_record(record) for record in records)
