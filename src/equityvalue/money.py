"""Minor-unit (cents) conversion and display."""

from __future__ import annotations

from decimal import Decimal

import numpy as np

MINOR_UNITS_PER_MAJOR = 100


def to_minor_units(
    amount: float | int | Decimal | str, single_precision: bool = False,
) -> int:
    """Convert a decimal currency amount to integer minor units.

    Scales by 100 and truncates toward zero. The arithmetic is binary
    floating point, so precision matters: in double precision ``0.29 * 100``
    is ``28.999...`` and gives ``28``; in single precision the product rounds
    to ``29.0`` and gives ``29``.

    Args:
        amount: Decimal currency amount.
        single_precision: Scale as a 32-bit float (grant terms) instead of
            a 64-bit float (share prices).
    """
    if single_precision:
        return int(np.float32(float(amount)) * np.float32(MINOR_UNITS_PER_MAJOR))
    return int(float(amount) * MINOR_UNITS_PER_MAJOR)


def format_currency(minor: int) -> str:
    """Render minor units as ``integer.fractional`` with two digits.

    >>> format_currency(1)
    '0.01'
    >>> format_currency(-150)
    '-1.50'
    """
    sign = "-" if minor < 0 else ""
    major, cents = divmod(abs(minor), MINOR_UNITS_PER_MAJOR)
    return f"{sign}{major}.{cents:02d}"
