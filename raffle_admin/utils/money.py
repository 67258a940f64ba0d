"""Currency amounts as two-place decimals."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


def to_money(value: Decimal | float | int | str | None) -> Decimal:
    """Convert a number to a Decimal rounded to cents.

    Floats go through ``str`` first so 0.1 becomes Decimal("0.10"), not the
    binary approximation.
    """

    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)
