"""
rounding.py – Explicit "round half up" used by every engine result.

Binary floats cannot represent most two-decimal values exactly, so
``round(2.675, 2)`` gives 2.67.  All engine arithmetic is therefore carried
out on ``Decimal`` values built from the shortest ``repr`` of each float and
quantised with ``ROUND_HALF_UP`` (half-way cases move away from zero):

    >>> round_half_up(2.675, 2)
    2.68
    >>> round_half_up(-0.005, 2)
    -0.01
"""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal, localcontext

from co2_calculator.exceptions import InvalidInputError

# Wide enough that products/quotients of two floats never lose digits
# before the final quantise step.
ENGINE_PRECISION = 60

ENGINE_CONTEXT = Context(prec=ENGINE_PRECISION, rounding=ROUND_HALF_UP)


def to_decimal(value: float | int | Decimal) -> Decimal:
    """
    Convert *value* to ``Decimal`` via its shortest string form.

    ``Decimal(0.1)`` would carry the binary expansion of the float
    (0.1000000000000000055…); ``Decimal("0.1")`` is what the caller typed.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"Expected a number, got {type(value).__name__}")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidInputError(f"Expected a finite number, got {value!r}")
    return Decimal(repr(value)) if isinstance(value, float) else Decimal(value)


def round_decimal(value: float | int | Decimal, places: int) -> Decimal:
    """Quantise *value* to *places* decimals, half-up, and return a ``Decimal``."""
    d = to_decimal(value)
    if not d.is_finite():
        raise InvalidInputError(f"Expected a finite number, got {value!r}")
    exponent = Decimal(1).scaleb(-places)
    with localcontext(ENGINE_CONTEXT) as ctx:
        # Very large magnitudes need more digits than the default context
        ctx.prec = max(ctx.prec, d.adjusted() + places + 2)
        result = d.quantize(exponent, rounding=ROUND_HALF_UP)
    # -0.00 → 0.00
    return result if result else abs(result)


def round_half_up(value: float | int | Decimal, places: int = 2) -> float:
    """Round *value* half-up to *places* decimals and return a float."""
    return float(round_decimal(value, places))
