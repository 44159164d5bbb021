"""Display formatting for percentages, percentage points and counts.

Formatting contract:
1. Percentages: 2 decimals, explicit "+" for positive ("+3.45%", "-1.20%", "0.00%")
2. Percentage-point deltas: same rule with a "%p" suffix
3. Integer displays (breadth, scores): rounded, no sign
4. Integer deltas: explicit "+" for positive
5. Missing or non-finite values render as PLACEHOLDER

Rounding is half-up on the exact binary value of the float, so 0.125 renders
as "0.13" and 62.5 as "63". A value that rounds to negative zero renders
without the sign.
"""

import math
import numbers
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

PLACEHOLDER = "—"


def is_finite_number(value: Any) -> bool:
    """True for real, finite numbers. Booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(float(value))


def round_half_up(value: float, digits: int = 0) -> str:
    """Fixed-point text of value with half-up rounding."""
    exact = Decimal(float(value))
    quant = Decimal(1).scaleb(-digits)
    # Precision must cover every integer digit plus the requested decimals
    with localcontext() as ctx:
        ctx.prec = max(28, exact.adjusted() + digits + 2)
        text = str(exact.quantize(quant, rounding=ROUND_HALF_UP))
    if text.startswith("-") and Decimal(text) == 0:
        text = text[1:]
    return text


def _signed(value: float, digits: int) -> str:
    sign = "+" if value > 0 else ""
    return f"{sign}{round_half_up(value, digits)}"


def fmt_pct(value: float | None, digits: int = 2) -> str:
    """Format a percent value: "+3.45%"."""
    if not is_finite_number(value):
        return PLACEHOLDER
    return f"{_signed(value, digits)}%"


def fmt_pp(value: float | None, digits: int = 2) -> str:
    """Format a percentage-point delta: "+1.25%p"."""
    if not is_finite_number(value):
        return PLACEHOLDER
    return f"{_signed(value, digits)}%p"


def fmt_int(value: float | None) -> str:
    """Format an unsigned integer display such as breadth or a score."""
    if not is_finite_number(value):
        return PLACEHOLDER
    return round_half_up(value, 0)


def fmt_int_delta(value: float | None) -> str:
    """Format a signed integer delta: "+3", "-2", "0"."""
    if not is_finite_number(value):
        return PLACEHOLDER
    return _signed(value, 0)
