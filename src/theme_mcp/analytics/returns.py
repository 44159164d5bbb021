"""Per-asset return extraction across heterogeneous metric field names.

Theme files are not standardized upstream: the same 7-day return can show up
as ret7d, return7d, r7d or a bare "7d" key, either as a fraction (0.12) or a
percent (12). This module resolves both ambiguities.
"""

from collections.abc import Mapping
from typing import Any

from theme_mcp.analytics.models import Period
from theme_mcp.utils.formatting import is_finite_number

# Candidate metric keys per period, highest priority first
RETURN_FIELD_ALIASES: dict[Period, tuple[str, ...]] = {
    Period.D3: ("ret3d", "return3d", "r3d", "3d"),
    Period.D7: ("ret7d", "return7d", "r7d", "7d"),
    Period.M1: ("ret1m", "return1m", "return30d", "ret30d", "r30d", "r1m", "30d"),
    Period.YTD: ("retYtd", "returnYtd", "ytd", "rYtd"),
    Period.Y1: ("ret1y", "return1y", "r1y", "1y"),
    Period.Y3: ("ret3y", "return3y", "r3y", "3y"),
}

# |v| at or below this is read as a fraction and scaled to percent.
# Known ambiguity: genuine percent values in [-1.5, 1.5] get scaled too.
FRACTION_THRESHOLD = 1.5


def normalize_to_pct(value: float) -> float:
    """Scale a fractional return to percent; leave percent values as-is."""
    return value * 100 if abs(value) <= FRACTION_THRESHOLD else value


def pick_raw_return(metrics: Mapping[str, Any] | None, period: Period) -> float | None:
    """
    First usable raw value among the period's aliases, before normalization.

    Non-numeric, boolean, NaN and infinite values are skipped.
    """
    if not metrics:
        return None
    for key in RETURN_FIELD_ALIASES[period]:
        value = metrics.get(key)
        if is_finite_number(value):
            return float(value)
    return None


def extract_return(metrics: Mapping[str, Any] | None, period: Period) -> float | None:
    """
    Extract one asset's return for a period, in percent.

    Args:
        metrics: The asset's metric bag (may be None)
        period: Period to extract

    Returns:
        Return in percent, or None when absent. Callers must exclude None
        from statistics rather than treat it as zero.
    """
    raw = pick_raw_return(metrics, period)
    if raw is None:
        return None
    return normalize_to_pct(raw)
