"""Small order-statistic helpers shared by the analytics modules.

These work on plain float sequences. Empty inputs return 0.0 instead of
raising so callers can gate on sample size themselves.
"""

import math
from collections.abc import Sequence


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def median(values: Sequence[float]) -> float:
    """
    Median with the even-count average of the two middle values.

    Args:
        values: Unsorted values

    Returns:
        Median, or 0.0 for an empty sequence
    """
    ordered = sorted(values)
    n = len(ordered)
    if n == 0:
        return 0.0
    mid = n // 2
    if n % 2 == 1:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def percentile(sorted_asc: Sequence[float], p: float) -> float:
    """
    Percentile by linear interpolation between order statistics.

    index = (n - 1) * p, interpolated between floor and ceil.

    Args:
        sorted_asc: Values already sorted ascending
        p: Quantile in [0, 1]

    Returns:
        Interpolated value, or 0.0 for an empty sequence
    """
    if not sorted_asc:
        return 0.0
    idx = (len(sorted_asc) - 1) * p
    lo = math.floor(idx)
    hi = math.ceil(idx)
    if lo == hi:
        return sorted_asc[lo]
    w = idx - lo
    return sorted_asc[lo] * (1 - w) + sorted_asc[hi] * w


def top_mean(values: Sequence[float], count: int) -> float:
    """Mean of the `count` largest values (count clamped to [1, len])."""
    if not values:
        return 0.0
    n = int(clamp(count, 1, len(values)))
    return mean(sorted(values, reverse=True)[:n])
