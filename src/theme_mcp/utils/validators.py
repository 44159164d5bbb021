"""Validation utilities and parameter classes."""

import operator
import re
from collections.abc import Callable
from dataclasses import dataclass

from theme_mcp.analytics.models import Period

VALID_PERIODS = {p.value for p in Period}

# Theme ids look like "T_006"; allow the broader safe charset for forks of the data repo
_THEME_ID_PATTERN = re.compile(r"^[A-Za-z0-9_\-]{1,64}$")


def parse_period(value: "str | Period") -> Period:
    """
    Parse a period string case-insensitively.

    Raises:
        ValueError: If value is not one of 3D, 7D, 1M, YTD, 1Y, 3Y
    """
    if isinstance(value, Period):
        return value
    normalized = str(value).strip().upper()
    if normalized not in VALID_PERIODS:
        raise ValueError(f"Invalid period '{value}'. Must be one of: {sorted(VALID_PERIODS)}")
    return Period(normalized)


def validate_theme_id(theme_id: str) -> str:
    """
    Strip and validate a theme id.

    Raises:
        ValueError: If the id is empty or contains unsafe characters
    """
    tid = (theme_id or "").strip()
    if not _THEME_ID_PATTERN.match(tid):
        raise ValueError(f"Invalid theme id '{theme_id}'")
    return tid


@dataclass(frozen=True)
class ThemeParams:
    """Immutable theme request parameters. Used for cache key + fetch."""

    theme_id: str
    period: "str | Period" = Period.D7
    min_assets: int = 5

    def __post_init__(self) -> None:
        object.__setattr__(self, "theme_id", validate_theme_id(self.theme_id))
        object.__setattr__(self, "period", parse_period(self.period))
        if self.min_assets < 1:
            raise ValueError(f"Invalid min_assets {self.min_assets}. Must be >= 1")

    def to_uri(self) -> str:
        """Canonical URI of the underlying theme document."""
        return f"theme://{self.theme_id}"


def check_rule(
    value: float | None,
    threshold: float,
    comparator: Callable[[float, float], bool] = operator.gt,
) -> bool | None:
    """
    Check a rule with nullable boolean semantics.

    If value is None, returns None (not False).

    Args:
        value: The value to check (may be None)
        threshold: The threshold to compare against
        comparator: Comparison function (default: operator.gt)

    Returns:
        True/False if value is not None, None otherwise
    """
    if value is None:
        return None
    return comparator(value, threshold)
