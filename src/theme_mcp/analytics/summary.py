"""Theme-level return summary: core (median), momentum (top bucket), breadth."""

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from theme_mcp.analytics.models import (
    AssetObservation,
    FailureReason,
    Period,
    ThemeReturnFailure,
    ThemeReturnSuccess,
    ThemeReturnSummary,
    ThemeSnapshot,
    to_observations,
)
from theme_mcp.analytics.returns import extract_return
from theme_mcp.utils.formatting import fmt_int, fmt_pct
from theme_mcp.utils.stats import median, top_mean

logger = logging.getLogger(__name__)

DEFAULT_MIN_ASSETS = 5

# Top bucket: 30% of valid returns once there are at least 10, else the top 2
TOP_BUCKET_SHARE = 0.3
TOP_BUCKET_MIN_SAMPLE = 10
TOP_BUCKET_SMALL_N = 2

TONE_BROAD_STRENGTH = "broad-based strength"
TONE_LEADER_DRIVEN = "narrow/leader-driven"
TONE_BROAD_WEAKNESS = "broad weakness"
TONE_NEUTRAL = "mixed/neutral"


def top_bucket_size(valid_n: int) -> int:
    """Number of leading returns averaged into momentum."""
    if valid_n >= TOP_BUCKET_MIN_SAMPLE:
        size = math.ceil(valid_n * TOP_BUCKET_SHARE)
    else:
        size = TOP_BUCKET_SMALL_N
    return max(1, min(size, valid_n))


def classify_tone(core_pct: float, momentum_pct: float, breadth_pct: float) -> str:
    """Qualitative tone from the three statistics. First matching rule wins."""
    if breadth_pct >= 70 and core_pct > 0:
        return TONE_BROAD_STRENGTH
    if breadth_pct < 45 and momentum_pct > max(5, core_pct + 5):
        return TONE_LEADER_DRIVEN
    if core_pct < 0 and breadth_pct < 50:
        return TONE_BROAD_WEAKNESS
    return TONE_NEUTRAL


def summarize(
    nodes: ThemeSnapshot | Iterable[AssetObservation | Mapping[str, Any]] | None,
    period: Period,
    min_assets: int = DEFAULT_MIN_ASSETS,
) -> ThemeReturnSummary:
    """
    Summarize a theme's returns for one period.

    Args:
        nodes: Theme snapshot, observations or raw node dicts
        period: Period to summarize
        min_assets: Minimum ASSET node count (default: 5)

    Returns:
        ThemeReturnSuccess, or ThemeReturnFailure with MIN_ASSET_NOT_MET when
        the theme has too few assets, NO_RETURN_DATA when none of them carries
        a usable return for the period
    """
    assets = [n for n in to_observations(nodes) if n.is_asset]
    returns = [r for r in (extract_return(a.metrics, period) for a in assets) if r is not None]

    asset_count = len(assets)
    valid_n = len(returns)

    if asset_count < min_assets:
        logger.debug(f"summarize({period.value}): {asset_count} assets < min {min_assets}")
        return ThemeReturnFailure(
            asset_count=asset_count,
            valid_return_count=valid_n,
            reason=FailureReason.MIN_ASSET_NOT_MET,
            sentence=(
                "This theme does not yet have enough constituents to represent a return "
                f"(at least {min_assets} ASSET nodes required)."
            ),
        )

    # Never report 0% for a theme with no data
    if valid_n == 0:
        logger.debug(f"summarize({period.value}): no return data across {asset_count} assets")
        return ThemeReturnFailure(
            asset_count=asset_count,
            valid_return_count=0,
            reason=FailureReason.NO_RETURN_DATA,
            sentence=(
                f"({period.value} basis) The theme has {asset_count} ASSET nodes, "
                "but no return data is available for this period, "
                "so a return cannot be calculated."
            ),
        )

    core = median(returns)
    momentum = top_mean(returns, top_bucket_size(valid_n))
    breadth = sum(1 for r in returns if r > 0) / valid_n * 100
    tone = classify_tone(core, momentum, breadth)

    sentence = (
        f"({period.value} basis) This theme shows a {tone} pattern. "
        f"Median return (Core) {fmt_pct(core)} / "
        f"Top bucket (Momentum) {fmt_pct(momentum)} / "
        f"Share rising (Breadth) {fmt_int(breadth)}%."
    )

    return ThemeReturnSuccess(
        asset_count=asset_count,
        valid_return_count=valid_n,
        core_median_pct=core,
        momentum_top_pct=momentum,
        breadth_pct=breadth,
        tone=tone,
        sentence=sentence,
    )
