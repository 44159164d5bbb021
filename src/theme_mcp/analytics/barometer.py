"""Theme barometer: health, momentum, diversification, volatility, hot/cold.

Scoring rules:
- Tail threshold: |return| >= 15%
- Hot/Cold: health and momentum both >= 60 (HOT) or both <= 40 (COLD)
- Diversification: inverse normalized Herfindahl index over |return| shares,
  with a concentration warning below 45
- Momentum blend: 0.5 * avg 7D + 0.3 * avg 1M + 0.2 * avg 1Y
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from theme_mcp.analytics.models import (
    AssetObservation,
    BarometerResult,
    HotCold,
    Period,
    ThemeSnapshot,
    VolatilityTier,
    to_observations,
)
from theme_mcp.analytics.returns import extract_return
from theme_mcp.analytics.sentence import ClauseBuilder
from theme_mcp.utils.stats import clamp, mean, percentile

logger = logging.getLogger(__name__)

MIN_SAMPLE = 5
TAIL_THRESHOLD_PCT = 15.0
BIAS_WARNING_BELOW = 45.0
HOT_AT_OR_ABOVE = 60.0
COLD_AT_OR_BELOW = 40.0
MOMENTUM_WEIGHTS: dict[Period, float] = {Period.D7: 0.5, Period.M1: 0.3, Period.Y1: 0.2}
LEADER_COUNT = 2


@dataclass(frozen=True)
class _AssetReturns:
    name: str
    current: float | None
    by_period: dict[Period, float | None]


def _collect(assets: list[AssetObservation], period: Period) -> list[_AssetReturns]:
    return [
        _AssetReturns(
            name=a.name,
            current=extract_return(a.metrics, period),
            by_period={p: extract_return(a.metrics, p) for p in MOMENTUM_WEIGHTS},
        )
        for a in assets
    ]


def health_score(avg_pct: float, positive_fraction: float, gap: float) -> float:
    """Health in [0, 100]: average return and breadth up, dispersion down."""
    return clamp(50 + 2.0 * avg_pct + 30 * (positive_fraction - 0.5) - 0.3 * gap, 0, 100)


def diversification_score(returns: list[float]) -> float:
    """
    Diversification in [0, 100] from an |return|-weighted Herfindahl index.

    0 means one asset carries all the weight, 100 means equal weights.
    A zero total weight falls back to uniform shares.
    """
    n = len(returns)
    if n == 0:
        return 0.0
    if n == 1:
        # hhi is 1 by construction and the normalization is undefined
        return 0.0
    weights = [abs(r) for r in returns]
    total = sum(weights)
    shares = [w / total for w in weights] if total > 0 else [1 / n] * n
    hhi = sum(s * s for s in shares)
    min_hhi = 1 / n
    hhi_norm = (hhi - min_hhi) / (1 - min_hhi)
    return clamp(100 * (1 - hhi_norm), 0, 100)


def volatility_tier(gap: float, tail_ratio: float) -> VolatilityTier:
    """GREEN when tight and tail-light, RED when wide and tail-heavy."""
    if gap < 10 and tail_ratio < 0.15:
        return VolatilityTier.GREEN
    if gap < 20 or tail_ratio < 0.3:
        return VolatilityTier.YELLOW
    return VolatilityTier.RED


def momentum_score(rows: list[_AssetReturns]) -> float:
    """Blend of sub-period averages, each over assets that report it."""
    blended = 0.0
    for p, weight in MOMENTUM_WEIGHTS.items():
        present = [r.by_period[p] for r in rows if r.by_period[p] is not None]
        blended += weight * (mean(present) if present else 0.0)
    return clamp(50 + 2.0 * blended, 0, 100)


def classify_hot_cold(health: float, momentum: float) -> HotCold:
    if health >= HOT_AT_OR_ABOVE and momentum >= HOT_AT_OR_ABOVE:
        return HotCold.HOT
    if health <= COLD_AT_OR_BELOW and momentum <= COLD_AT_OR_BELOW:
        return HotCold.COLD
    return HotCold.NEUTRAL


def summary_clauses(
    hot_cold: HotCold,
    bias_warning: bool,
    tier: VolatilityTier,
    tail_ratio: float,
    leaders: tuple[str, ...],
) -> ClauseBuilder:
    """Tone, bias, volatility and leader clauses, in that order."""
    tone = {
        HotCold.HOT: "Constituents are rising together and momentum is holding up.",
        HotCold.COLD: "Broad weakness with momentum slowing or falling.",
        HotCold.NEUTRAL: "Mixed regime with rising and falling constituents interleaved.",
    }[hot_cold]

    if bias_warning:
        bias = "Watch for concentration in a few constituents."
    else:
        bias = "Constituent contributions are relatively even."

    if tier is VolatilityTier.RED or tail_ratio >= 0.3:
        vol = "Volatility warning (high share of ±15% swings)."
    elif tier is VolatilityTier.YELLOW or tail_ratio >= 0.15:
        vol = "Volatility caution zone."
    else:
        vol = "Volatility is relatively stable."

    leader_text = f"Leaders: {'·'.join(leaders)}" if leaders else None

    return ClauseBuilder().extend([tone, bias, vol, leader_text])


def _disabled(n: int) -> BarometerResult:
    return BarometerResult(
        ok=False,
        health=0.0,
        momentum=0.0,
        diversification=0.0,
        volatility=VolatilityTier.YELLOW,
        hot_cold=HotCold.NEUTRAL,
        tail_ratio=0.0,
        breadth_pct=0.0,
        avg_pct=0.0,
        gap=0.0,
        bias_warning=False,
        leaders=(),
        summary=(
            f"With {n} ASSET returns the barometer cannot be computed "
            f"(at least {MIN_SAMPLE} required)."
        ),
    )


def compute_barometer(
    nodes: ThemeSnapshot | Iterable[AssetObservation | Mapping[str, Any]] | None,
    period: Period,
) -> BarometerResult:
    """
    Compute the theme barometer for the selected period.

    Args:
        nodes: Theme snapshot, observations or raw node dicts
        period: Current period; 7D/1M/1Y feed momentum regardless

    Returns:
        BarometerResult; ok=False when fewer than 5 assets carry a
        current-period return
    """
    assets = [n for n in to_observations(nodes) if n.is_asset]
    rows = _collect(assets, period)
    with_current = [r for r in rows if r.current is not None]
    values = [r.current for r in with_current]
    n = len(values)

    if n < MIN_SAMPLE:
        logger.debug(f"compute_barometer({period.value}): {n} returns < {MIN_SAMPLE}")
        return _disabled(n)

    avg_pct = mean(values)
    positives = sum(1 for v in values if v > 0)
    positive_fraction = positives / n
    breadth_pct = positive_fraction * 100

    ordered = sorted(values)
    gap = percentile(ordered, 0.8) - percentile(ordered, 0.2)
    tail_ratio = sum(1 for v in values if abs(v) >= TAIL_THRESHOLD_PCT) / n

    health = health_score(avg_pct, positive_fraction, gap)
    diversification = diversification_score(values)
    bias_warning = diversification < BIAS_WARNING_BELOW
    tier = volatility_tier(gap, tail_ratio)
    momentum = momentum_score(rows)
    hot_cold = classify_hot_cold(health, momentum)

    # sorted() is stable, so ties keep input order
    leaders = tuple(
        r.name for r in sorted(with_current, key=lambda r: abs(r.current), reverse=True)[:LEADER_COUNT]
    )

    summary = summary_clauses(hot_cold, bias_warning, tier, tail_ratio, leaders).build()

    return BarometerResult(
        ok=True,
        health=health,
        momentum=momentum,
        diversification=diversification,
        volatility=tier,
        hot_cold=hot_cold,
        tail_ratio=tail_ratio,
        breadth_pct=breadth_pct,
        avg_pct=avg_pct,
        gap=gap,
        bias_warning=bias_warning,
        leaders=leaders,
        summary=summary,
    )
