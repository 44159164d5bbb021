"""Theme analytics engine: pure functions over in-memory theme snapshots."""

from theme_mcp.analytics.barometer import compute_barometer
from theme_mcp.analytics.models import (
    AssetObservation,
    BarometerResult,
    FailureReason,
    HotCold,
    NodeKind,
    Period,
    ThemeRef,
    ThemeReturnFailure,
    ThemeReturnSuccess,
    ThemeReturnSummary,
    ThemeSnapshot,
    VolatilityTier,
)
from theme_mcp.analytics.movers import asset_return, returns_frame, top_movers
from theme_mcp.analytics.returns import extract_return, normalize_to_pct
from theme_mcp.analytics.sentence import ClauseBuilder, compose
from theme_mcp.analytics.summary import summarize

__all__ = [
    # Models
    "AssetObservation",
    "BarometerResult",
    "FailureReason",
    "HotCold",
    "NodeKind",
    "Period",
    "ThemeRef",
    "ThemeReturnFailure",
    "ThemeReturnSuccess",
    "ThemeReturnSummary",
    "ThemeSnapshot",
    "VolatilityTier",
    # Engine
    "ClauseBuilder",
    "asset_return",
    "compose",
    "compute_barometer",
    "extract_return",
    "normalize_to_pct",
    "returns_frame",
    "summarize",
    "top_movers",
]
