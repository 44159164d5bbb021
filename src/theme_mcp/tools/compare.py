"""Theme comparison tool."""

import asyncio
import logging
from time import perf_counter
from typing import Any

from theme_mcp.analytics.models import ThemeRef, ThemeReturnSuccess, ThemeReturnSummary
from theme_mcp.analytics.sentence import compose, is_self_compare
from theme_mcp.analytics.summary import summarize
from theme_mcp.data.themes import load_theme_snapshot
from theme_mcp.tools.common import fetch_error_response
from theme_mcp.utils.normalize import finalize_response
from theme_mcp.utils.provenance import build_error_response, build_meta
from theme_mcp.utils.validators import ThemeParams, validate_theme_id

logger = logging.getLogger(__name__)


def summary_deltas(
    current: ThemeReturnSummary | None,
    compare: ThemeReturnSummary | None,
) -> dict[str, float | int] | None:
    """Current minus compare; None unless both summaries succeeded."""
    if not isinstance(current, ThemeReturnSuccess) or not isinstance(compare, ThemeReturnSuccess):
        return None
    return {
        "core_pp": current.core_median_pct - compare.core_median_pct,
        "momentum_pp": current.momentum_top_pct - compare.momentum_top_pct,
        "breadth_pp": current.breadth_pct - compare.breadth_pct,
        "asset_count": current.asset_count - compare.asset_count,
    }


async def compare_themes(
    theme_id: str,
    compare_theme_id: str | None = None,
    period: str = "7D",
    compare_theme_name: str | None = None,
    refresh: bool = False,
) -> dict[str, Any]:
    """
    Compare a theme's return summary against another theme.

    Args:
        theme_id: Current theme id
        compare_theme_id: Theme to compare against (optional)
        period: Period for both summaries (default: 7D)
        compare_theme_name: Display name override for the compare theme
        refresh: Bypass the theme cache

    Returns:
        Dict with both summaries, deltas (when available) and the composed sentence
    """
    start_time = perf_counter()

    try:
        params = ThemeParams(theme_id=theme_id, period=period)
        compare_id = validate_theme_id(compare_theme_id) if compare_theme_id else None
    except ValueError as e:
        return build_error_response("invalid_parameters", str(e), theme_id=theme_id)

    compare_ref = (
        ThemeRef(theme_id=compare_id, theme_name=compare_theme_name) if compare_id else None
    )
    fetch_compare = compare_ref is not None and not is_self_compare(params.theme_id, compare_ref)

    current_task = load_theme_snapshot(params.theme_id, refresh=refresh)
    if fetch_compare:
        results = await asyncio.gather(
            current_task,
            load_theme_snapshot(compare_ref.theme_id, refresh=refresh),
            return_exceptions=True,
        )
    else:
        results = await asyncio.gather(current_task, return_exceptions=True)

    if isinstance(results[0], BaseException):
        if not isinstance(results[0], Exception):
            raise results[0]
        return fetch_error_response(results[0], params.theme_id)
    snapshot, provenance = results[0]

    data_provenance: dict[str, Any] = {"theme": provenance}
    current_summary = summarize(snapshot, params.period)
    compare_summary: ThemeReturnSummary | None = None

    if fetch_compare:
        compare_result = results[1]
        if isinstance(compare_result, Exception):
            # Compare side degrades to "KPI unavailable" in the sentence
            logger.warning(f"compare_themes: compare theme {compare_ref.theme_id} failed: {compare_result}")
            data_provenance["compare_theme"] = fetch_error_response(compare_result, compare_ref.theme_id)
        elif isinstance(compare_result, BaseException):
            raise compare_result
        else:
            compare_snapshot, compare_prov = compare_result
            data_provenance["compare_theme"] = compare_prov
            compare_summary = summarize(compare_snapshot, params.period)
            if compare_theme_name is None:
                compare_ref = ThemeRef(compare_ref.theme_id, compare_snapshot.theme_name)

    # Re-checked here since the fetched name can itself mark a self-comparison
    self_compare = compare_ref is not None and is_self_compare(params.theme_id, compare_ref)

    duration_ms = (perf_counter() - start_time) * 1000

    return finalize_response(
        {
            "meta": build_meta("compare_themes", duration_ms),
            "data_provenance": data_provenance,
            "period": params.period.value,
            "current": {
                "theme_id": snapshot.theme_id,
                "theme_name": snapshot.theme_name,
                "edge_count": snapshot.edge_count,
                "summary": current_summary.to_dict(),
            },
            "compare": (
                {
                    "theme_id": compare_ref.theme_id,
                    "theme_name": compare_ref.display_name,
                    "summary": compare_summary.to_dict() if compare_summary else None,
                }
                if compare_ref
                else None
            ),
            "self_compare": self_compare,
            "deltas": None if self_compare else summary_deltas(current_summary, compare_summary),
            "sentence": compose(
                snapshot,
                params.period,
                current_summary,
                compare=compare_ref,
                compare_summary=compare_summary,
            ),
        }
    )
