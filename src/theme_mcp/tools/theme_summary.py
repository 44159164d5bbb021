"""Theme return summary tool."""

from time import perf_counter
from typing import Any

from theme_mcp.analytics.sentence import compose
from theme_mcp.analytics.summary import summarize
from theme_mcp.data.themes import load_theme_snapshot
from theme_mcp.tools.common import fetch_error_response
from theme_mcp.utils.normalize import finalize_response
from theme_mcp.utils.provenance import build_error_response, build_meta
from theme_mcp.utils.validators import ThemeParams


async def theme_return_summary(
    theme_id: str,
    period: str = "7D",
    min_assets: int = 5,
    refresh: bool = False,
) -> dict[str, Any]:
    """
    Summarize a theme's constituent returns for one period.

    Args:
        theme_id: Theme id (e.g., T_006)
        period: 3D, 7D, 1M, YTD, 1Y or 3Y (default: 7D)
        min_assets: Minimum ASSET count for a summary (default: 5)
        refresh: Bypass the theme cache

    Returns:
        Dict with core/momentum/breadth summary (or failure reason) and sentence
    """
    start_time = perf_counter()

    try:
        params = ThemeParams(theme_id=theme_id, period=period, min_assets=min_assets)
    except ValueError as e:
        return build_error_response("invalid_parameters", str(e), theme_id=theme_id)

    try:
        snapshot, provenance = await load_theme_snapshot(params.theme_id, refresh=refresh)
    except Exception as e:
        return fetch_error_response(e, params.theme_id)

    summary = summarize(snapshot, params.period, min_assets=params.min_assets)

    duration_ms = (perf_counter() - start_time) * 1000

    return finalize_response(
        {
            "meta": build_meta("theme_return_summary", duration_ms),
            "data_provenance": {"theme": provenance},
            "theme_id": snapshot.theme_id,
            "theme_name": snapshot.theme_name,
            "edge_count": snapshot.edge_count,
            "period": params.period.value,
            "summary": summary.to_dict(),
            "sentence": compose(snapshot, params.period, summary),
        }
    )
