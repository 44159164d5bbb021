"""Top movers tool."""

from time import perf_counter
from typing import Any

from theme_mcp.analytics.movers import returns_frame, top_movers
from theme_mcp.data.themes import load_theme_snapshot
from theme_mcp.tools.common import fetch_error_response
from theme_mcp.utils.normalize import finalize_response
from theme_mcp.utils.provenance import build_error_response, build_meta
from theme_mcp.utils.validators import ThemeParams


async def theme_movers(
    theme_id: str,
    period: str = "7D",
    limit: int = 3,
    include_table: bool = False,
    refresh: bool = False,
) -> dict[str, Any]:
    """
    Rank a theme's assets by return for one period.

    Args:
        theme_id: Theme id (e.g., T_006)
        period: Period to rank by (default: 7D)
        limit: Entries per side (default: 3)
        include_table: Also return every asset's returns across all periods
        refresh: Bypass the theme cache

    Returns:
        Dict with top/bottom movers and, optionally, the full returns table
    """
    start_time = perf_counter()

    try:
        params = ThemeParams(theme_id=theme_id, period=period)
        if limit < 1:
            raise ValueError(f"Invalid limit {limit}. Must be >= 1")
    except ValueError as e:
        return build_error_response("invalid_parameters", str(e), theme_id=theme_id)

    try:
        snapshot, provenance = await load_theme_snapshot(params.theme_id, refresh=refresh)
    except Exception as e:
        return fetch_error_response(e, params.theme_id)

    movers = top_movers(snapshot, params.period, limit=limit)

    response: dict[str, Any] = {
        "meta": None,
        "data_provenance": {"theme": provenance},
        "theme_id": snapshot.theme_id,
        "theme_name": snapshot.theme_name,
        "period": params.period.value,
        "movers": movers.to_dict(),
    }

    if include_table:
        df = returns_frame(snapshot)
        response["returns_table"] = {
            "columns": list(df.columns),
            "rows": df.to_dict("records"),
        }

    duration_ms = (perf_counter() - start_time) * 1000
    response["meta"] = build_meta("theme_movers", duration_ms)

    return finalize_response(response)
