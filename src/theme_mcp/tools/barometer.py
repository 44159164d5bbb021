"""Theme barometer tool."""

import operator
from time import perf_counter
from typing import Any

from theme_mcp.analytics.barometer import (
    BIAS_WARNING_BELOW,
    COLD_AT_OR_BELOW,
    HOT_AT_OR_ABOVE,
    TAIL_THRESHOLD_PCT,
    compute_barometer,
)
from theme_mcp.analytics.models import BarometerResult
from theme_mcp.data.themes import load_theme_snapshot
from theme_mcp.tools.common import fetch_error_response
from theme_mcp.utils.formatting import fmt_int, fmt_pct
from theme_mcp.utils.normalize import finalize_response
from theme_mcp.utils.provenance import build_error_response, build_meta
from theme_mcp.utils.validators import ThemeParams, check_rule


def _display(result: BarometerResult) -> dict[str, str]:
    """Rounded display strings as shown on the barometer card."""
    return {
        "health": fmt_int(result.health),
        "momentum": fmt_int(result.momentum),
        "diversification": fmt_int(result.diversification),
        "avg": fmt_pct(result.avg_pct),
        "breadth": f"{fmt_int(result.breadth_pct)}%",
        "tail": f"{fmt_int(result.tail_ratio * 100)}%",
        "gap": f"{result.gap:.1f}pt",
    }


def _rules(result: BarometerResult) -> dict[str, Any]:
    enabled = result.ok
    return {
        "bias_warning": {
            "triggered": check_rule(
                result.diversification if enabled else None, BIAS_WARNING_BELOW, operator.lt
            ),
            "threshold": BIAS_WARNING_BELOW,
        },
        "hot_health": {
            "triggered": check_rule(result.health if enabled else None, HOT_AT_OR_ABOVE, operator.ge),
            "threshold": HOT_AT_OR_ABOVE,
        },
        "cold_health": {
            "triggered": check_rule(result.health if enabled else None, COLD_AT_OR_BELOW, operator.le),
            "threshold": COLD_AT_OR_BELOW,
        },
        "tail_threshold_pct": TAIL_THRESHOLD_PCT,
    }


async def theme_barometer(
    theme_id: str,
    period: str = "7D",
    refresh: bool = False,
) -> dict[str, Any]:
    """
    Compute the theme barometer (health, momentum, diversification, volatility).

    Args:
        theme_id: Theme id (e.g., T_006)
        period: Current period (default: 7D)
        refresh: Bypass the theme cache

    Returns:
        Dict with barometer scores, display strings, rule flags and summary
    """
    start_time = perf_counter()

    try:
        params = ThemeParams(theme_id=theme_id, period=period)
    except ValueError as e:
        return build_error_response("invalid_parameters", str(e), theme_id=theme_id)

    try:
        snapshot, provenance = await load_theme_snapshot(params.theme_id, refresh=refresh)
    except Exception as e:
        return fetch_error_response(e, params.theme_id)

    result = compute_barometer(snapshot, params.period)

    duration_ms = (perf_counter() - start_time) * 1000

    return finalize_response(
        {
            "meta": build_meta("theme_barometer", duration_ms),
            "data_provenance": {"theme": provenance},
            "theme_id": snapshot.theme_id,
            "theme_name": snapshot.theme_name,
            "period": params.period.value,
            "barometer": result.to_dict(),
            "display": _display(result) if result.ok else None,
            "rules": _rules(result),
        }
    )
