"""Theme listing and search tools."""

from dataclasses import asdict
from time import perf_counter
from typing import Any

from theme_mcp.data.search_index import search_by_keyword
from theme_mcp.data.themes import load_search_index, load_theme_index
from theme_mcp.tools.common import fetch_error_response
from theme_mcp.utils.normalize import finalize_response
from theme_mcp.utils.provenance import build_error_response, build_meta, build_provenance, utc_now_iso


async def list_themes(refresh: bool = False) -> dict[str, Any]:
    """
    List available themes from the theme index.

    Args:
        refresh: Bypass the cache

    Returns:
        Dict with theme ids and names
    """
    start_time = perf_counter()

    try:
        themes, provenance = await load_theme_index(refresh=refresh)
    except Exception as e:
        return fetch_error_response(e)

    duration_ms = (perf_counter() - start_time) * 1000

    return finalize_response(
        {
            "meta": build_meta("list_themes", duration_ms),
            "data_provenance": {"theme_index": provenance},
            "count": len(themes),
            "themes": [{"theme_id": t.theme_id, "theme_name": t.theme_name} for t in themes],
        }
    )


async def search_themes(keyword: str, limit: int = 30, refresh: bool = False) -> dict[str, Any]:
    """
    Keyword search over assets, themes, business fields and macros.

    Args:
        keyword: Search keyword (matches ids, names, tickers and search tokens)
        limit: Max results per group (default: 30)
        refresh: Reload the search index

    Returns:
        Dict with matches grouped by entity type
    """
    start_time = perf_counter()

    if limit < 1:
        return build_error_response("invalid_parameters", f"Invalid limit {limit}. Must be >= 1")

    try:
        index = await load_search_index(refresh=refresh)
    except Exception as e:
        return fetch_error_response(e)

    results = search_by_keyword(index, keyword, limit=limit)

    duration_ms = (perf_counter() - start_time) * 1000

    return finalize_response(
        {
            "meta": build_meta("search_themes", duration_ms),
            "data_provenance": {
                "search": build_provenance(
                    source="search_index",
                    as_of=index.generated_at or utc_now_iso(),
                    query=keyword,
                    totals=index.totals,
                ),
            },
            "keyword": keyword,
            "results": asdict(results),
        }
    )
