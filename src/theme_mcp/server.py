"""Theme Analytics MCP Server using FastMCP."""

import asyncio
import json
import logging
import os

from fastmcp import FastMCP

from theme_mcp import SCHEMA_VERSION, SERVER_VERSION
from theme_mcp.data.client import shutdown_executor
from theme_mcp.prompts.templates import get_prompt
from theme_mcp.resources.theme_resource import (
    ResourceNotFoundError,
    read_returns_resource,
    read_theme_resource,
)
from theme_mcp.tools import (
    compare_themes as compare_themes_tool,
    list_themes as list_themes_tool,
    search_themes as search_themes_tool,
    theme_barometer,
    theme_movers,
    theme_return_summary,
)
from theme_mcp.utils.validators import validate_theme_id

# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, log_level, logging.INFO))
logger = logging.getLogger(__name__)

# Create FastMCP server instance
mcp = FastMCP(
    name="theme-analytics",
)


# ============================================================================
# TOOLS
# ============================================================================


@mcp.tool
async def list_themes(refresh: bool = False) -> str:
    """
    List all themes available in the theme index.

    Args:
        refresh: Bypass the cache and refetch the index (default: false)

    Returns:
        JSON with theme ids and names
    """
    result = await list_themes_tool(refresh=refresh)
    return json.dumps(result, indent=2, default=str, ensure_ascii=False)


@mcp.tool
async def search_themes(keyword: str, limit: int = 30) -> str:
    """
    Search assets, themes, business fields and macro factors by keyword.

    Matches ids, names, tickers, exchanges, countries and search tokens
    (case-insensitive substring).

    Args:
        keyword: Search keyword (Korean or English)
        limit: Max results per group (default: 30)

    Returns:
        JSON with matches grouped by entity type
    """
    result = await search_themes_tool(keyword=keyword, limit=limit)
    return json.dumps(result, indent=2, default=str, ensure_ascii=False)


@mcp.tool
async def get_theme_return_summary(theme_id: str, period: str = "7D", min_assets: int = 5) -> str:
    """
    Summarize a theme's constituent returns for one period.

    Core = median return, Momentum = mean of the top 30% (top 2 below 10
    assets), Breadth = share of assets with a positive return.

    Args:
        theme_id: Theme id (e.g., T_006)
        period: 3D, 7D, 1M, YTD, 1Y or 3Y (default: 7D)
        min_assets: Minimum ASSET nodes required (default: 5)

    Returns:
        JSON with the summary (or failure reason) and a description sentence
    """
    result = await theme_return_summary(theme_id=theme_id, period=period, min_assets=min_assets)
    return json.dumps(result, indent=2, default=str, ensure_ascii=False)


@mcp.tool
async def get_theme_barometer(theme_id: str, period: str = "7D") -> str:
    """
    Compute the theme barometer.

    Health, Momentum and Diversification scores (0-100), volatility tier
    (GREEN/YELLOW/RED), HOT/NEUTRAL/COLD classification, tail ratio (±15%)
    and up to two leaders.

    Args:
        theme_id: Theme id (e.g., T_006)
        period: 3D, 7D, 1M, YTD, 1Y or 3Y (default: 7D)

    Returns:
        JSON with barometer scores, display strings and summary line
    """
    result = await theme_barometer(theme_id=theme_id, period=period)
    return json.dumps(result, indent=2, default=str, ensure_ascii=False)


@mcp.tool
async def compare_themes(
    theme_id: str,
    compare_theme_id: str | None = None,
    period: str = "7D",
) -> str:
    """
    Compare two themes' return summaries.

    Produces ΔCore, ΔMom, ΔBreadth (percentage points) and ΔASSET, plus a
    composed sentence. Comparing a theme with itself suppresses deltas.

    Args:
        theme_id: Current theme id
        compare_theme_id: Theme to compare against (optional)
        period: 3D, 7D, 1M, YTD, 1Y or 3Y (default: 7D)

    Returns:
        JSON with both summaries, deltas and the sentence
    """
    result = await compare_themes_tool(
        theme_id=theme_id,
        compare_theme_id=compare_theme_id,
        period=period,
    )
    return json.dumps(result, indent=2, default=str, ensure_ascii=False)


@mcp.tool
async def get_top_movers(
    theme_id: str,
    period: str = "7D",
    limit: int = 3,
    include_table: bool = False,
) -> str:
    """
    Top and bottom assets of a theme by period return.

    Args:
        theme_id: Theme id (e.g., T_006)
        period: 3D, 7D, 1M, YTD, 1Y or 3Y (default: 7D)
        limit: Entries per side (default: 3)
        include_table: Include every asset's returns for all periods

    Returns:
        JSON with movers and optional returns table
    """
    result = await theme_movers(
        theme_id=theme_id,
        period=period,
        limit=limit,
        include_table=include_table,
    )
    return json.dumps(result, indent=2, default=str, ensure_ascii=False)


# ============================================================================
# RESOURCES
# ============================================================================


@mcp.resource("theme://{theme_id}")
def get_cached_theme(theme_id: str) -> str:
    """
    Get a cached theme document as JSON.

    Must call a theme tool first to populate the cache.

    Args:
        theme_id: Theme id

    Returns:
        Theme JSON with themeId, themeName, nodes and edges
    """
    try:
        text, _ = read_theme_resource(validate_theme_id(theme_id))
        return text
    except ResourceNotFoundError:
        return f"Resource not cached. Call get_theme_return_summary('{theme_id}') first."
    except ValueError as e:
        return f"Error: {e}"


@mcp.resource("theme-returns://{theme_id}")
def get_cached_theme_returns(theme_id: str) -> str:
    """
    Get a cached theme's per-asset returns as CSV.

    Args:
        theme_id: Theme id

    Returns:
        CSV with id,name,3D,7D,1M,YTD,1Y,3Y columns (percent)
    """
    try:
        text, _ = read_returns_resource(validate_theme_id(theme_id))
        return text
    except ResourceNotFoundError:
        return f"Resource not cached. Call get_theme_return_summary('{theme_id}') first."
    except ValueError as e:
        return f"Error: {e}"


# ============================================================================
# PROMPTS
# ============================================================================


@mcp.prompt
def theme_briefing(theme_id: str, period: str = "7D") -> str:
    """Briefing on one theme's returns, barometer and movers."""
    result = get_prompt("theme_briefing", {"theme_id": theme_id, "period": period})
    if result:
        return result["messages"][0]["content"]
    return f"Summarize theme {theme_id} using get_theme_return_summary."


@mcp.prompt
def theme_comparison(theme_id: str, compare_theme_id: str, period: str = "7D") -> str:
    """Side-by-side comparison of two themes."""
    result = get_prompt(
        "theme_comparison",
        {"theme_id": theme_id, "compare_theme_id": compare_theme_id, "period": period},
    )
    if result:
        return result["messages"][0]["content"]
    return f"Compare {theme_id} with {compare_theme_id} using compare_themes."


# ============================================================================
# ENTRY POINT
# ============================================================================


def main() -> None:
    """Run the MCP server."""
    logger.info(f"Starting Theme Analytics MCP Server v{SERVER_VERSION} (schema v{SCHEMA_VERSION})")
    try:
        mcp.run()
    finally:
        logger.info("Shutting down fetch executor")
        asyncio.run(shutdown_executor())


if __name__ == "__main__":
    main()
