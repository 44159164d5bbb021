"""Theme analytics tools."""

from theme_mcp.tools.barometer import theme_barometer
from theme_mcp.tools.compare import compare_themes
from theme_mcp.tools.movers import theme_movers
from theme_mcp.tools.theme_summary import theme_return_summary
from theme_mcp.tools.themes import list_themes, search_themes

__all__ = [
    "compare_themes",
    "list_themes",
    "search_themes",
    "theme_barometer",
    "theme_movers",
    "theme_return_summary",
]
