"""Theme document and returns-table resource handlers."""

from theme_mcp.analytics.models import ThemeSnapshot
from theme_mcp.analytics.movers import returns_frame, returns_to_csv
from theme_mcp.data.cache import theme_cache
from theme_mcp.data.themes import theme_uri


class ResourceNotFoundError(Exception):
    """Resource not found in cache."""

    pass


def read_theme_resource(theme_id: str) -> tuple[str, str]:
    """
    Serve a cached theme document. No fetching, no transformation.

    Args:
        theme_id: Theme id (resource URI theme://{theme_id})

    Returns:
        Tuple of (json_text, mime_type)

    Raises:
        ResourceNotFoundError: If the theme is not in cache
    """
    uri = theme_uri(theme_id)
    text = theme_cache.get_text(uri)

    if text is None:
        raise ResourceNotFoundError(f"Resource not cached. Call a theme tool first: {uri}")

    return text, "application/json"


def read_returns_resource(theme_id: str) -> tuple[str, str]:
    """
    Serve the per-asset returns table of a cached theme as CSV.

    Columns: id, name, 3D, 7D, 1M, YTD, 1Y, 3Y (normalized percent).

    Raises:
        ResourceNotFoundError: If the theme is not in cache
    """
    uri = theme_uri(theme_id)
    payload = theme_cache.get_payload(uri)

    if not isinstance(payload, dict):
        raise ResourceNotFoundError(f"Resource not cached. Call a theme tool first: {uri}")

    snapshot = ThemeSnapshot.from_json(payload, theme_id=theme_id)
    return returns_to_csv(returns_frame(snapshot)), "text/csv"
