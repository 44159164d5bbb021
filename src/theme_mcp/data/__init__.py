"""Data layer for fetching and caching theme documents."""

from theme_mcp.data.cache import ThemeCache, theme_cache
from theme_mcp.data.client import (
    ServerShuttingDownError,
    ThemeFetchRetryError,
    ThemeNotFoundError,
    fetch_json,
    fetch_json_with_provenance,
    shutdown_executor,
)
from theme_mcp.data.search_index import (
    SearchIndex,
    SearchIndexCache,
    SearchIndexSchemaError,
    SearchResults,
    search_by_keyword,
    search_index_cache,
)
from theme_mcp.data.themes import (
    load_search_index,
    load_theme_index,
    load_theme_snapshot,
    parse_theme_index,
)

__all__ = [
    # Cache
    "ThemeCache",
    "theme_cache",
    # HTTP
    "ServerShuttingDownError",
    "ThemeFetchRetryError",
    "ThemeNotFoundError",
    "fetch_json",
    "fetch_json_with_provenance",
    "shutdown_executor",
    # Search
    "SearchIndex",
    "SearchIndexCache",
    "SearchIndexSchemaError",
    "SearchResults",
    "search_by_keyword",
    "search_index_cache",
    # Loaders
    "load_search_index",
    "load_theme_index",
    "load_theme_snapshot",
    "parse_theme_index",
]
