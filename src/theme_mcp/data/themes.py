"""Cache-first loading of theme documents, the theme index and the search index."""

import logging
from collections.abc import Mapping
from typing import Any

from theme_mcp.analytics.models import ThemeRef, ThemeSnapshot
from theme_mcp.data.cache import theme_cache
from theme_mcp.data.client import (
    fetch_json,
    fetch_json_with_provenance,
    search_index_url,
    theme_index_url,
    theme_url,
)
from theme_mcp.data.search_index import SearchIndex, search_index_cache
from theme_mcp.utils.provenance import build_provenance, utc_now_iso
from theme_mcp.utils.sanitize import sanitize_label

logger = logging.getLogger(__name__)

THEME_INDEX_URI = "theme-index://all"


def theme_uri(theme_id: str) -> str:
    return f"theme://{theme_id}"


async def _cached_json(uri: str, url: str, refresh: bool) -> tuple[Any, dict[str, Any]]:
    if not refresh:
        payload = theme_cache.get_payload(uri)
        if payload is not None:
            meta = theme_cache.get_metadata(uri) or {}
            logger.debug(f"{uri}: cache hit")
            return payload, build_provenance(
                source="cache",
                as_of=meta.get("stored_at"),
                uri=uri,
                hash=meta.get("hash"),
            )

    payload, fetch_prov = await fetch_json_with_provenance(url)
    theme_cache.store(uri, payload)
    return payload, build_provenance(source="theme_repo", as_of=utc_now_iso(), uri=uri, **fetch_prov)


async def load_theme_snapshot(
    theme_id: str,
    refresh: bool = False,
) -> tuple[ThemeSnapshot, dict[str, Any]]:
    """
    Load one theme graph, from cache when possible.

    Args:
        theme_id: Validated theme id (e.g., "T_006")
        refresh: Bypass the cache and refetch

    Returns:
        Tuple of (ThemeSnapshot, provenance dict)

    Raises:
        ThemeNotFoundError, ThemeFetchRetryError, ServerShuttingDownError
        ValueError: If the document is not a JSON object
    """
    payload, provenance = await _cached_json(theme_uri(theme_id), theme_url(theme_id), refresh)
    if not isinstance(payload, Mapping):
        raise ValueError(f"Theme document for {theme_id} is not a JSON object")
    snapshot = ThemeSnapshot.from_json(payload, theme_id=theme_id)
    if len(snapshot.nodes) == 0:
        provenance["warnings"].append("theme_has_no_nodes")
    return snapshot, provenance


def parse_theme_index(payload: Any) -> list[ThemeRef]:
    """
    Normalize the theme index document.

    Accepts either a bare list or {"themes": [...]}; items may use
    themeId/themeName or id/name. Items missing either are skipped.
    """
    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, Mapping) and isinstance(payload.get("themes"), list):
        items = payload["themes"]
    else:
        items = []

    out: list[ThemeRef] = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        tid = str(item.get("themeId") or item.get("id") or "").strip()
        name = sanitize_label(item.get("themeName") or item.get("name"))
        if not tid or not name:
            continue
        out.append(ThemeRef(theme_id=tid, theme_name=name))
    return out


async def load_theme_index(refresh: bool = False) -> tuple[list[ThemeRef], dict[str, Any]]:
    """Load and normalize the theme list."""
    payload, provenance = await _cached_json(THEME_INDEX_URI, theme_index_url(), refresh)
    themes = parse_theme_index(payload)
    logger.info(f"Theme index: {len(themes)} items")
    return themes, provenance


async def load_search_index(refresh: bool = False) -> SearchIndex:
    """Load the search index into the in-memory cache (once until refreshed)."""
    if refresh:
        search_index_cache.invalidate()
    return await search_index_cache.load(lambda: fetch_json(search_index_url()))
