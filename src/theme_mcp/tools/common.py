"""Shared error translation for tools."""

import logging
from typing import Any

from theme_mcp.data.client import (
    ServerShuttingDownError,
    ThemeFetchRetryError,
    ThemeNotFoundError,
)
from theme_mcp.data.search_index import SearchIndexSchemaError
from theme_mcp.utils.provenance import build_error_response

logger = logging.getLogger(__name__)


def fetch_error_response(error: Exception, theme_id: str | None = None) -> dict[str, Any]:
    """Map a data-layer exception to an error response."""
    if isinstance(error, ThemeNotFoundError):
        return build_error_response(
            error_type="theme_not_found",
            message=f"Theme document not found: {error.url}",
            theme_id=theme_id,
        )
    if isinstance(error, ServerShuttingDownError):
        return build_error_response(
            error_type="shutting_down",
            message=str(error),
            theme_id=theme_id,
        )
    if isinstance(error, (ThemeFetchRetryError, SearchIndexSchemaError)):
        return build_error_response(
            error_type="data_unavailable",
            message=str(error),
            theme_id=theme_id,
        )
    logger.warning(f"Unexpected data error for {theme_id}: {error!r}")
    return build_error_response(
        error_type="data_unavailable",
        message=f"Failed to load data: {error}",
        theme_id=theme_id,
    )
