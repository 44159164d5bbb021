"""Response envelopes: version meta, per-source provenance and error bodies."""

from datetime import datetime, timezone
from typing import Any

from theme_mcp import SCHEMA_VERSION, SERVER_VERSION

# Error types a client may retry later without changing its request
RETRYABLE_ERROR_TYPES = frozenset({"data_unavailable", "shutting_down"})


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with a Z suffix."""
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


def build_meta(tool: str, duration_ms: float | None = None) -> dict[str, Any]:
    """Version block stamped on every response; duration is rounded to 0.1 ms."""
    meta: dict[str, Any] = {
        "tool": tool,
        "server_version": SERVER_VERSION,
        "schema_version": SCHEMA_VERSION,
    }
    if duration_ms is not None:
        meta["duration_ms"] = round(duration_ms, 1)
    return meta


def build_provenance(
    source: str,
    as_of: datetime | str | None = None,
    **fields: Any,
) -> dict[str, Any]:
    """
    Describe where one piece of response data came from.

    Args:
        source: "theme_repo" for a live fetch, "cache" for a cache hit,
            "search_index" for the in-memory index
        as_of: When the data was fetched or stored
        **fields: Extra fields such as uri, url, attempts or hash. A
            "warnings" list is always present so callers can append to it.

    Returns:
        Provenance dict
    """
    prov: dict[str, Any] = {"source": source, **fields}
    if isinstance(as_of, datetime):
        prov["as_of"] = as_of.isoformat()
    elif as_of is not None:
        prov["as_of"] = as_of
    prov.setdefault("warnings", [])
    return prov


def build_error_response(
    error_type: str,
    message: str,
    theme_id: str | None = None,
) -> dict[str, Any]:
    """
    Error body returned by tools in place of a result.

    Args:
        error_type: invalid_parameters, theme_not_found, data_unavailable
            or shutting_down
        message: Human-readable error message
        theme_id: Theme the request was about, when known

    Returns:
        Error response dict with a "retryable" hint
    """
    response: dict[str, Any] = {
        "error": True,
        "error_type": error_type,
        "retryable": error_type in RETRYABLE_ERROR_TYPES,
        "message": message,
        "meta": build_meta("error"),
    }
    if theme_id is not None:
        response["theme_id"] = theme_id
    return response
