"""Disk cache for fetched theme documents."""

import hashlib
import json
import os
from datetime import datetime, timezone
from typing import Any

import diskcache


class ThemeCache:
    """
    Cache stores exact JSON text of fetched documents, keyed by canonical URI.

    Resources only serve cached data. Never fetch live.
    """

    def __init__(self, cache_dir: str | None = None):
        if cache_dir is None:
            cache_dir = os.environ.get("CACHE_DIR", ".cache/themes")
        self.cache: diskcache.Cache = diskcache.Cache(str(cache_dir))
        self._default_ttl = int(os.environ.get("CACHE_TTL", "300"))  # 5 minutes

    def store(self, uri: str, payload: Any, ttl: int | None = None) -> str:
        """
        Store a JSON document plus metadata.

        Args:
            uri: Canonical URI (e.g., theme://T_006)
            payload: Decoded JSON document
            ttl: Cache TTL in seconds (default: CACHE_TTL)

        Returns:
            The URI the entry was stored under
        """
        text = json.dumps(payload, ensure_ascii=False, sort_keys=True)
        raw = text.encode("utf-8")

        entry: dict[str, Any] = {
            "json": text,
            "size_bytes": len(raw),
            "hash": hashlib.sha256(raw).hexdigest()[:16],
            "stored_at": datetime.now(timezone.utc).replace(tzinfo=None).isoformat(),
        }

        expire = ttl if ttl is not None else self._default_ttl
        self.cache.set(uri, entry, expire=expire)

        return uri

    def get(self, uri: str) -> dict[str, Any] | None:
        """Get cache entry by URI, or None if missing or expired."""
        return self.cache.get(uri)

    def get_text(self, uri: str) -> str | None:
        """Get the stored JSON text by URI."""
        entry = self.get(uri)
        if not entry:
            return None
        return entry["json"]

    def get_payload(self, uri: str) -> Any | None:
        """Get the decoded JSON document by URI."""
        text = self.get_text(uri)
        if text is None:
            return None
        return json.loads(text)

    def get_metadata(self, uri: str) -> dict[str, Any] | None:
        """Get cache metadata without decoding the document."""
        entry = self.get(uri)
        if not entry:
            return None
        return {
            "size_bytes": entry["size_bytes"],
            "hash": entry["hash"],
            "stored_at": entry["stored_at"],
        }

    def exists(self, uri: str) -> bool:
        """Check if URI exists in cache."""
        return uri in self.cache

    def invalidate(self, uri: str) -> bool:
        """Drop one entry. Returns True if something was removed."""
        return bool(self.cache.delete(uri))

    def clear(self) -> None:
        """Clear all cached data."""
        self.cache.clear()


# Global instance
theme_cache = ThemeCache()
