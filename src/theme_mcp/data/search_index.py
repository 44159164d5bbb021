"""Search index model, explicit in-memory cache and keyword search."""

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from theme_mcp.utils.sanitize import normalize_keyword

logger = logging.getLogger(__name__)

SEARCH_SCHEMA_VERSION = "search_v3"
DEFAULT_LIMIT = 30


class SearchIndexSchemaError(ValueError):
    """Raised when a search index payload has an unexpected schemaVersion."""

    pass


def _strs(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(v) for v in value if v is not None)


def _str(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class SearchAsset:
    id: str
    name: str
    ticker: str = ""
    exchange: str = ""
    country: str = ""
    themes: tuple[str, ...] = ()
    search_tokens: tuple[str, ...] = ()

    def matches(self, kw: str) -> bool:
        return _any_field(kw, self.id, self.name, self.ticker, self.exchange, self.country) or _tokens_hit(
            kw, self.search_tokens
        )


@dataclass(frozen=True)
class SearchTheme:
    id: str
    name: str
    assets: tuple[str, ...] = ()
    search_tokens: tuple[str, ...] = ()

    def matches(self, kw: str) -> bool:
        return _any_field(kw, self.id, self.name) or _tokens_hit(kw, self.search_tokens)


@dataclass(frozen=True)
class SearchBusinessField:
    id: str
    name: str
    themes: tuple[str, ...] = ()
    search_tokens: tuple[str, ...] = ()

    def matches(self, kw: str) -> bool:
        return _any_field(kw, self.id, self.name) or _tokens_hit(kw, self.search_tokens)


@dataclass(frozen=True)
class SearchMacro:
    id: str
    name: str
    macro_type: str = ""
    themes: tuple[str, ...] = ()
    search_tokens: tuple[str, ...] = ()

    def matches(self, kw: str) -> bool:
        return _any_field(kw, self.id, self.name, self.macro_type) or _tokens_hit(
            kw, self.search_tokens
        )


def _any_field(kw: str, *fields: str) -> bool:
    return any(kw in normalize_keyword(f) for f in fields)


def _tokens_hit(kw: str, tokens: tuple[str, ...]) -> bool:
    return any(kw in normalize_keyword(t) for t in tokens)


@dataclass(frozen=True)
class SearchIndex:
    generated_at: str
    assets: tuple[SearchAsset, ...] = ()
    themes: tuple[SearchTheme, ...] = ()
    business_fields: tuple[SearchBusinessField, ...] = ()
    macros: tuple[SearchMacro, ...] = ()

    @property
    def totals(self) -> dict[str, int]:
        return {
            "assets": len(self.assets),
            "themes": len(self.themes),
            "business_fields": len(self.business_fields),
            "macros": len(self.macros),
        }

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> "SearchIndex":
        """
        Parse a search_v3 index document.

        Raises:
            SearchIndexSchemaError: If schemaVersion is not search_v3
        """
        version = payload.get("schemaVersion") if isinstance(payload, Mapping) else None
        if version != SEARCH_SCHEMA_VERSION:
            raise SearchIndexSchemaError(f"Invalid search index schemaVersion: {version}")

        def rows(key: str) -> list[Mapping[str, Any]]:
            value = payload.get(key)
            return [r for r in value if isinstance(r, Mapping)] if isinstance(value, list) else []

        return cls(
            generated_at=_str(payload.get("generatedAt")),
            assets=tuple(
                SearchAsset(
                    id=_str(r.get("id")),
                    name=_str(r.get("name")),
                    ticker=_str(r.get("ticker")),
                    exchange=_str(r.get("exchange")),
                    country=_str(r.get("country")),
                    themes=_strs(r.get("themes")),
                    search_tokens=_strs(r.get("searchTokens")),
                )
                for r in rows("assets")
            ),
            themes=tuple(
                SearchTheme(
                    id=_str(r.get("id")),
                    name=_str(r.get("name")),
                    assets=_strs(r.get("assets")),
                    search_tokens=_strs(r.get("searchTokens")),
                )
                for r in rows("themes")
            ),
            business_fields=tuple(
                SearchBusinessField(
                    id=_str(r.get("id")),
                    name=_str(r.get("name")),
                    themes=_strs(r.get("themes")),
                    search_tokens=_strs(r.get("searchTokens")),
                )
                for r in rows("businessFields")
            ),
            macros=tuple(
                SearchMacro(
                    id=_str(r.get("id")),
                    name=_str(r.get("name")),
                    macro_type=_str(r.get("macro_type")),
                    themes=_strs(r.get("themes")),
                    search_tokens=_strs(r.get("searchTokens")),
                )
                for r in rows("macros")
            ),
        )


@dataclass(frozen=True)
class SearchResults:
    assets: tuple[SearchAsset, ...] = ()
    themes: tuple[SearchTheme, ...] = ()
    business_fields: tuple[SearchBusinessField, ...] = ()
    macros: tuple[SearchMacro, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.assets or self.themes or self.business_fields or self.macros)


def search_by_keyword(index: SearchIndex, keyword: str, limit: int = DEFAULT_LIMIT) -> SearchResults:
    """
    Substring search across all entity groups.

    Matching uses id/name/ticker fields as well as search tokens, so a broken
    token list never hides an entity that matches by name.

    Args:
        index: Loaded search index
        keyword: Raw keyword (NFC-normalized, trimmed, lower-cased here)
        limit: Max results per group (default: 30)

    Returns:
        SearchResults; all groups empty for a blank keyword
    """
    kw = normalize_keyword(keyword)
    if not kw:
        return SearchResults()

    return SearchResults(
        assets=tuple(a for a in index.assets if a.matches(kw))[:limit],
        themes=tuple(t for t in index.themes if t.matches(kw))[:limit],
        business_fields=tuple(b for b in index.business_fields if b.matches(kw))[:limit],
        macros=tuple(m for m in index.macros if m.matches(kw))[:limit],
    )


class SearchIndexCache:
    """
    Holds at most one loaded SearchIndex.

    The index is loaded on first use and kept until invalidate() is called.
    """

    def __init__(self) -> None:
        self._index: SearchIndex | None = None

    def get(self) -> SearchIndex | None:
        return self._index

    def set(self, index: SearchIndex) -> None:
        self._index = index

    def invalidate(self) -> None:
        self._index = None

    @property
    def is_loaded(self) -> bool:
        return self._index is not None

    async def load(self, loader: Callable[[], Awaitable[Mapping[str, Any]]]) -> SearchIndex:
        """
        Return the cached index, loading and parsing it first when empty.

        Args:
            loader: Coroutine function returning the raw index document

        Raises:
            SearchIndexSchemaError: If the loaded document has the wrong schema
        """
        if self._index is not None:
            return self._index
        payload = await loader()
        index = SearchIndex.from_json(payload)
        logger.info(f"Search index loaded: {index.totals}")
        self._index = index
        return index


# Global instance
search_index_cache = SearchIndexCache()
