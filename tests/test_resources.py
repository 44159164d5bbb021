"""Tests for cache-only resources and prompt templates."""

import pytest

from theme_mcp.prompts.templates import PROMPTS, get_prompt, list_prompts
from theme_mcp.resources import theme_resource
from theme_mcp.resources.theme_resource import (
    ResourceNotFoundError,
    read_returns_resource,
    read_theme_resource,
)


@pytest.fixture
def cached_theme(monkeypatch, tmp_cache, sample_theme_payload):
    monkeypatch.setattr(theme_resource, "theme_cache", tmp_cache)
    tmp_cache.store("theme://T_001", sample_theme_payload)
    return tmp_cache


class TestThemeResources:
    """Tests for theme:// and returns resources."""

    def test_theme_json(self, cached_theme) -> None:
        text, mime = read_theme_resource("T_001")
        assert mime == "application/json"
        assert '"themeName": "AI Semiconductors"' in text

    def test_returns_csv(self, cached_theme) -> None:
        text, mime = read_returns_resource("T_001")
        assert mime == "text/csv"
        lines = text.splitlines()
        assert lines[0] == "id,name,3D,7D,1M,YTD,1Y,3Y"
        assert len(lines) == 7

    def test_not_cached(self, cached_theme) -> None:
        with pytest.raises(ResourceNotFoundError):
            read_theme_resource("T_999")
        with pytest.raises(ResourceNotFoundError):
            read_returns_resource("T_999")


class TestPrompts:
    """Tests for prompt templates."""

    def test_list(self) -> None:
        names = [p["name"] for p in list_prompts()]
        assert names == list(PROMPTS)

    def test_briefing(self) -> None:
        result = get_prompt("theme_briefing", {"theme_id": "T_001"})
        content = result["messages"][0]["content"]
        assert 'get_theme_barometer("T_001", period="7D")' in content

    def test_comparison(self) -> None:
        result = get_prompt(
            "theme_comparison", {"theme_id": "T_001", "compare_theme_id": "T_002", "period": "1M"}
        )
        assert 'compare_theme_id="T_002", period="1M"' in result["messages"][0]["content"]

    def test_unknown(self) -> None:
        assert get_prompt("nope", {}) is None
