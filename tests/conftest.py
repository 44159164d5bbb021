"""Pytest configuration and fixtures."""

from typing import Any

import pytest

from theme_mcp.analytics.models import ThemeSnapshot
from theme_mcp.data.cache import ThemeCache


def make_asset(node_id: str, name: str | None = None, **metrics: Any) -> dict[str, Any]:
    """Raw ASSET node as found in a theme document."""
    return {"id": node_id, "name": name or node_id, "type": "ASSET", "metrics": metrics}


def assets_with_returns(returns: list[float], key: str = "ret7d") -> list[dict[str, Any]]:
    """One ASSET node per return value, named A1, A2, ..."""
    return [make_asset(f"A{i}", **{key: r}) for i, r in enumerate(returns, start=1)]


@pytest.fixture
def sample_returns_7d() -> list[float]:
    """Six 7D percent returns used across summary and barometer tests."""
    return [10.0, -5.0, 3.0, 8.0, -2.0, 20.0]


@pytest.fixture
def sample_theme_payload(sample_returns_7d: list[float]) -> dict[str, Any]:
    """Theme document with 6 ASSET nodes, 2 business fields and a macro."""
    nodes = assets_with_returns(sample_returns_7d)
    nodes += [
        {"id": "F1", "name": "Foundry", "type": "BUSINESS_FIELD"},
        {"id": "F2", "name": "Packaging", "type": "field"},
        {"id": "M1", "name": "Rates", "type": "MACRO"},
    ]
    return {
        "themeId": "T_001",
        "themeName": "AI Semiconductors",
        "nodes": nodes,
        "edges": [{"from": "T_001", "to": "A1"}, {"from": "T_001", "to": "A2"}],
    }


@pytest.fixture
def sample_snapshot(sample_theme_payload: dict[str, Any]) -> ThemeSnapshot:
    """Snapshot built from sample_theme_payload."""
    return ThemeSnapshot.from_json(sample_theme_payload)


@pytest.fixture
def compare_theme_payload() -> dict[str, Any]:
    """Second theme with 5 assets, used as compare target."""
    return {
        "themeId": "T_002",
        "themeName": "Robotics",
        "nodes": assets_with_returns([2.0, 4.0, 6.0, 8.0, -3.0]),
        "edges": [],
    }


@pytest.fixture
def tmp_cache(tmp_path) -> ThemeCache:
    """Theme cache in a temporary directory."""
    cache = ThemeCache(cache_dir=str(tmp_path / "cache"))
    yield cache
    cache.clear()
    cache.cache.close()
