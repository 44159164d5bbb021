"""Tests for the theme store HTTP client retry logic."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest
import requests
from requests.exceptions import HTTPError

from theme_mcp.data import client
from theme_mcp.data.client import (
    ServerShuttingDownError,
    ThemeFetchRetryError,
    ThemeNotFoundError,
    fetch_json,
    fetch_json_with_provenance,
    theme_url,
)


def _response(status_code: int, payload=None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    if status_code >= 400:
        resp.raise_for_status.side_effect = HTTPError(f"{status_code} error", response=resp)
    resp.json.return_value = payload
    return resp


@pytest.fixture(autouse=True)
def no_backoff():
    with patch.object(client, "_calculate_backoff", return_value=0.0):
        yield


class TestUrls:
    """Tests for store URL helpers."""

    def test_theme_url(self) -> None:
        assert theme_url("T_006").endswith("/theme/T_006.json")

    def test_index_urls(self) -> None:
        assert client.theme_index_url().endswith("/theme/index.json")
        assert client.search_index_url().endswith("/search/search_index.json")


class TestFetchJson:
    """Tests for fetch_json with retry."""

    def test_success(self) -> None:
        with patch("theme_mcp.data.client.requests.get", return_value=_response(200, {"a": 1})):
            payload, prov = asyncio.run(fetch_json_with_provenance("https://example.test/x.json"))
        assert payload == {"a": 1}
        assert prov["attempts"] == 1
        assert prov["url"] == "https://example.test/x.json"

    def test_retries_transient_error(self) -> None:
        responses = [_response(503), _response(200, [1, 2])]
        with patch("theme_mcp.data.client.requests.get", side_effect=responses) as get:
            payload, prov = asyncio.run(fetch_json_with_provenance("https://example.test/x.json"))
        assert payload == [1, 2]
        assert prov["attempts"] == 2
        assert get.call_count == 2

    def test_404_not_retried(self) -> None:
        with patch("theme_mcp.data.client.requests.get", return_value=_response(404)) as get:
            with pytest.raises(ThemeNotFoundError) as exc_info:
                asyncio.run(fetch_json("https://example.test/missing.json"))
        assert exc_info.value.url == "https://example.test/missing.json"
        assert get.call_count == 1

    def test_exhausted_retries(self) -> None:
        with patch("theme_mcp.data.client.requests.get", return_value=_response(500)) as get:
            with pytest.raises(ThemeFetchRetryError):
                asyncio.run(fetch_json("https://example.test/x.json"))
        assert get.call_count == client._max_retries + 1

    def test_connection_error_retried(self) -> None:
        side_effect = [requests.ConnectionError("reset"), _response(200, {"ok": True})]
        with patch("theme_mcp.data.client.requests.get", side_effect=side_effect):
            assert asyncio.run(fetch_json("https://example.test/x.json")) == {"ok": True}

    def test_bad_json_not_retried(self) -> None:
        resp = _response(200)
        resp.json.side_effect = ValueError("Expecting value")
        with patch("theme_mcp.data.client.requests.get", return_value=resp) as get:
            with pytest.raises(ValueError):
                asyncio.run(fetch_json("https://example.test/x.json"))
        assert get.call_count == 1

    def test_shutting_down(self) -> None:
        with patch.object(client.shutdown_event, "is_set", return_value=True):
            with pytest.raises(ServerShuttingDownError):
                asyncio.run(fetch_json("https://example.test/x.json"))
