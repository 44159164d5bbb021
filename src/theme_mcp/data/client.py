"""Async client for the theme JSON store with bounded concurrency and retry logic.

The store is a static raw-JSON tree:
    {base}/theme/{themeId}.json     one theme graph
    {base}/theme/index.json         theme list
    {base}/search/search_index.json search index (schema search_v3)
"""

import asyncio
import logging
import os
import random
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, TypeVar

import requests
from requests.exceptions import HTTPError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://raw.githubusercontent.com/kang0302/import_MT/main/data"
BASE_URL = os.environ.get("THEME_DATA_BASE_URL", DEFAULT_BASE_URL).rstrip("/")

# Bounded concurrency for HTTP calls
_max_workers = int(os.environ.get("THEME_MAX_WORKERS", "4"))
_executor = ThreadPoolExecutor(max_workers=_max_workers)
_fetch_semaphore = asyncio.Semaphore(_max_workers)

# Retry configuration
_max_retries = int(os.environ.get("THEME_MAX_RETRIES", "3"))
_base_delay = float(os.environ.get("THEME_BASE_DELAY", "1.0"))  # seconds
_max_delay = float(os.environ.get("THEME_MAX_DELAY", "30.0"))  # seconds
_timeout = float(os.environ.get("THEME_HTTP_TIMEOUT", "10.0"))  # seconds

# Shutdown coordination
shutdown_event = asyncio.Event()

T = TypeVar("T")


class ServerShuttingDownError(Exception):
    """Raised when server is shutting down."""

    pass


class ThemeNotFoundError(LookupError):
    """Raised when the store has no document at the requested URL."""

    def __init__(self, url: str):
        super().__init__(f"Not found: {url}")
        self.url = url


class ThemeFetchRetryError(Exception):
    """Raised when a fetch fails after all retries."""

    def __init__(self, message: str, last_error: Exception | None = None):
        super().__init__(message)
        self.last_error = last_error


def theme_url(theme_id: str) -> str:
    return f"{BASE_URL}/theme/{theme_id}.json"


def theme_index_url() -> str:
    return f"{BASE_URL}/theme/index.json"


def search_index_url() -> str:
    return f"{BASE_URL}/search/search_index.json"


def _is_retryable_error(error: Exception) -> bool:
    """Transient errors: rate limiting, 5xx, connection problems and timeouts."""
    if isinstance(error, HTTPError) and error.response is not None:
        status_code = error.response.status_code
        return status_code == 429 or 500 <= status_code < 600
    if isinstance(error, (requests.ConnectionError, requests.Timeout)):
        return True
    return False


def _calculate_backoff(attempt: int) -> float:
    """Calculate delay with exponential backoff and jitter."""
    delay = _base_delay * (2**attempt)
    # Jitter (±25%)
    jitter = delay * 0.25 * (2 * random.random() - 1)
    return min(delay + jitter, _max_delay)


@dataclass
class RetryResult:
    """Result of a retry operation with provenance tracking."""

    result: Any
    attempts: int
    total_backoff_seconds: float
    url: str

    def to_provenance(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "attempts": self.attempts,
            "total_backoff_seconds": self.total_backoff_seconds,
        }


async def _retry_with_backoff(
    url: str,
    sync_func: Callable[[], T],
    max_retries: int = _max_retries,
) -> RetryResult:
    """
    Execute a blocking fetch in the executor with retry logic.

    Raises:
        ThemeFetchRetryError: If all retries exhausted
        ThemeNotFoundError: On 404 (never retried)
        ServerShuttingDownError: If server is shutting down
    """
    last_error: Exception | None = None
    total_backoff = 0.0

    for attempt in range(max_retries + 1):
        if shutdown_event.is_set():
            raise ServerShuttingDownError("Server is shutting down")

        try:
            loop = asyncio.get_running_loop()
            result = await loop.run_in_executor(_executor, sync_func)
            return RetryResult(
                result=result,
                attempts=attempt + 1,
                total_backoff_seconds=round(total_backoff, 2),
                url=url,
            )
        except HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                raise ThemeNotFoundError(url) from e
            last_error = e
        except Exception as e:
            last_error = e

        if not _is_retryable_error(last_error):
            raise last_error

        if attempt >= max_retries:
            logger.warning(
                f"GET {url}: Failed after {attempt + 1} attempts. Last error: {last_error}"
            )
            raise ThemeFetchRetryError(
                f"Failed after {attempt + 1} attempts: {last_error}",
                last_error=last_error,
            ) from last_error

        delay = _calculate_backoff(attempt)
        total_backoff += delay
        logger.info(
            f"GET {url}: Attempt {attempt + 1} failed ({last_error}). Retrying in {delay:.1f}s..."
        )
        await asyncio.sleep(delay)

    raise ThemeFetchRetryError(f"Failed after {max_retries + 1} attempts", last_error=last_error)


def _get_json(url: str) -> Any:
    response = requests.get(url, timeout=_timeout, headers={"Cache-Control": "no-store"})
    response.raise_for_status()
    return response.json()


async def fetch_json_with_provenance(url: str) -> tuple[Any, dict[str, Any]]:
    """
    GET and decode a JSON document.

    Returns:
        Tuple of (decoded JSON, provenance dict)

    Raises:
        ServerShuttingDownError: If server is shutting down
        ThemeNotFoundError: If the document does not exist
        ThemeFetchRetryError: If all retries exhausted for retryable errors
        ValueError: If the body is not valid JSON
    """
    if shutdown_event.is_set():
        raise ServerShuttingDownError("Server is shutting down")

    async with _fetch_semaphore:
        retry_result = await _retry_with_backoff(url, lambda: _get_json(url))
        return retry_result.result, retry_result.to_provenance()


async def fetch_json(url: str) -> Any:
    """GET and decode a JSON document (see fetch_json_with_provenance)."""
    payload, _ = await fetch_json_with_provenance(url)
    return payload


async def shutdown_executor() -> None:
    """Cleanup on server shutdown."""
    shutdown_event.set()
    _executor.shutdown(wait=False, cancel_futures=True)
