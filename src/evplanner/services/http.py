"""Shared HTTP plumbing for the external data providers."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from ..config import settings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def build_client(timeout: float | None = None, headers: dict[str, str] | None = None) -> httpx.Client:
    """Create an HTTP client with a bounded per-call timeout."""
    return httpx.Client(
        timeout=httpx.Timeout(
            timeout if timeout is not None else settings.http_timeout_seconds,
            connect=settings.http_connect_timeout_seconds,
        ),
        headers=headers,
    )


def request_json(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    params: dict[str, Any] | None = None,
    json_body: Any = None,
    max_retries: int | None = None,
    backoff_seconds: float | None = None,
    service: str = "provider",
) -> Any:
    """Send a request and decode its JSON body, retrying transient failures.

    Timeouts, network errors, 429 and 5xx responses are retried with exponential
    backoff. Other 4xx responses raise immediately. Exhausted network failures are
    raised as ``ConnectionError``.
    """
    retries = max_retries if max_retries is not None else settings.http_max_retries
    backoff = backoff_seconds if backoff_seconds is not None else settings.http_backoff_seconds

    attempt = 0
    while True:
        try:
            response = client.request(method, url, params=params, json=json_body)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code not in RETRYABLE_STATUS_CODES:
                raise
            attempt += 1
            if attempt > retries:
                raise
            wait_time = backoff * (2 ** (attempt - 1))
            logger.debug(
                f"{service} returned {e.response.status_code}, retrying in {wait_time:.1f}s (attempt {attempt}/{retries})"
            )
            time.sleep(wait_time)
        except httpx.TimeoutException as e:
            attempt += 1
            if attempt > retries:
                logger.warning(f"{service} request timed out after {retries + 1} attempts: {e}")
                raise ConnectionError(f"{service} request to {url} timed out") from e
            wait_time = backoff * (2 ** (attempt - 1))
            logger.debug(f"{service} timeout, retrying in {wait_time:.1f}s (attempt {attempt}/{retries})")
            time.sleep(wait_time)
        except (httpx.ConnectError, httpx.NetworkError) as e:
            attempt += 1
            if attempt > retries:
                raise ConnectionError(f"Failed to connect to {service} at {url}: {e}") from e
            wait_time = backoff * (2 ** (attempt - 1))
            logger.debug(f"{service} network error, retrying in {wait_time:.1f}s (attempt {attempt}/{retries}): {e}")
            time.sleep(wait_time)
