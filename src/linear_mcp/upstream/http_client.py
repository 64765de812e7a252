"""Shared async HTTP client for Linear API calls.

One pooled ``httpx.AsyncClient`` is created lazily and reused by every
GraphQL request; ``close_http_client`` is awaited at shutdown.
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

_http_client: Optional[httpx.AsyncClient] = None


def get_http_client() -> httpx.AsyncClient:
    """Return the shared HTTP client, creating it on first use."""
    global _http_client

    if _http_client is None or _http_client.is_closed:
        from ..config import get_settings

        settings = get_settings()
        _http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout),
            limits=httpx.Limits(
                max_connections=settings.http_max_connections,
                max_keepalive_connections=settings.http_max_connections,
            ),
        )
        logger.debug(
            "Created shared HTTP client (timeout=%.1fs, max_connections=%d)",
            settings.http_timeout,
            settings.http_max_connections,
        )
    return _http_client


async def close_http_client() -> None:
    """Close the shared HTTP client if it was created."""
    global _http_client

    if _http_client is not None and not _http_client.is_closed:
        await _http_client.aclose()
        logger.debug("Closed shared HTTP client")
    _http_client = None
