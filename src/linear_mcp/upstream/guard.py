"""Failure mapping for Linear HTTP requests.

Linear answers most failures with a GraphQL error body. Rate limiting and
authentication problems usually arrive as HTTP 400 with an
``extensions.code`` of ``RATELIMITED`` or ``AUTHENTICATION_ERROR`` rather than
as 429/401, so both the status and the body are inspected.

There are no retries here: a failed call is reported once, tagged with the
GraphQL operation name, and the caller decides what to do.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

import httpx

from .exceptions import (
    UpstreamAPIError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamNotFoundError,
    UpstreamRateLimitError,
    UpstreamTimeoutError,
)

logger = logging.getLogger(__name__)

AUTH_FAILURE_CODES: Set[int] = {401, 403}

RATE_LIMITED = "RATELIMITED"
AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"


async def guarded_request(
    fn: Callable[..., Awaitable[Any]],
    *args: Any,
    operation: str = "",
    **kwargs: Any,
) -> Any:
    """Await one HTTP call, translating its failures into upstream exceptions.

    Raises:
        UpstreamAuthError: On 401/403 or an AUTHENTICATION_ERROR body.
        UpstreamRateLimitError: On 429 or a RATELIMITED body.
        UpstreamNotFoundError: On 404.
        UpstreamAPIError: On any other HTTP error status.
        UpstreamTimeoutError: On connection errors and timeouts.
    """
    try:
        return await fn(*args, **kwargs)
    except httpx.HTTPStatusError as exc:
        error = _status_error(exc.response, operation)
        logger.warning("Linear %s failed: %s", operation or "request", error)
        raise error from exc
    except (httpx.ConnectError, httpx.TimeoutException) as exc:
        logger.warning(
            "Linear %s connection error: %s", operation or "request", type(exc).__name__
        )
        raise UpstreamTimeoutError(
            f"Request failed: {type(exc).__name__}", operation=operation
        ) from exc


def _status_error(response: httpx.Response, operation: str) -> UpstreamError:
    status = response.status_code
    errors = _graphql_errors(response)
    codes = {_error_code(e) for e in errors}

    if status in AUTH_FAILURE_CODES or AUTHENTICATION_ERROR in codes:
        return UpstreamAuthError(f"Authentication failed: HTTP {status}", operation=operation)

    if status == 429 or RATE_LIMITED in codes:
        return UpstreamRateLimitError(
            f"Rate limited: HTTP {status}",
            retry_after=_parse_retry_after(response),
            operation=operation,
        )

    if status == 404:
        return UpstreamNotFoundError("Not found: HTTP 404", operation=operation)

    if errors:
        messages = "; ".join(e.get("message") or "Unknown error" for e in errors)
        message = f"GraphQL error: {messages}"
    else:
        message = f"API error: HTTP {status}"
    return UpstreamAPIError(
        message,
        status_code=status,
        response_body=(response.text or "")[:500],
        operation=operation,
    )


def _graphql_errors(response: httpx.Response) -> List[Dict[str, Any]]:
    try:
        body = response.json()
    except ValueError:
        return []
    if not isinstance(body, dict) or not isinstance(body.get("errors"), list):
        return []
    return [e for e in body["errors"] if isinstance(e, dict)]


def _error_code(error: Dict[str, Any]) -> Optional[str]:
    extensions = error.get("extensions")
    if isinstance(extensions, dict):
        return extensions.get("code")
    return None


def _parse_retry_after(response: httpx.Response) -> Optional[float]:
    """Seconds from the Retry-After header; HTTP-date values are ignored."""
    value = response.headers.get("Retry-After") or response.headers.get("retry-after")
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None
