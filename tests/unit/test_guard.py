"""Tests for guarded_request: HTTP failures map onto upstream exceptions, no retries."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from linear_mcp.upstream.exceptions import (
    UpstreamAPIError,
    UpstreamAuthError,
    UpstreamNotFoundError,
    UpstreamRateLimitError,
    UpstreamTimeoutError,
)
from linear_mcp.upstream.guard import _parse_retry_after, guarded_request

pytestmark = pytest.mark.asyncio


def _make_http_error(status_code: int, headers=None, body=None) -> httpx.HTTPStatusError:
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.text = f"Error {status_code}"
    response.headers = headers or {}
    if body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return httpx.HTTPStatusError(
        str(status_code), request=MagicMock(spec=httpx.Request), response=response
    )


async def test_success_passes_through():
    fn = AsyncMock(return_value="ok")

    assert await guarded_request(fn, 1, key="v") == "ok"
    fn.assert_awaited_once_with(1, key="v")


@pytest.mark.parametrize("status", [401, 403])
async def test_auth_failures(status):
    fn = AsyncMock(side_effect=_make_http_error(status))

    with pytest.raises(UpstreamAuthError, match=f"HTTP {status}"):
        await guarded_request(fn)
    assert fn.await_count == 1


async def test_rate_limit_reports_retry_after_without_retrying():
    fn = AsyncMock(side_effect=_make_http_error(429, {"Retry-After": "12"}))

    with pytest.raises(UpstreamRateLimitError) as exc_info:
        await guarded_request(fn)

    assert exc_info.value.retry_after == 12.0
    assert fn.await_count == 1


async def test_not_found():
    fn = AsyncMock(side_effect=_make_http_error(404))

    with pytest.raises(UpstreamNotFoundError) as exc_info:
        await guarded_request(fn)

    assert exc_info.value.status_code == 404


async def test_server_error_keeps_body():
    fn = AsyncMock(side_effect=_make_http_error(502))

    with pytest.raises(UpstreamAPIError) as exc_info:
        await guarded_request(fn)

    assert exc_info.value.status_code == 502
    assert exc_info.value.response_body == "Error 502"
    assert fn.await_count == 1


@pytest.mark.parametrize("error", [
    httpx.ConnectError("refused"),
    httpx.ReadTimeout("slow"),
])
async def test_connection_problems(error):
    fn = AsyncMock(side_effect=error)

    with pytest.raises(UpstreamTimeoutError, match=type(error).__name__):
        await guarded_request(fn)


async def test_operation_is_recorded():
    fn = AsyncMock(side_effect=_make_http_error(502))

    with pytest.raises(UpstreamAPIError) as exc_info:
        await guarded_request(fn, operation="GetIssue")

    assert exc_info.value.operation == "GetIssue"


class TestGraphQLErrorBodies:
    async def test_ratelimited_code_on_400(self):
        body = {"errors": [{"message": "Rate limit exceeded", "extensions": {"code": "RATELIMITED"}}]}
        fn = AsyncMock(side_effect=_make_http_error(400, body=body))

        with pytest.raises(UpstreamRateLimitError, match="HTTP 400"):
            await guarded_request(fn)

    async def test_authentication_code_on_400(self):
        body = {"errors": [{"message": "Invalid key", "extensions": {"code": "AUTHENTICATION_ERROR"}}]}
        fn = AsyncMock(side_effect=_make_http_error(400, body=body))

        with pytest.raises(UpstreamAuthError):
            await guarded_request(fn)

    async def test_other_errors_keep_messages(self):
        body = {"errors": [{"message": "Argument Validation Error"}, {"message": "Unknown field"}]}
        fn = AsyncMock(side_effect=_make_http_error(400, body=body))

        with pytest.raises(UpstreamAPIError) as exc_info:
            await guarded_request(fn)

        assert str(exc_info.value) == "GraphQL error: Argument Validation Error; Unknown field"
        assert exc_info.value.status_code == 400


class TestParseRetryAfter:
    @pytest.mark.parametrize("headers,expected", [
        ({"Retry-After": "5"}, 5.0),
        ({"retry-after": "1.5"}, 1.5),
        ({"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"}, None),
        ({}, None),
    ])
    async def test_values(self, headers, expected):
        response = MagicMock(spec=httpx.Response)
        response.headers = headers
        assert _parse_retry_after(response) == expected
