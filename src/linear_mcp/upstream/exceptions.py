"""Failures of calls to the Linear GraphQL API.

``guard.guarded_request`` and ``GraphQLClient.execute`` raise these; each
carries the GraphQL operation name (``GetIssue``, ``CreateDocument``...) that
failed. ``LinearClient`` turns not-found lookups into ``None``; everything
else reaches a service, which wraps it into a ``LinearToolError``.
"""

from typing import Optional


class UpstreamError(Exception):
    """A Linear API call failed."""

    def __init__(self, message: str, operation: str = ""):
        self.operation = operation
        super().__init__(message)


class UpstreamAuthError(UpstreamError):
    """The API key was rejected: HTTP 401/403 or an AUTHENTICATION_ERROR body."""


class UpstreamRateLimitError(UpstreamError):
    """Linear's request or complexity budget is exhausted.

    ``retry_after`` is the Retry-After header in seconds when Linear sent one.
    """

    def __init__(
        self,
        message: str,
        retry_after: Optional[float] = None,
        operation: str = "",
    ):
        self.retry_after = retry_after
        super().__init__(message, operation)


class UpstreamAPIError(UpstreamError):
    """An error status, or a 200 response whose body lists GraphQL ``errors``.

    ``status_code`` is 200 for GraphQL-level errors; ``response_body`` keeps
    at most 500 characters of what Linear returned.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        response_body: str = "",
        operation: str = "",
    ):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message, operation)


class UpstreamNotFoundError(UpstreamAPIError):
    """HTTP 404 from the endpoint itself (Linear reports missing entities as GraphQL errors)."""

    def __init__(self, message: str, operation: str = ""):
        super().__init__(message, status_code=404, operation=operation)


class UpstreamTimeoutError(UpstreamError):
    """api.linear.app could not be reached or did not answer within ``HTTP_TIMEOUT``."""
