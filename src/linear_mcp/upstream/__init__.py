"""Linear API access: HTTP, GraphQL, and entity objects."""

from .client import LinearClient
from .exceptions import (
    UpstreamAPIError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamNotFoundError,
    UpstreamRateLimitError,
    UpstreamTimeoutError,
)

__all__ = [
    "LinearClient",
    "UpstreamError",
    "UpstreamAuthError",
    "UpstreamRateLimitError",
    "UpstreamAPIError",
    "UpstreamNotFoundError",
    "UpstreamTimeoutError",
]
