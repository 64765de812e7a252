"""Typed errors surfaced to MCP clients.

Every failure a tool call reports carries an :class:`ErrorKind` (a JSON-RPC
error code) and a message. Services raise :class:`LinearToolError` directly
for validation problems and use :meth:`LinearToolError.wrap` when they
deliberately re-wrap a lower-level failure under an operation prefix.
"""

from enum import Enum
from typing import Optional

from mcp import types
from mcp.shared.exceptions import McpError


class ErrorKind(int, Enum):
    INVALID_REQUEST = types.INVALID_REQUEST
    METHOD_NOT_FOUND = types.METHOD_NOT_FOUND
    INVALID_PARAMS = types.INVALID_PARAMS
    INTERNAL_ERROR = types.INTERNAL_ERROR


class LinearToolError(Exception):
    """An error with a protocol error kind and an optional chained cause."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        cause: Optional[BaseException] = None,
    ):
        self.kind = kind
        self.message = message
        self.cause = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    @property
    def code(self) -> int:
        return int(self.kind)

    @property
    def root_cause(self) -> "LinearToolError":
        """Innermost LinearToolError in the cause chain (self if none)."""
        current: LinearToolError = self
        while isinstance(current.cause, LinearToolError):
            current = current.cause
        return current

    @classmethod
    def wrap(
        cls, kind: ErrorKind, prefix: str, error: BaseException
    ) -> "LinearToolError":
        """Wrap ``error`` once more, prefixing its message."""
        message = f"{prefix}: {error}" if prefix else str(error)
        return cls(kind, message, cause=error)

    def to_mcp_error(self) -> McpError:
        return McpError(types.ErrorData(code=self.code, message=self.message))

    def __repr__(self) -> str:
        return f"LinearToolError({self.kind.name}, {self.message!r})"


def invalid_request(message: str) -> LinearToolError:
    return LinearToolError(ErrorKind.INVALID_REQUEST, message)


def invalid_params(message: str) -> LinearToolError:
    return LinearToolError(ErrorKind.INVALID_PARAMS, message)


def internal_error(message: str) -> LinearToolError:
    return LinearToolError(ErrorKind.INTERNAL_ERROR, message)


def method_not_found(message: str) -> LinearToolError:
    return LinearToolError(ErrorKind.METHOD_NOT_FOUND, message)
