"""Tests for LinearToolError wrapping and protocol mapping."""

from mcp import types
from mcp.shared.exceptions import McpError

from linear_mcp.errors import (
    ErrorKind,
    LinearToolError,
    internal_error,
    invalid_params,
    invalid_request,
    method_not_found,
)


class TestLinearToolError:
    def test_codes_match_json_rpc(self):
        assert invalid_request("x").code == types.INVALID_REQUEST
        assert invalid_params("x").code == types.INVALID_PARAMS
        assert internal_error("x").code == types.INTERNAL_ERROR
        assert method_not_found("x").code == types.METHOD_NOT_FOUND

    def test_wrap_prefixes_message_and_chains(self):
        inner = invalid_request("Issue not found: ENG-9")

        outer = LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "Failed to update issue", inner)

        assert str(outer) == "Failed to update issue: Issue not found: ENG-9"
        assert outer.cause is inner
        assert outer.__cause__ is inner

    def test_wrap_plain_exception(self):
        outer = LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "Failed to fetch teams", RuntimeError("boom"))

        assert str(outer) == "Failed to fetch teams: boom"
        assert outer.root_cause is outer

    def test_wrap_without_prefix(self):
        outer = LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "", ValueError("bad"))
        assert str(outer) == "bad"

    def test_root_cause_walks_chain(self):
        inner = invalid_params("Invalid priority value")
        middle = LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "Failed to resolve", inner)
        outer = LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "Failed to update issue", middle)

        assert outer.root_cause is inner
        assert outer.root_cause.kind == ErrorKind.INVALID_PARAMS

    def test_to_mcp_error(self):
        error = invalid_params("Invalid priority value").to_mcp_error()

        assert isinstance(error, McpError)
        assert error.error.code == types.INVALID_PARAMS
        assert error.error.message == "Invalid priority value"

    def test_repr(self):
        assert repr(internal_error("boom")) == "LinearToolError(INTERNAL_ERROR, 'boom')"
