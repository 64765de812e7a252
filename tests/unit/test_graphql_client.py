"""Tests for GraphQLClient (execute, fetch_page, pagination).

get_http_client is imported lazily inside GraphQLClient.execute(), so it is
patched at its source module: linear_mcp.upstream.http_client.get_http_client
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from linear_mcp.upstream.exceptions import UpstreamAPIError
from linear_mcp.upstream.graphql import GraphQLClient, operation_name

ENDPOINT = "https://api.linear.app/graphql"
ISSUES_QUERY = "query($first: Int!, $after: String) { issues(first: $first, after: $after) { nodes { id } pageInfo { hasNextPage endCursor } } }"

pytestmark = pytest.mark.asyncio


def _make_response(json_data, status_code=200):
    """A mock httpx.Response with .json(), .status_code and a no-op raise_for_status()."""
    resp = MagicMock()
    resp.json.return_value = json_data
    resp.status_code = status_code
    resp.raise_for_status = MagicMock()
    return resp


def _page(nodes, has_next=False, cursor=None, path=("issues",)):
    connection = {"nodes": nodes, "pageInfo": {"hasNextPage": has_next, "endCursor": cursor}}
    for key in reversed(path):
        connection = {key: connection}
    return _make_response({"data": connection})


@pytest.fixture
def http():
    """The shared HTTP client, replaced by an AsyncMock."""
    mock_client = AsyncMock()
    with patch("linear_mcp.upstream.http_client.get_http_client", return_value=mock_client):
        yield mock_client


@pytest.fixture
def graphql():
    return GraphQLClient(endpoint=ENDPOINT, auth_value="lin_api_key")


def _sent_json(http, call_index=-1):
    return http.post.call_args_list[call_index].kwargs["json"]


class TestExecute:
    async def test_returns_data(self, http, graphql):
        http.post.return_value = _make_response({"data": {"viewer": {"id": "user-1"}}})

        assert await graphql.execute("query { viewer { id } }") == {"viewer": {"id": "user-1"}}

        http.post.assert_awaited_once()
        assert http.post.call_args.args[0] == ENDPOINT

    async def test_sends_api_key_and_variables(self, http, graphql):
        http.post.return_value = _make_response({"data": {"issue": {"id": "1"}}})

        await graphql.execute("query($id: String!) { issue(id: $id) { id } }", {"id": "ENG-1"})

        headers = http.post.call_args.kwargs["headers"]
        assert headers["Authorization"] == "lin_api_key"
        assert headers["Content-Type"] == "application/json"
        assert _sent_json(http)["variables"] == {"id": "ENG-1"}

    async def test_variables_omitted_when_empty(self, http, graphql):
        http.post.return_value = _make_response({"data": {}})

        await graphql.execute("query { viewer { id } }")

        assert "variables" not in _sent_json(http)

    async def test_graphql_errors_raise(self, http, graphql):
        http.post.return_value = _make_response({
            "data": None,
            "errors": [{"message": "Entity not found"}, {"message": "Second problem"}],
        })

        with pytest.raises(UpstreamAPIError) as exc_info:
            await graphql.execute("query { issue(id: \"x\") { id } }")

        assert str(exc_info.value) == "GraphQL error: Entity not found; Second problem"
        assert exc_info.value.status_code == 200

    async def test_null_data_is_empty_dict(self, http, graphql):
        http.post.return_value = _make_response({"data": None})
        assert await graphql.execute("query { ok }") == {}


class TestFetchPage:
    async def test_returns_connection(self, http, graphql):
        http.post.return_value = _page([{"id": "1"}], has_next=True, cursor="c1")

        page = await graphql.fetch_page(ISSUES_QUERY, {"first": 1}, connection_path="issues")

        assert page["nodes"] == [{"id": "1"}]
        assert page["pageInfo"] == {"hasNextPage": True, "endCursor": "c1"}

    async def test_null_hop_returns_empty_connection(self, http, graphql):
        http.post.return_value = _make_response({"data": {"team": None}})

        page = await graphql.fetch_page(ISSUES_QUERY, connection_path="team.cycles")

        assert page == {"nodes": [], "pageInfo": {"hasNextPage": False, "endCursor": None}}


class TestPagination:
    async def test_follows_cursor_across_pages(self, http, graphql):
        http.post.side_effect = [
            _page([{"id": "1"}], has_next=True, cursor="after-1"),
            _page([{"id": "2"}], has_next=False, cursor="after-2"),
        ]

        nodes = [node async for node in graphql.paginate_connection(ISSUES_QUERY, connection_path="issues")]

        assert nodes == [{"id": "1"}, {"id": "2"}]
        assert "after" not in _sent_json(http, 0)["variables"]
        assert _sent_json(http, 1)["variables"]["after"] == "after-1"
        assert _sent_json(http, 0)["variables"]["first"] == 50

    async def test_nested_path(self, http, graphql):
        http.post.return_value = _page([{"id": "s1"}], path=("team", "states"))

        items = await graphql.collect_connection(
            ISSUES_QUERY, {"id": "team-1"}, connection_path="team.states"
        )

        assert items == [{"id": "s1"}]
        assert _sent_json(http)["variables"]["id"] == "team-1"

    async def test_stops_without_cursor(self, http, graphql):
        http.post.return_value = _page([{"id": "1"}], has_next=True, cursor=None)

        items = await graphql.collect_connection(ISSUES_QUERY, connection_path="issues")

        assert items == [{"id": "1"}]
        assert http.post.await_count == 1

    async def test_collect_respects_max_items(self, http, graphql):
        http.post.return_value = _page(
            [{"id": str(i)} for i in range(5)], has_next=True, cursor="c1"
        )

        items = await graphql.collect_connection(ISSUES_QUERY, connection_path="issues", max_items=2)

        assert items == [{"id": "0"}, {"id": "1"}]


class TestOperationName:
    async def test_named_operations(self):
        assert operation_name("\nquery GetIssue($id: String!) { issue(id: $id) { id } }") == "GetIssue"
        assert operation_name("mutation DeleteIssue($id: String!) { issueDelete(id: $id) { success } }") == "DeleteIssue"

    async def test_anonymous_operation(self):
        assert operation_name("query { viewer { id } }") == ""
        assert operation_name(ISSUES_QUERY) == ""

    async def test_graphql_errors_carry_operation(self, http, graphql):
        http.post.return_value = _make_response({"errors": [{"message": "Entity not found"}]})

        with pytest.raises(UpstreamAPIError) as exc_info:
            await graphql.execute("query GetIssue($id: String!) { issue(id: $id) { id } }", {"id": "x"})

        assert exc_info.value.operation == "GetIssue"
