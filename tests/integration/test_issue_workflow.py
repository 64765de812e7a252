"""End-to-end tool calls through LinearMCPServer against a Linear client double."""

import json

import pytest

from linear_mcp.errors import ErrorKind, LinearToolError
from linear_mcp.mcp.server import LinearMCPServer
from linear_mcp.services import LinearAPIService
from linear_mcp.upstream.entities import Issue
from tests.conftest import CURRENT_USER_ID, issue_node, make_issue, register_issues, team_node

pytestmark = pytest.mark.asyncio


@pytest.fixture
def server(client):
    return LinearMCPServer(LinearAPIService(client))


@pytest.fixture
def parent(client):
    return make_issue(
        client, issue_id="parent-1", identifier="ENG-1", title="Parent", team=team_node()
    )


async def test_sub_issue_inherits_parent_team(client, server, parent):
    child = Issue(client, issue_node(
        "child-1", "ENG-2", title="Child", team=team_node(),
        parent={"id": "parent-1", "identifier": "ENG-1", "title": "Parent"},
    ))
    register_issues(client, parent, child)
    client.create_issue.return_value = child

    text = await server.call_tool(
        "create_issue", {"title": "Child", "parentId": "ENG-1", "assigneeId": "me"}
    )

    client.create_issue.assert_awaited_once_with({
        "teamId": "team-1",
        "title": "Child",
        "assigneeId": CURRENT_USER_ID,
        "parentId": "ENG-1",
    })
    payload = json.loads(text)
    assert payload["identifier"] == "ENG-2"
    assert payload["teamName"] == "Engineering"
    assert payload["parent"] == {"id": "parent-1", "identifier": "ENG-1", "title": "Parent"}
    assert payload["relationships"][0] == {
        "type": "parent", "issueId": "parent-1", "identifier": "ENG-1", "title": "Parent",
    }


async def test_update_rejects_out_of_range_priority(client, server, parent):
    register_issues(client, parent)

    with pytest.raises(LinearToolError) as exc_info:
        await server.call_tool("update_issue", {"issueId": "ENG-1", "priority": 5})

    assert exc_info.value.kind == ErrorKind.INVALID_PARAMS
    client.update_issue.assert_not_awaited()


async def test_update_then_read_back(client, server, parent):
    register_issues(client, parent)

    text = await server.call_tool("update_issue", {"issueId": "ENG-1", "title": "Renamed", "priority": 2})

    client.update_issue.assert_awaited_once_with("parent-1", {"title": "Renamed", "priority": 2})
    assert json.loads(text)["identifier"] == "ENG-1"


async def test_search_resolves_me(client, server):
    client.issues.return_value = [make_issue(client, team=team_node(), priority=2)]

    text = await server.call_tool(
        "search_issues", {"query": "bug", "filter": {"assignedTo": "me"}}
    )

    sent = json.dumps(client.issues.await_args.kwargs["filter"])
    assert CURRENT_USER_ID in sent
    assert '"me"' not in sent
    client.viewer.assert_awaited_once()
    assert json.loads(text) == [{
        "id": "issue-1",
        "identifier": "ENG-1",
        "title": "Test Issue",
        "priority": 2,
        "teamName": "Engineering",
        "labels": [],
    }]


async def test_delete_missing_issue(client, server):
    with pytest.raises(LinearToolError) as exc_info:
        await server.call_tool("delete_issue", {"issueId": "ENG-404"})

    assert exc_info.value.kind == ErrorKind.INVALID_REQUEST
    assert str(exc_info.value) == "Issue not found: ENG-404"
