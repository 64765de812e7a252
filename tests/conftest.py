"""Test configuration and fixtures."""

import os
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment variables BEFORE importing the package
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("LINEAR_API_KEY", "lin_api_test_key")

from linear_mcp.upstream.entities import Issue, Team, User  # noqa: E402

# Client accessors and what they return when a test does not configure them.
CLIENT_DEFAULTS: Dict[str, Any] = {
    "issue": None,
    "fetch_issue_node": None,
    "issues": [],
    "create_issue": None,
    "update_issue": True,
    "delete_issue": True,
    "issue_labels": [],
    "issue_children": [],
    "issue_relations": [],
    "issue_comments": [],
    "create_comment": None,
    "teams": [],
    "team": None,
    "team_states": [],
    "team_cycles": [],
    "project": None,
    "projects": None,
    "project_teams": [],
    "project_updates": None,
    "create_project_update": None,
    "document": None,
    "documents": None,
    "create_document": None,
    "document_update": None,
    "delete_document": True,
}

CURRENT_USER_ID = "current-user"


# ---------------------------------------------------------------------------
# Node builders (raw GraphQL shapes)
# ---------------------------------------------------------------------------

def user_node(user_id: str = "user-1", name: str = "John Doe", **extra) -> Dict[str, Any]:
    node = {"id": user_id, "name": name, "displayName": name.split()[0].lower()}
    node.update(extra)
    return node


def team_node(
    team_id: str = "team-1", name: str = "Engineering", key: str = "ENG", **extra
) -> Dict[str, Any]:
    node = {"id": team_id, "name": name, "key": key, "description": None}
    node.update(extra)
    return node


def issue_node(
    issue_id: str = "issue-1",
    identifier: str = "ENG-1",
    title: str = "Test Issue",
    description: Optional[str] = None,
    team: Optional[Dict[str, Any]] = None,
    state: Optional[Dict[str, Any]] = None,
    assignee: Optional[Dict[str, Any]] = None,
    creator: Optional[Dict[str, Any]] = None,
    parent: Optional[Dict[str, Any]] = None,
    priority: int = 0,
    **extra,
) -> Dict[str, Any]:
    """A fully selected issue node, so accessors never trigger a refetch."""
    node = {
        "id": issue_id,
        "identifier": identifier,
        "title": title,
        "description": description,
        "priority": priority,
        "estimate": None,
        "dueDate": None,
        "url": f"https://linear.app/test/issue/{identifier}",
        "createdAt": "2025-01-24T10:00:00.000Z",
        "updatedAt": "2025-01-24T11:00:00.000Z",
        "state": state,
        "assignee": assignee,
        "creator": creator,
        "team": team,
        "parent": parent,
    }
    node.update(extra)
    return node


# ---------------------------------------------------------------------------
# Client double
# ---------------------------------------------------------------------------

def make_client(current_user_id: str = CURRENT_USER_ID) -> MagicMock:
    """A LinearClient double whose accessors are AsyncMocks."""
    client = MagicMock(name="LinearClient")
    for method, default in CLIENT_DEFAULTS.items():
        setattr(client, method, AsyncMock(return_value=default))
    client.viewer = AsyncMock(
        return_value=User(client, user_node(current_user_id, "Current User"))
    )
    return client


def register_issues(client: MagicMock, *issues: Issue) -> None:
    """Make ``client.issue`` resolve the given issues by id or identifier."""
    by_key: Dict[str, Issue] = {}
    for issue in issues:
        by_key[issue.id] = issue
        by_key[issue.identifier] = issue
    client.issue.side_effect = lambda issue_id: by_key.get(issue_id)


def make_issue(client: MagicMock, **kwargs) -> Issue:
    return Issue(client, issue_node(**kwargs))


def make_team(client: MagicMock, **kwargs) -> Team:
    return Team(client, team_node(**kwargs))


@pytest.fixture
def client() -> MagicMock:
    return make_client()
