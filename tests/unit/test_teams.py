"""Tests for TeamService.get_teams."""

import pytest

from linear_mcp.errors import ErrorKind, LinearToolError
from linear_mcp.services.teams import TeamService
from linear_mcp.upstream.entities import Team
from tests.conftest import make_team


pytestmark = pytest.mark.asyncio


@pytest.fixture
def teams(client):
    teams = [
        make_team(client, team_id="team-1", name="Engineering", key="ENG", description="Builds things"),
        make_team(client, team_id="team-2", name="Design", key="DES"),
        make_team(client, team_id="team-3", name="Platform", key="PLAT"),
    ]
    client.teams.return_value = teams
    return teams


async def test_lists_all_teams(client, teams):
    result = await TeamService(client).get_teams()

    assert [t.id for t in result] == ["team-1", "team-2", "team-3"]
    assert result[0].to_payload() == {
        "id": "team-1",
        "name": "Engineering",
        "key": "ENG",
        "description": "Builds things",
    }
    assert "description" not in result[1].to_payload()


async def test_filters_by_name_case_insensitive(client, teams):
    result = await TeamService(client).get_teams("engin")
    assert [t.id for t in result] == ["team-1"]


async def test_filters_by_key(client, teams):
    result = await TeamService(client).get_teams("plat")
    assert [t.key for t in result] == ["PLAT"]


async def test_skips_teams_without_id(client):
    client.teams.return_value = [Team(client, {"name": "Ghost"}), make_team(client)]

    result = await TeamService(client).get_teams()

    assert [t.id for t in result] == ["team-1"]


async def test_upstream_failure_is_wrapped(client):
    client.teams.side_effect = RuntimeError("API error")

    with pytest.raises(LinearToolError) as exc_info:
        await TeamService(client).get_teams()

    assert exc_info.value.kind == ErrorKind.INTERNAL_ERROR
    assert str(exc_info.value) == "Failed to fetch teams: API error"
