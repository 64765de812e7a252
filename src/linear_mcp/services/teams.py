"""Team listing and team cycle classification."""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from ..errors import ErrorKind, LinearToolError, invalid_request
from ..models.dto import CycleDTO, TeamDTO
from ..upstream.entities import Cycle
from .base import BaseService

logger = logging.getLogger(__name__)


def classify_cycle(cycle: Cycle, team_id: str, now: Optional[datetime] = None) -> CycleDTO:
    """Derive isActive/isCompleted from dates rather than upstream flags.

    A cycle is active only when both dates are known, ``now`` lies within
    them, and it has no completion timestamp.
    """
    now = now or datetime.now(timezone.utc)
    is_completed = cycle.completed_at is not None
    is_active = False
    if cycle.starts_at and cycle.ends_at:
        is_active = cycle.starts_at <= now <= cycle.ends_at and not is_completed

    return CycleDTO(
        id=cycle.id,
        number=cycle.number,
        name=cycle.name or "",
        starts_at=cycle.starts_at,
        ends_at=cycle.ends_at,
        is_active=is_active,
        is_completed=is_completed,
        team_id=team_id,
    )


class TeamService(BaseService):
    async def get_teams(self, name_filter: Optional[str] = None) -> List[TeamDTO]:
        """List teams, optionally filtered by case-insensitive name/key substring."""
        try:
            teams = [team for team in await self.client.teams() if team and team.id]

            if name_filter:
                needle = name_filter.lower()
                teams = [
                    team for team in teams
                    if needle in (team.name or "").lower()
                    or needle in (team.key or "").lower()
                ]

            return [
                TeamDTO(
                    id=team.id,
                    name=team.name or "",
                    key=team.key or "",
                    description=team.description or None,
                )
                for team in teams
            ]
        except Exception as e:
            raise LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "Failed to fetch teams", e)

    async def get_team_cycles(self, team_id: str) -> List[CycleDTO]:
        try:
            teams = await self.client.teams()
            team = next((t for t in teams if t.id == team_id), None)
            if not team:
                raise invalid_request(f"Team not found: {team_id}")

            cycles = await team.cycles()
            logger.debug("Fetched %d cycles for team %s", len(cycles), team_id)

            now = datetime.now(timezone.utc)
            return [classify_cycle(cycle, team.id, now) for cycle in cycles]
        except LinearToolError:
            raise
        except Exception as e:
            raise LinearToolError.wrap(
                ErrorKind.INTERNAL_ERROR, "Failed to fetch team cycles", e
            )
