"""Resolution of symbolic cycle references to concrete cycle ids."""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional, Union

from ..errors import invalid_params, invalid_request
from ..upstream.client import LinearClient
from .base import BaseService
from .teams import TeamService

CycleType = Literal["current", "next", "previous", "specific"]

_CYCLE_NUMBER = re.compile(r"\d+", re.ASCII)
_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def is_cycle_number(value: Optional[str]) -> bool:
    return isinstance(value, str) and _CYCLE_NUMBER.fullmatch(value) is not None


@dataclass
class CycleFilter:
    """``{type, teamId, id?}`` as accepted by search filters and update_issue."""

    type: CycleType
    team_id: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "CycleFilter":
        cycle_id = raw.get("id")
        # Cycle numbers often arrive as JSON numbers
        if isinstance(cycle_id, int) and not isinstance(cycle_id, bool):
            cycle_id = str(cycle_id)
        elif cycle_id is not None and not isinstance(cycle_id, str):
            raise invalid_params(
                f"Invalid cycle id: {cycle_id!r}. Expected a cycle id or cycle number"
            )
        return cls(
            type=raw.get("type", ""),
            team_id=raw.get("teamId"),
            id=cycle_id,
        )


def _start(cycle) -> datetime:
    return cycle.starts_at or _EARLIEST


def _end(cycle) -> datetime:
    return cycle.ends_at or _EARLIEST


class CycleService(BaseService):
    def __init__(self, client_or_api_key: Union[str, LinearClient]):
        super().__init__(client_or_api_key)
        self.team_service = TeamService(self.client)

    async def resolve_cycle_filter(self, cycle_filter: CycleFilter) -> str:
        """Resolve current/next/previous/specific to a cycle id.

        A ``specific`` filter whose id is not a plain number is already a cycle
        id and is returned as-is without any lookup.
        """
        cycle_type, cycle_id, team_id = cycle_filter.type, cycle_filter.id, cycle_filter.team_id

        if cycle_type == "specific" and cycle_id and not is_cycle_number(cycle_id):
            return cycle_id

        if not team_id:
            raise invalid_request(f"teamId is required for cycle type: {cycle_type}")

        cycles = await self.team_service.get_team_cycles(team_id)
        if not cycles:
            raise invalid_request(f"No cycles found for team {team_id}")

        if cycle_type == "specific" and is_cycle_number(cycle_id):
            number = int(cycle_id)
            match = next((c for c in cycles if c.number == number), None)
            if not match:
                raise invalid_request(
                    f"No cycle found with number {number} for team {team_id}"
                )
            return match.id

        by_start = sorted(cycles, key=_start, reverse=True)
        active = next((c for c in by_start if c.is_active), None)
        completed = sorted(
            (c for c in by_start if c.is_completed), key=_end, reverse=True
        )
        upcoming = sorted(
            (c for c in by_start if not c.is_active and not c.is_completed), key=_start
        )

        if cycle_type == "current":
            if not active:
                raise invalid_request(f"No active cycle found for team {team_id}")
            return active.id
        elif cycle_type == "next":
            if not upcoming:
                raise invalid_request(f"No upcoming cycles found for team {team_id}")
            return upcoming[0].id
        elif cycle_type == "previous":
            if not completed:
                raise invalid_request(f"No completed cycles found for team {team_id}")
            return completed[0].id
        else:
            raise invalid_request(f"Invalid cycle type: {cycle_type}")
