"""Issue retrieval, creation, update and deletion."""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from ..errors import ErrorKind, LinearToolError, internal_error, invalid_params, invalid_request
from ..models.dto import IssueDTO, IssueSummary
from ..upstream.client import LinearClient
from ..upstream.entities import Team
from .base import BaseService
from .cycles import CycleFilter, CycleService, is_cycle_number
from .utils import (
    clean_description,
    extract_mentions,
    format_timestamp,
    get_comments,
    get_relationships,
)

logger = logging.getLogger(__name__)

RELATIVE_CYCLES = ("current", "next", "previous")


def is_symbolic_cycle(cycle_id: str) -> bool:
    """True for current/next/previous or a bare cycle number; False for a cycle id."""
    return cycle_id in RELATIVE_CYCLES or is_cycle_number(cycle_id)


def _unique(values: List[str]) -> List[str]:
    return list(dict.fromkeys(values))


class IssueService(BaseService):
    def __init__(self, client_or_api_key: Union[str, LinearClient]):
        super().__init__(client_or_api_key)
        self.cycle_service = CycleService(self.client)

    async def get_issue(self, issue_id: str, include_relationships: bool = False) -> IssueDTO:
        """Fetch one issue with its relationships, labels and mentions.

        Comments are only fetched (and scanned for mentions) when
        ``include_relationships`` is set; relationships are always included.
        """
        try:
            issue = await self.client.issue(issue_id)
            if not issue:
                raise invalid_request(f"Issue not found: {issue_id}")

            state, assignee, team, creator, parent, labels, relationships = await asyncio.gather(
                issue.state(),
                issue.assignee(),
                issue.team(),
                issue.creator(),
                issue.parent(),
                issue.labels(),
                get_relationships(issue),
            )

            comments = await get_comments(issue) if include_relationships else None

            # Mentions come from the raw text, before markdown is stripped.
            mentions = extract_mentions(issue.description)
            mentioned_issues = list(mentions["issues"])
            mentioned_users = list(mentions["users"])
            for comment in comments or []:
                comment_mentions = extract_mentions(comment.body)
                mentioned_issues.extend(comment_mentions["issues"])
                mentioned_users.extend(comment_mentions["users"])

            return IssueDTO(
                id=issue.id,
                identifier=issue.identifier,
                title=issue.title,
                description=clean_description(issue.description),
                status=state.name if state else None,
                assignee=assignee.name if assignee else None,
                priority=issue.priority,
                created_at=format_timestamp(issue.created_at),
                updated_at=format_timestamp(issue.updated_at),
                team_name=team.name if team else None,
                creator_name=creator.name if creator else None,
                labels=[label.name for label in labels],
                estimate=issue.estimate,
                due_date=format_timestamp(issue.due_date),
                parent=(
                    IssueSummary(id=parent.id, identifier=parent.identifier, title=parent.title)
                    if parent else None
                ),
                sub_issues=[
                    IssueSummary(id=r.issue_id, identifier=r.identifier, title=r.title)
                    for r in relationships if r.type == "sub"
                ],
                comments=comments,
                relationships=relationships,
                mentioned_issues=_unique(mentioned_issues),
                mentioned_users=_unique(mentioned_users),
            )
        except LinearToolError:
            raise
        except Exception as e:
            raise LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "", e)

    async def _resolve_state_id(self, team: Team, status: str) -> str:
        """Match a workflow state of ``team`` by case-insensitive name."""
        try:
            states = await team.states()
        except Exception as e:
            raise LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "Failed to resolve status", e)

        match = next((s for s in states if s.name.lower() == status.lower()), None)
        if not match:
            valid = ", ".join(s.name for s in states)
            raise invalid_params(
                f'Invalid status name "{status}" for team "{team.name}". '
                f"Valid statuses are: {valid}"
            )
        return match.id

    async def create_issue(
        self,
        title: str,
        team_id: Optional[str] = None,
        parent_id: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[int] = None,
        assignee_id: Optional[str] = None,
        label_ids: Optional[List[str]] = None,
        project_id: Optional[str] = None,
    ) -> IssueDTO:
        """Create an issue, inheriting the team from ``parent_id`` when needed.

        Missing-parent and missing-team problems are raised as-is; every
        other failure is wrapped as "Failed to create issue: ...".
        """
        if parent_id:
            parent = await self.client.issue(parent_id)
            if not parent:
                raise invalid_request(f"Parent issue not found: {parent_id}")
            if not team_id:
                parent_team = await parent.team()
                if not parent_team:
                    raise invalid_request(
                        f"Could not get team from parent issue: {parent_id}"
                    )
                team_id = parent_team.id

        if not team_id and not parent_id:
            raise invalid_request("Either teamId or parentId must be provided")

        try:
            assignee_id = await self.self_references().resolve(assignee_id)

            fields: Dict[str, Any] = {
                "teamId": team_id,
                "title": title,
                "description": description,
                "priority": priority,
                "assigneeId": assignee_id,
                "parentId": parent_id,
                "labelIds": label_ids,
                "projectId": project_id,
            }
            if status is not None:
                team = await self.client.team(team_id)
                if not team:
                    raise invalid_request(f"Team not found: {team_id}")
                fields["stateId"] = await self._resolve_state_id(team, status)

            input_data = {key: value for key, value in fields.items() if value is not None}
            created = await self.client.create_issue(input_data)
            if not created:
                raise internal_error("No issue returned")

            logger.info("Created issue %s in team %s", created.identifier, team_id)
            return await self.get_issue(created.id)
        except Exception as e:
            raise LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "Failed to create issue", e)

    async def update_issue(
        self,
        issue_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[int] = None,
        assignee_id: Optional[str] = None,
        label_ids: Optional[List[str]] = None,
        cycle_id: Optional[str] = None,
    ) -> IssueDTO:
        """Apply a sparse patch to an issue and return the refreshed issue.

        ``status`` is resolved to a workflow state of the issue's team and
        ``cycle_id`` may be current/next/previous or a cycle number. Every
        error is wrapped once as "Failed to update issue: ...".
        """
        try:
            issue = await self.client.issue(issue_id)
            if not issue:
                raise invalid_request(f"Issue not found: {issue_id}")

            assignee_id = await self.self_references().resolve(assignee_id)

            patch: Dict[str, Any] = {}
            if title is not None:
                patch["title"] = title
            if description is not None:
                patch["description"] = description
            if assignee_id is not None:
                patch["assigneeId"] = assignee_id
            if label_ids is not None:
                patch["labelIds"] = label_ids

            team = await issue.team()
            if not team:
                raise invalid_request(f"Could not get team for issue: {issue_id}")

            if status is not None:
                patch["stateId"] = await self._resolve_state_id(team, status)

            if priority is not None:
                if priority < 0 or priority > 4:
                    raise invalid_params(
                        f'Invalid priority value "{priority}". '
                        "Priority must be between 0 (No priority) and 4 (Low)."
                    )
                patch["priority"] = priority

            if cycle_id is not None:
                if is_symbolic_cycle(cycle_id):
                    if cycle_id in RELATIVE_CYCLES:
                        cycle_filter = CycleFilter(type=cycle_id, team_id=team.id)
                    else:
                        cycle_filter = CycleFilter(type="specific", team_id=team.id, id=cycle_id)
                    try:
                        patch["cycleId"] = await self.cycle_service.resolve_cycle_filter(cycle_filter)
                    except Exception as e:
                        raise LinearToolError.wrap(
                            ErrorKind.INVALID_REQUEST, "Failed to resolve cycle", e
                        )
                else:
                    patch["cycleId"] = cycle_id

            if not await issue.update(patch):
                logger.warning("Linear reported an unsuccessful update for issue %s", issue_id)

            return await self.get_issue(issue_id)
        except Exception as e:
            raise LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "Failed to update issue", e)

    async def delete_issue(self, issue_id: str) -> None:
        issue = await self.client.issue(issue_id)
        if not issue:
            raise invalid_request(f"Issue not found: {issue_id}")

        try:
            await issue.delete()
        except Exception as e:
            raise LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "Failed to delete issue", e)
        logger.info("Deleted issue %s", issue_id)
