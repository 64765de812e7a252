"""Issue search: composes an IssueFilter from query text and shortcuts."""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from ..errors import ErrorKind, LinearToolError, invalid_request
from ..models.dto import IssueSearchResultDTO
from ..upstream.client import LinearClient
from ..upstream.entities import Issue
from .base import BaseService
from .cycles import CycleFilter, CycleService
from .filters import parse_filter, render_filter, resolve_self_references
from .projects import ProjectService

logger = logging.getLogger(__name__)

# Keys of the search filter handled here rather than passed to Linear.
SHORTCUT_KEYS = ("assignedTo", "createdBy", "and", "or", "cycle")


async def issue_to_search_result(issue: Issue) -> IssueSearchResultDTO:
    state, assignee, team, labels = await asyncio.gather(
        issue.state(), issue.assignee(), issue.team(), issue.labels()
    )
    return IssueSearchResultDTO(
        id=issue.id,
        identifier=issue.identifier,
        title=issue.title,
        status=state.name if state else None,
        assignee=assignee.name if assignee else None,
        priority=issue.priority,
        team_name=team.name if team else None,
        labels=[label.name for label in labels],
    )


class SearchService(BaseService):
    def __init__(self, client_or_api_key: Union[str, LinearClient]):
        super().__init__(client_or_api_key)
        self.cycle_service = CycleService(self.client)
        self.project_service = ProjectService(self.client)

    async def _resolve_project_name(self, project_name: str) -> str:
        response = await self.project_service.get_projects(
            name_filter=project_name, first=2, include_archived=True
        )
        projects = response.projects
        if not projects:
            raise invalid_request(f"No projects found matching name: {project_name}")
        if len(projects) > 1:
            candidates = ", ".join(f'"{p.name}" ({p.id})' for p in projects)
            raise invalid_request(
                f'Multiple projects match name "{project_name}": {candidates}. '
                "Please use projectId instead."
            )
        return projects[0].id

    async def build_filter(
        self,
        query: str,
        filter: Optional[Dict[str, Any]] = None,
        project_id: Optional[str] = None,
        project_name: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """Compose the IssueFilter sent to Linear, or None when unfiltered.

        Conditions are AND-ed in a fixed order: text, project, assignedTo,
        createdBy, cycle, remaining field filters, ``and``, ``or``. Every
        ``"me"`` under an assignee/creator id is then replaced by the viewer id.
        """
        conditions: List[Dict[str, Any]] = []

        if query:
            conditions.append({
                "or": [
                    {"title": {"contains": query}},
                    {"description": {"contains": query}},
                ]
            })

        if project_id or project_name:
            if not project_id:
                project_id = await self._resolve_project_name(project_name)
            conditions.append({"project": {"id": {"eq": project_id}}})

        if filter:
            assigned_to = filter.get("assignedTo")
            created_by = filter.get("createdBy")
            cycle = filter.get("cycle")
            and_filters = filter.get("and")
            or_filters = filter.get("or")
            field_filters = {k: v for k, v in filter.items() if k not in SHORTCUT_KEYS}

            if assigned_to:
                conditions.append({"assignee": {"id": {"eq": assigned_to}}})

            if created_by:
                conditions.append({"creator": {"id": {"eq": created_by}}})

            if cycle is not None:
                try:
                    if not isinstance(cycle, dict):
                        raise invalid_request(f"Invalid cycle filter: {cycle!r}")
                    cycle_id = await self.cycle_service.resolve_cycle_filter(
                        CycleFilter.from_dict(cycle)
                    )
                except Exception as e:
                    raise LinearToolError.wrap(
                        ErrorKind.INVALID_REQUEST, "Failed to resolve cycle filter", e
                    )
                conditions.append({"cycle": {"id": {"eq": cycle_id}}})

            if field_filters:
                conditions.append(field_filters)

            if and_filters is not None:
                conditions.append({"and": and_filters})

            if or_filters is not None:
                conditions.append({"or": or_filters})

        if not conditions:
            return None

        tree = await resolve_self_references(
            parse_filter({"and": conditions}), self.self_references()
        )
        return render_filter(tree)

    async def search_issues(
        self,
        query: str,
        filter: Optional[Dict[str, Any]] = None,
        project_id: Optional[str] = None,
        project_name: Optional[str] = None,
    ) -> List[IssueSearchResultDTO]:
        try:
            issue_filter = await self.build_filter(query, filter, project_id, project_name)
            logger.debug("Searching issues with filter %s", issue_filter)

            issues = await self.client.issues(filter=issue_filter)
            return list(await asyncio.gather(*(issue_to_search_result(i) for i in issues)))
        except LinearToolError:
            raise
        except Exception as e:
            raise LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "", e)
