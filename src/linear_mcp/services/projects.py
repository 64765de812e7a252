"""Project listing, project updates, and project update creation."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..errors import (
    ErrorKind,
    LinearToolError,
    internal_error,
    invalid_params,
    invalid_request,
)
from ..models.dto import (
    CreatedProjectUpdateDTO,
    PageInfoDTO,
    ProjectDTO,
    ProjectRef,
    ProjectsResponse,
    ProjectUpdateDTO,
    ProjectUpdatesResponse,
    ProjectUpdateUser,
    ProjectStatus,
    TeamRef,
    UserRef,
)
from ..upstream.entities import Project, ProjectUpdate, parse_datetime
from .base import BaseService
from .utils import format_timestamp

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100
HEALTH_VALUES = ("onTrack", "atRisk", "offTrack")


def page_size(first: Optional[int]) -> int:
    return min(first or DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)


def validate_health(health: str) -> None:
    if health not in HEALTH_VALUES:
        raise invalid_request(
            f"Invalid health value: {health}. "
            f"Valid values are: {', '.join(HEALTH_VALUES)}"
        )


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def parse_date_argument(name: str, value: Optional[str]) -> Optional[datetime]:
    """Parse a createdAfter/createdBefore bound, rejecting malformed input."""
    if not value:
        return None
    try:
        return _as_aware(parse_datetime(value))
    except ValueError:
        raise invalid_params(
            f"Invalid {name} value: {value}. Expected an ISO-8601 date or timestamp"
        ) from None


class ProjectService(BaseService):
    async def _project_to_dto(self, project: Project) -> ProjectDTO:
        creator, lead, teams = await asyncio.gather(
            project.creator(), project.lead(), project.teams()
        )
        return ProjectDTO(
            id=project.id,
            name=project.name,
            description=project.description,
            slug_id=project.slug_id,
            icon=project.icon,
            color=project.color,
            # Linear no longer exposes a project state we can map reliably.
            status=ProjectStatus(),
            creator=UserRef(id=creator.id, name=creator.name) if creator else None,
            lead=UserRef(id=lead.id, name=lead.name) if lead else None,
            start_date=project.start_date,
            target_date=project.target_date,
            started_at=format_timestamp(project.started_at),
            completed_at=format_timestamp(project.completed_at),
            canceled_at=format_timestamp(project.canceled_at),
            progress=project.progress,
            health=project.health,
            teams=[TeamRef(id=t.id, name=t.name, key=t.key) for t in teams],
        )

    async def get_projects(
        self,
        name_filter: Optional[str] = None,
        first: Optional[int] = None,
        after: Optional[str] = None,
        include_archived: Optional[bool] = None,
    ) -> ProjectsResponse:
        try:
            filter_: Dict[str, Any] = {}
            if name_filter:
                filter_["name"] = {"contains": name_filter}

            connection = await self.client.projects(
                first=page_size(first),
                after=after,
                include_archived=include_archived is not False,
                filter=filter_ or None,
            )

            projects = list(await asyncio.gather(
                *(self._project_to_dto(p) for p in connection.nodes)
            ))
            return ProjectsResponse(
                projects=projects,
                page_info=PageInfoDTO(
                    has_next_page=connection.page_info.has_next_page,
                    end_cursor=connection.page_info.end_cursor or None,
                ),
                total_count=len(projects),
            )
        except LinearToolError:
            raise
        except Exception as e:
            raise LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "Failed to fetch projects", e)

    async def get_project_updates(
        self,
        project_id: str,
        first: Optional[int] = None,
        after: Optional[str] = None,
        include_archived: Optional[bool] = None,
        created_after: Optional[str] = None,
        created_before: Optional[str] = None,
        user_id: Optional[str] = None,
        health: Optional[str] = None,
    ) -> ProjectUpdatesResponse:
        """List updates of one project.

        Linear cannot filter project updates server-side, so date, health
        and author filters are applied to the fetched page in memory.
        """
        try:
            after_date = parse_date_argument("createdAfter", created_after)
            before_date = parse_date_argument("createdBefore", created_before)
            user_id = await self.self_references().resolve(user_id)

            project = await self.client.project(project_id)
            if not project:
                raise invalid_request(f"Project not found: {project_id}")

            if health:
                validate_health(health)

            connection = await project.project_updates(
                first=page_size(first),
                after=after,
                include_archived=include_archived is not False,
            )

            updates: List[ProjectUpdate] = list(connection.nodes)

            if after_date:
                updates = [u for u in updates if u.created_at and u.created_at >= after_date]

            if before_date:
                updates = [u for u in updates if u.created_at and u.created_at <= before_date]

            if health:
                updates = [u for u in updates if u.health == health]

            users = await asyncio.gather(*(u.user() for u in updates))

            if user_id:
                kept = [
                    (update, user) for update, user in zip(updates, users)
                    if user and user.id == user_id
                ]
            else:
                kept = list(zip(updates, users))

            project_updates = [
                ProjectUpdateDTO(
                    id=update.id,
                    body=update.body,
                    created_at=format_timestamp(update.created_at),
                    updated_at=format_timestamp(update.updated_at),
                    health=update.health,
                    user=ProjectUpdateUser(
                        id=(user.id if user else "") or "",
                        name=(user.name if user else "") or "",
                        display_name=user.display_name if user else None,
                        email=user.email if user else None,
                        avatar_url=user.avatar_url if user else None,
                    ),
                    diff_markdown=update.diff_markdown,
                    url=update.url,
                )
                for update, user in kept
            ]

            return ProjectUpdatesResponse(
                project_updates=project_updates,
                project=ProjectRef(id=project.id, name=project.name),
                page_info=PageInfoDTO(
                    has_next_page=connection.page_info.has_next_page,
                    end_cursor=connection.page_info.end_cursor or None,
                ),
                total_count=len(project_updates),
            )
        except LinearToolError:
            raise
        except Exception as e:
            raise LinearToolError.wrap(
                ErrorKind.INTERNAL_ERROR, "Failed to fetch project updates", e
            )

    async def create_project_update(
        self,
        project_id: str,
        body: Optional[str] = None,
        health: Optional[str] = None,
        is_diff_hidden: Optional[bool] = None,
    ) -> CreatedProjectUpdateDTO:
        try:
            project = await self.client.project(project_id)
            if not project:
                raise invalid_request(f"Project not found: {project_id}")

            input_data: Dict[str, Any] = {"projectId": project_id}
            if body is not None:
                input_data["body"] = body
            if health is not None:
                validate_health(health)
                input_data["health"] = health
            if is_diff_hidden is not None:
                input_data["isDiffHidden"] = is_diff_hidden

            update = await self.client.create_project_update(input_data)
            if not update:
                raise internal_error("Failed to create project update")

            update_project, user = await asyncio.gather(update.project(), update.user())
            logger.info("Created project update %s for project %s", update.id, project_id)

            return CreatedProjectUpdateDTO(
                id=update.id,
                body=update.body,
                health=update.health,
                project=(
                    ProjectRef(id=update_project.id, name=update_project.name)
                    if update_project else None
                ),
                user=ProjectUpdateUser(
                    id=(user.id if user else "") or "",
                    name=(user.name if user else "") or "",
                ),
                created_at=format_timestamp(update.created_at),
                updated_at=format_timestamp(update.updated_at),
            )
        except LinearToolError:
            raise
        except Exception as e:
            raise LinearToolError.wrap(
                ErrorKind.INTERNAL_ERROR, "Failed to create project update", e
            )
