"""Async Linear API client.

Thin accessor layer over :class:`GraphQLClient` that returns entity objects
(see ``entities``). Lookups by id return ``None`` when Linear reports the
entity does not exist; every other upstream failure propagates as an
``UpstreamError``.
"""

import logging
from typing import Any, Dict, List, Optional

from . import queries
from .entities import (
    Comment,
    Connection,
    Cycle,
    Document,
    Issue,
    IssueLabel,
    IssueRelation,
    PageInfo,
    Project,
    ProjectUpdate,
    Team,
    User,
    WorkflowState,
)
from .exceptions import UpstreamAPIError, UpstreamNotFoundError
from .graphql import GraphQLClient

logger = logging.getLogger(__name__)

LINEAR_GRAPHQL_URL = "https://api.linear.app/graphql"


def _is_not_found(error: Exception) -> bool:
    if isinstance(error, UpstreamNotFoundError):
        return True
    return isinstance(error, UpstreamAPIError) and "not found" in str(error).lower()


class LinearClient:
    """Linear API accessors used by the service layer."""

    def __init__(self, api_key: str, endpoint: str = LINEAR_GRAPHQL_URL):
        # Personal API keys are sent bare; OAuth tokens already carry "Bearer".
        self.graphql = GraphQLClient(
            endpoint=endpoint,
            auth_header="Authorization",
            auth_value=api_key,
        )

    async def _fetch_node(
        self, query: str, key: str, variables: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        try:
            data = await self.graphql.execute(query, variables)
        except UpstreamAPIError as e:
            if _is_not_found(e):
                logger.debug("%s not found: %s", key, variables)
                return None
            raise
        return data.get(key)

    async def _collect(self, query: str, path: str, entity_id: str) -> List[Dict[str, Any]]:
        return await self.graphql.collect_connection(
            query, {"id": entity_id}, connection_path=path
        )

    # -- Viewer ---------------------------------------------------------------

    async def viewer(self) -> User:
        data = await self.graphql.execute(queries.VIEWER_QUERY)
        return User(self, data.get("viewer"))

    # -- Issues ---------------------------------------------------------------

    async def fetch_issue_node(self, issue_id: str) -> Optional[Dict[str, Any]]:
        return await self._fetch_node(queries.GET_ISSUE_QUERY, "issue", {"id": issue_id})

    async def issue(self, issue_id: str) -> Optional[Issue]:
        """Fetch an issue by UUID or identifier (e.g. ``ENG-123``)."""
        node = await self.fetch_issue_node(issue_id)
        return Issue(self, node) if node else None

    async def issues(
        self, filter: Optional[Dict[str, Any]] = None, first: int = 50
    ) -> List[Issue]:
        variables: Dict[str, Any] = {"first": first}
        if filter:
            variables["filter"] = filter
        connection = await self.graphql.fetch_page(
            queries.SEARCH_ISSUES_QUERY, variables, connection_path="issues"
        )
        return [Issue(self, node) for node in connection.get("nodes") or []]

    async def create_issue(self, input_data: Dict[str, Any]) -> Optional[Issue]:
        data = await self.graphql.execute(
            queries.CREATE_ISSUE_MUTATION, {"input": input_data}
        )
        payload = data.get("issueCreate") or {}
        node = payload.get("issue")
        return Issue(self, node) if node else None

    async def update_issue(self, issue_id: str, input_data: Dict[str, Any]) -> bool:
        data = await self.graphql.execute(
            queries.UPDATE_ISSUE_MUTATION, {"id": issue_id, "input": input_data}
        )
        return bool((data.get("issueUpdate") or {}).get("success"))

    async def delete_issue(self, issue_id: str) -> bool:
        data = await self.graphql.execute(queries.DELETE_ISSUE_MUTATION, {"id": issue_id})
        return bool((data.get("issueDelete") or {}).get("success"))

    async def issue_labels(self, issue_id: str) -> List[IssueLabel]:
        nodes = await self._collect(queries.ISSUE_LABELS_QUERY, "issue.labels", issue_id)
        return [IssueLabel(self, n) for n in nodes]

    async def issue_children(self, issue_id: str) -> List[Issue]:
        nodes = await self._collect(queries.ISSUE_CHILDREN_QUERY, "issue.children", issue_id)
        return [Issue(self, n) for n in nodes]

    async def issue_relations(self, issue_id: str) -> List[IssueRelation]:
        nodes = await self._collect(queries.ISSUE_RELATIONS_QUERY, "issue.relations", issue_id)
        return [IssueRelation(self, n) for n in nodes]

    async def issue_comments(self, issue_id: str) -> List[Comment]:
        nodes = await self._collect(queries.ISSUE_COMMENTS_QUERY, "issue.comments", issue_id)
        return [Comment(self, n) for n in nodes]

    # -- Comments -------------------------------------------------------------

    async def create_comment(self, input_data: Dict[str, Any]) -> Optional[Comment]:
        data = await self.graphql.execute(
            queries.CREATE_COMMENT_MUTATION, {"input": input_data}
        )
        node = (data.get("commentCreate") or {}).get("comment")
        return Comment(self, node) if node else None

    # -- Teams ----------------------------------------------------------------

    async def teams(self) -> List[Team]:
        nodes = await self.graphql.collect_connection(
            queries.LIST_TEAMS_QUERY, connection_path="teams"
        )
        return [Team(self, n) for n in nodes]

    async def team(self, team_id: str) -> Optional[Team]:
        node = await self._fetch_node(queries.GET_TEAM_QUERY, "team", {"id": team_id})
        return Team(self, node) if node else None

    async def team_states(self, team_id: str) -> List[WorkflowState]:
        nodes = await self._collect(queries.TEAM_STATES_QUERY, "team.states", team_id)
        return [WorkflowState(self, n) for n in nodes]

    async def team_cycles(self, team_id: str) -> List[Cycle]:
        nodes = await self._collect(queries.TEAM_CYCLES_QUERY, "team.cycles", team_id)
        return [Cycle(self, n, team_id=team_id) for n in nodes]

    # -- Projects -------------------------------------------------------------

    async def project(self, project_id: str) -> Optional[Project]:
        node = await self._fetch_node(
            queries.GET_PROJECT_QUERY, "project", {"id": project_id}
        )
        return Project(self, node) if node else None

    async def projects(
        self,
        first: int = 50,
        after: Optional[str] = None,
        include_archived: bool = True,
        filter: Optional[Dict[str, Any]] = None,
    ) -> Connection[Project]:
        variables: Dict[str, Any] = {"first": first, "includeArchived": include_archived}
        if after:
            variables["after"] = after
        if filter:
            variables["filter"] = filter
        connection = await self.graphql.fetch_page(
            queries.LIST_PROJECTS_QUERY, variables, connection_path="projects"
        )
        return Connection(
            nodes=[Project(self, n) for n in connection.get("nodes") or []],
            page_info=PageInfo.from_node(connection.get("pageInfo")),
        )

    async def project_teams(self, project_id: str) -> List[Team]:
        nodes = await self._collect(queries.PROJECT_TEAMS_QUERY, "project.teams", project_id)
        return [Team(self, n) for n in nodes]

    async def project_updates(
        self,
        project_id: str,
        first: int = 50,
        after: Optional[str] = None,
        include_archived: bool = True,
    ) -> Connection[ProjectUpdate]:
        variables: Dict[str, Any] = {
            "id": project_id,
            "first": first,
            "includeArchived": include_archived,
        }
        if after:
            variables["after"] = after
        connection = await self.graphql.fetch_page(
            queries.PROJECT_UPDATES_QUERY,
            variables,
            connection_path="project.projectUpdates",
        )
        return Connection(
            nodes=[ProjectUpdate(self, n) for n in connection.get("nodes") or []],
            page_info=PageInfo.from_node(connection.get("pageInfo")),
        )

    async def create_project_update(
        self, input_data: Dict[str, Any]
    ) -> Optional[ProjectUpdate]:
        data = await self.graphql.execute(
            queries.CREATE_PROJECT_UPDATE_MUTATION, {"input": input_data}
        )
        payload = data.get("projectUpdateCreate") or {}
        if not payload.get("success"):
            return None
        node = payload.get("projectUpdate")
        return ProjectUpdate(self, node) if node else None

    # -- Documents ------------------------------------------------------------

    async def document(self, document_id: str) -> Optional[Document]:
        node = await self._fetch_node(
            queries.GET_DOCUMENT_QUERY, "document", {"id": document_id}
        )
        return Document(self, node) if node else None

    async def documents(
        self,
        first: int = 50,
        after: Optional[str] = None,
        include_archived: bool = True,
        filter: Optional[Dict[str, Any]] = None,
    ) -> Connection[Document]:
        variables: Dict[str, Any] = {"first": first, "includeArchived": include_archived}
        if after:
            variables["after"] = after
        if filter:
            variables["filter"] = filter
        connection = await self.graphql.fetch_page(
            queries.LIST_DOCUMENTS_QUERY, variables, connection_path="documents"
        )
        return Connection(
            nodes=[Document(self, n) for n in connection.get("nodes") or []],
            page_info=PageInfo.from_node(connection.get("pageInfo")),
        )

    async def create_document(self, input_data: Dict[str, Any]) -> Optional[Document]:
        data = await self.graphql.execute(
            queries.CREATE_DOCUMENT_MUTATION, {"input": input_data}
        )
        node = (data.get("documentCreate") or {}).get("document")
        return Document(self, node) if node else None

    async def document_update(
        self, document_id: str, input_data: Dict[str, Any]
    ) -> Optional[Document]:
        data = await self.graphql.execute(
            queries.UPDATE_DOCUMENT_MUTATION, {"id": document_id, "input": input_data}
        )
        node = (data.get("documentUpdate") or {}).get("document")
        return Document(self, node) if node else None

    async def delete_document(self, document_id: str) -> bool:
        data = await self.graphql.execute(
            queries.DELETE_DOCUMENT_MUTATION, {"id": document_id}
        )
        return bool((data.get("documentDelete") or {}).get("success"))
