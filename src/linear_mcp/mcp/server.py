"""MCP server exposing Linear operations as tools."""

import json
import logging
import time
import uuid
from typing import Any, Dict, List, Optional

from mcp import types
from mcp.server import Server

from ..errors import LinearToolError, internal_error, method_not_found
from ..models.arguments import (
    CreateCommentArgs,
    CreateDocumentArgs,
    CreateIssueArgs,
    CreateProjectUpdateArgs,
    DeleteDocumentArgs,
    DeleteIssueArgs,
    GetDocumentArgs,
    GetDocumentsArgs,
    GetIssueArgs,
    GetProjectsArgs,
    GetProjectUpdatesArgs,
    GetTeamsArgs,
    SearchIssuesArgs,
    UpdateDocumentArgs,
    UpdateIssueArgs,
    parse_arguments,
)
from ..observability.logging import clear_log_context, set_log_context
from ..services import LinearAPIService
from .tools import TOOLS

logger = logging.getLogger(__name__)


def _dump(payload: Any) -> str:
    if isinstance(payload, list):
        payload = [item.to_payload() for item in payload]
    elif hasattr(payload, "to_payload"):
        payload = payload.to_payload()
    return json.dumps(payload, indent=2)


class LinearMCPServer:
    """Routes MCP tool calls to the Linear services."""

    def __init__(self, api: LinearAPIService, name: str = "linear-mcp"):
        self.api = api
        self.server = Server(name)
        self._setup_handlers()

    def _setup_handlers(self):
        """Set up MCP protocol handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> List[types.Tool]:
            logger.debug("Returning %d tools", len(TOOLS))
            return list(TOOLS)

        @self.server.call_tool()
        async def handle_call_tool(
            name: str, arguments: Optional[Dict[str, Any]] = None
        ) -> List[types.TextContent]:
            try:
                result = await self.call_tool(name, arguments)
            except LinearToolError as e:
                raise e.to_mcp_error() from e
            return [types.TextContent(type="text", text=result)]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> str:
        """Validate ``arguments``, run tool ``name`` and return its JSON text.

        Failures are always raised as :class:`LinearToolError`.
        """
        set_log_context(tool_name=name, request_id=uuid.uuid4().hex[:12])
        logger.info("Tool call: %s", name)

        start = time.perf_counter()
        try:
            result = await self._dispatch(name, arguments or {})
            logger.info("Tool call %s completed in %.3fs", name, time.perf_counter() - start)
            return result
        except LinearToolError as e:
            logger.warning(
                "Tool call %s failed (%s) in %.3fs: %s",
                name, e.kind.name, time.perf_counter() - start, e.message,
            )
            raise
        except Exception as e:
            logger.error("Tool call %s raised %s: %s", name, type(e).__name__, e, exc_info=True)
            raise internal_error(str(e)) from e
        finally:
            clear_log_context()

    async def _dispatch(self, name: str, arguments: Dict[str, Any]) -> str:
        api = self.api

        if name == "get_issue":
            args = parse_arguments(name, GetIssueArgs, arguments)
            return _dump(await api.issues.get_issue(args.issue_id, args.include_relationships))

        elif name == "search_issues":
            args = parse_arguments(name, SearchIssuesArgs, arguments)
            return _dump(await api.search.search_issues(
                query=args.query,
                filter=args.filter,
                project_id=args.project_id,
                project_name=args.project_name,
            ))

        elif name == "create_issue":
            args = parse_arguments(name, CreateIssueArgs, arguments)
            return _dump(await api.issues.create_issue(
                title=args.title,
                team_id=args.team_id,
                parent_id=args.parent_id,
                description=args.description,
                status=args.status,
                priority=args.priority,
                assignee_id=args.assignee_id,
                label_ids=args.label_ids,
                project_id=args.project_id,
            ))

        elif name == "update_issue":
            args = parse_arguments(name, UpdateIssueArgs, arguments)
            return _dump(await api.issues.update_issue(
                issue_id=args.issue_id,
                title=args.title,
                description=args.description,
                status=args.status,
                priority=args.priority,
                assignee_id=args.assignee_id,
                label_ids=args.label_ids,
                cycle_id=args.cycle_id,
            ))

        elif name == "delete_issue":
            args = parse_arguments(name, DeleteIssueArgs, arguments)
            await api.issues.delete_issue(args.issue_id)
            return json.dumps({"success": True, "message": "Issue deleted successfully"})

        elif name == "get_teams":
            args = parse_arguments(name, GetTeamsArgs, arguments)
            return _dump(await api.teams.get_teams(args.name_filter))

        elif name == "create_comment":
            args = parse_arguments(name, CreateCommentArgs, arguments)
            return _dump(await api.comments.create_comment(args.issue_id, args.body))

        elif name == "get_projects":
            args = parse_arguments(name, GetProjectsArgs, arguments)
            return _dump(await api.projects.get_projects(
                name_filter=args.name_filter,
                first=args.first,
                after=args.after,
                include_archived=args.include_archived,
            ))

        elif name == "get_project_updates":
            args = parse_arguments(name, GetProjectUpdatesArgs, arguments)
            return _dump(await api.projects.get_project_updates(
                project_id=args.project_id,
                first=args.first,
                after=args.after,
                include_archived=args.include_archived,
                created_after=args.created_after,
                created_before=args.created_before,
                user_id=args.user_id,
                health=args.health,
            ))

        elif name == "create_project_update":
            args = parse_arguments(name, CreateProjectUpdateArgs, arguments)
            return _dump(await api.projects.create_project_update(
                project_id=args.project_id,
                body=args.body,
                health=args.health,
                is_diff_hidden=args.is_diff_hidden,
            ))

        elif name == "get_documents":
            args = parse_arguments(name, GetDocumentsArgs, arguments)
            return _dump(await api.documents.get_documents(
                name_filter=args.name_filter,
                include_archived=args.include_archived,
                team_id=args.team_id,
                project_id=args.project_id,
                first=args.first,
                after=args.after,
            ))

        elif name == "get_document":
            args = parse_arguments(name, GetDocumentArgs, arguments)
            return _dump(await api.documents.get_document(
                document_id=args.document_id,
                document_slug=args.document_slug,
                include_full=args.include_full,
            ))

        elif name == "create_document":
            args = parse_arguments(name, CreateDocumentArgs, arguments)
            return _dump(await api.documents.create_document(
                team_id=args.team_id,
                title=args.title,
                content=args.content,
                icon=args.icon,
                project_id=args.project_id,
                is_public=args.is_public,
            ))

        elif name == "update_document":
            args = parse_arguments(name, UpdateDocumentArgs, arguments)
            return _dump(await api.documents.update_document(
                document_id=args.document_id,
                title=args.title,
                content=args.content,
                icon=args.icon,
                project_id=args.project_id,
                team_id=args.team_id,
                is_archived=args.is_archived,
                is_public=args.is_public,
            ))

        elif name == "delete_document":
            args = parse_arguments(name, DeleteDocumentArgs, arguments)
            return _dump(await api.documents.delete_document(args.document_id))

        raise method_not_found(f"Unknown tool: {name}")
