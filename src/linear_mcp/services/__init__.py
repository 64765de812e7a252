"""Linear services and the facade used by the MCP server."""

from typing import Union

from ..upstream.client import LinearClient
from .base import BaseService, SelfReferenceResolver
from .comments import CommentService
from .cycles import CycleFilter, CycleService
from .documents import DocumentService
from .issues import IssueService
from .projects import ProjectService
from .search import SearchService
from .teams import TeamService
from .utils import clean_description, extract_mentions, get_comments, get_relationships


class LinearAPIService:
    """Composes the per-concern services around one shared client."""

    def __init__(self, client_or_api_key: Union[str, LinearClient]):
        if isinstance(client_or_api_key, str):
            if not client_or_api_key:
                raise ValueError("LINEAR_API_KEY is required")
            client_or_api_key = LinearClient(client_or_api_key)
        self.client = client_or_api_key

        self.teams = TeamService(self.client)
        self.cycles = CycleService(self.client)
        self.issues = IssueService(self.client)
        self.comments = CommentService(self.client)
        self.projects = ProjectService(self.client)
        self.documents = DocumentService(self.client)
        self.search = SearchService(self.client)


__all__ = [
    "LinearAPIService",
    "BaseService",
    "SelfReferenceResolver",
    "CommentService",
    "CycleFilter",
    "CycleService",
    "DocumentService",
    "IssueService",
    "ProjectService",
    "SearchService",
    "TeamService",
    "clean_description",
    "extract_mentions",
    "get_comments",
    "get_relationships",
]
