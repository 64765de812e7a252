"""Tool argument and response models for Linear MCP."""

from .arguments import (
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
from .dto import (
    CommentDTO,
    CycleDTO,
    IssueDTO,
    IssueSearchResultDTO,
    RelationshipDTO,
    TeamDTO,
)

__all__ = [
    "CreateCommentArgs",
    "CreateDocumentArgs",
    "CreateIssueArgs",
    "CreateProjectUpdateArgs",
    "DeleteDocumentArgs",
    "DeleteIssueArgs",
    "GetDocumentArgs",
    "GetDocumentsArgs",
    "GetIssueArgs",
    "GetProjectsArgs",
    "GetProjectUpdatesArgs",
    "GetTeamsArgs",
    "SearchIssuesArgs",
    "UpdateDocumentArgs",
    "UpdateIssueArgs",
    "parse_arguments",
    "CommentDTO",
    "CycleDTO",
    "IssueDTO",
    "IssueSearchResultDTO",
    "RelationshipDTO",
    "TeamDTO",
]
