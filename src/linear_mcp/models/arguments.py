"""Tool argument models.

One model per tool. Incoming keys are camelCase, matching the JSON schemas
advertised in ``linear_mcp.mcp.tools``.
"""

from typing import Any, Dict, List, Literal, Optional, Type, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from ..errors import invalid_params
from ..upstream.entities import parse_datetime

HealthValue = Literal["onTrack", "atRisk", "offTrack"]

A = TypeVar("A", bound="ToolArguments")


class ToolArguments(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
        extra="ignore",
    )


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------


class GetIssueArgs(ToolArguments):
    issue_id: str
    include_relationships: bool = False


class CreateIssueArgs(ToolArguments):
    title: str
    team_id: Optional[str] = None
    parent_id: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[int] = Field(default=None, ge=0, le=4)
    assignee_id: Optional[str] = None
    label_ids: Optional[List[str]] = None
    project_id: Optional[str] = None

    @model_validator(mode="after")
    def require_team_or_parent(self):
        if not self.team_id and not self.parent_id:
            raise ValueError("Either teamId or parentId must be provided")
        return self


class UpdateIssueArgs(ToolArguments):
    issue_id: str
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[int] = Field(default=None, ge=0, le=4)
    assignee_id: Optional[str] = None
    label_ids: Optional[List[str]] = None
    cycle_id: Optional[str] = None


class DeleteIssueArgs(ToolArguments):
    issue_id: str


class SearchIssuesArgs(ToolArguments):
    query: str
    filter: Optional[Dict[str, Any]] = None
    project_id: Optional[str] = None
    project_name: Optional[str] = None
    # Accepted for older clients; search results never carry relationships
    include_relationships: bool = False


# ---------------------------------------------------------------------------
# Teams and comments
# ---------------------------------------------------------------------------


class GetTeamsArgs(ToolArguments):
    name_filter: Optional[str] = None


class CreateCommentArgs(ToolArguments):
    issue_id: str
    body: str


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


class GetProjectsArgs(ToolArguments):
    name_filter: Optional[str] = None
    include_archived: Optional[bool] = None
    first: Optional[int] = None
    after: Optional[str] = None


class GetProjectUpdatesArgs(ToolArguments):
    project_id: str
    include_archived: Optional[bool] = None
    first: Optional[int] = None
    after: Optional[str] = None
    created_after: Optional[str] = None
    created_before: Optional[str] = None
    user_id: Optional[str] = None
    health: Optional[str] = None

    @field_validator("created_after", "created_before")
    @classmethod
    def check_iso_date(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            try:
                parse_datetime(value)
            except ValueError:
                raise ValueError("must be an ISO-8601 date or timestamp") from None
        return value


class CreateProjectUpdateArgs(ToolArguments):
    project_id: str
    body: Optional[str] = None
    health: Optional[HealthValue] = None
    is_diff_hidden: Optional[bool] = None


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class GetDocumentsArgs(ToolArguments):
    name_filter: Optional[str] = None
    include_archived: Optional[bool] = None
    team_id: Optional[str] = None
    project_id: Optional[str] = None
    first: Optional[int] = None
    after: Optional[str] = None


class GetDocumentArgs(ToolArguments):
    document_id: Optional[str] = None
    document_slug: Optional[str] = None
    include_full: Optional[bool] = None


class CreateDocumentArgs(ToolArguments):
    team_id: str
    title: str
    content: Optional[str] = None
    icon: Optional[str] = None
    project_id: Optional[str] = None
    is_public: Optional[bool] = None


class UpdateDocumentArgs(ToolArguments):
    document_id: str
    title: Optional[str] = None
    content: Optional[str] = None
    icon: Optional[str] = None
    project_id: Optional[str] = None
    team_id: Optional[str] = None
    is_archived: Optional[bool] = None
    is_public: Optional[bool] = None


class DeleteDocumentArgs(ToolArguments):
    document_id: str


def _describe(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ()))
        message = detail.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


def parse_arguments(
    tool_name: str, model: Type[A], arguments: Optional[Dict[str, Any]]
) -> A:
    """Validate raw tool arguments, raising InvalidParams on failure."""
    try:
        return model.model_validate(arguments or {})
    except ValidationError as e:
        raise invalid_params(f"Invalid {tool_name} arguments: {_describe(e)}") from e
