"""Response shapes returned by the tools.

Fields are snake_case in Python and serialized as camelCase. ``None`` fields
are left out of the JSON payload entirely.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DTO(BaseModel):
    """Base for all response shapes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# ---------------------------------------------------------------------------
# Shared references
# ---------------------------------------------------------------------------


class PageInfoDTO(DTO):
    has_next_page: bool = False
    end_cursor: Optional[str] = None


class UserRef(DTO):
    id: str
    name: Optional[str] = None


class TeamRef(DTO):
    id: str
    name: Optional[str] = None
    key: Optional[str] = None


class ProjectRef(DTO):
    id: str
    name: Optional[str] = None


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------


class IssueSummary(DTO):
    id: str
    identifier: str
    title: str


class RelationshipDTO(DTO):
    """A typed edge: parent, sub, related, blocked, blocking or duplicate."""

    type: str
    issue_id: str
    identifier: str
    title: str


class CommentDTO(DTO):
    id: str
    body: str
    user_id: str = ""
    user_name: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class IssueDTO(DTO):
    id: str
    identifier: str
    title: str
    description: Optional[str] = None
    status: Optional[str] = None
    assignee: Optional[str] = None
    priority: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    team_name: Optional[str] = None
    creator_name: Optional[str] = None
    labels: List[str] = Field(default_factory=list)
    estimate: Optional[float] = None
    due_date: Optional[str] = None
    parent: Optional[IssueSummary] = None
    sub_issues: List[IssueSummary] = Field(default_factory=list)
    comments: Optional[List[CommentDTO]] = None
    relationships: List[RelationshipDTO] = Field(default_factory=list)
    mentioned_issues: List[str] = Field(default_factory=list)
    mentioned_users: List[str] = Field(default_factory=list)


class IssueSearchResultDTO(DTO):
    id: str
    identifier: str
    title: str
    status: Optional[str] = None
    assignee: Optional[str] = None
    priority: Optional[int] = None
    team_name: Optional[str] = None
    labels: List[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Teams and cycles
# ---------------------------------------------------------------------------


class TeamDTO(DTO):
    id: str
    name: str = ""
    key: str = ""
    description: Optional[str] = None


class CycleDTO(DTO):
    id: str
    number: Optional[int] = None
    name: Optional[str] = None
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    is_active: bool = False
    is_completed: bool = False
    team_id: str


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class DocumentDTO(DTO):
    id: str
    title: str
    content: Optional[str] = None
    content_preview: Optional[str] = None
    icon: Optional[str] = None
    slug_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    archived_at: Optional[str] = None
    creator: Optional[UserRef] = None
    last_updated_by: Optional[UserRef] = None
    project: Optional[ProjectRef] = None
    team: Optional[TeamRef] = None
    url: Optional[str] = None
    is_public: Optional[bool] = None


class DocumentsResponse(DTO):
    documents: List[DocumentDTO]
    page_info: PageInfoDTO
    total_count: int


class DocumentResponse(DTO):
    document: DocumentDTO


class DeleteDocumentResponse(DTO):
    success: bool
    message: Optional[str] = None


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


class ProjectStatus(DTO):
    name: str = "Unknown"
    type: str = "Unknown"


class ProjectDTO(DTO):
    id: str
    name: str
    description: Optional[str] = None
    slug_id: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    status: ProjectStatus = Field(default_factory=ProjectStatus)
    creator: Optional[UserRef] = None
    lead: Optional[UserRef] = None
    start_date: Optional[str] = None
    target_date: Optional[str] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    canceled_at: Optional[str] = None
    progress: Optional[float] = None
    health: Optional[str] = None
    teams: List[TeamRef] = Field(default_factory=list)


class ProjectsResponse(DTO):
    projects: List[ProjectDTO]
    page_info: PageInfoDTO
    total_count: int


class ProjectUpdateUser(DTO):
    id: str = ""
    name: str = ""
    display_name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None


class ProjectUpdateDTO(DTO):
    id: str
    body: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    health: Optional[str] = None
    user: ProjectUpdateUser
    diff_markdown: Optional[str] = None
    url: Optional[str] = None


class ProjectUpdatesResponse(DTO):
    project_updates: List[ProjectUpdateDTO]
    project: ProjectRef
    page_info: PageInfoDTO
    total_count: int


class CreatedProjectUpdateDTO(DTO):
    id: str
    body: str
    health: Optional[str] = None
    project: Optional[ProjectRef] = None
    user: ProjectUpdateUser
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
