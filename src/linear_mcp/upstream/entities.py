"""Capability objects for Linear API entities.

Each entity wraps one GraphQL node. Scalar fields are plain attributes;
relationships are ``async`` accessors that either read the selection already
embedded in the node or call back into the client for a lazy fetch. A missing
relationship yields ``None`` (or an empty list), never an exception.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Generic, List, Optional, TypeVar

if TYPE_CHECKING:
    from .client import LinearClient

T = TypeVar("T")


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp (or date) from the API into a datetime."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass
class PageInfo:
    """Relay page info for a connection."""

    has_next_page: bool = False
    end_cursor: Optional[str] = None

    @classmethod
    def from_node(cls, node: Optional[Dict[str, Any]]) -> "PageInfo":
        node = node or {}
        return cls(
            has_next_page=bool(node.get("hasNextPage")),
            end_cursor=node.get("endCursor"),
        )


@dataclass
class Connection(Generic[T]):
    """One page of entities plus its page info."""

    nodes: List[T] = field(default_factory=list)
    page_info: PageInfo = field(default_factory=PageInfo)


class LinearEntity:
    """Base class: holds the raw node and the client used for lazy fetches."""

    def __init__(self, client: "LinearClient", node: Optional[Dict[str, Any]]):
        self._client = client
        self._node: Dict[str, Any] = dict(node or {})
        self.id: str = self._node.get("id") or ""

    def _embedded(self, key: str, entity_cls: type) -> Optional[Any]:
        value = self._node.get(key)
        if not value:
            return None
        return entity_cls(self._client, value)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"


class User(LinearEntity):
    def __init__(self, client, node):
        super().__init__(client, node)
        self.name: Optional[str] = self._node.get("name")
        self.display_name: Optional[str] = self._node.get("displayName")
        self.email: Optional[str] = self._node.get("email")
        self.avatar_url: Optional[str] = self._node.get("avatarUrl")


class WorkflowState(LinearEntity):
    def __init__(self, client, node):
        super().__init__(client, node)
        self.name: str = self._node.get("name") or ""
        self.type: Optional[str] = self._node.get("type")
        self.color: Optional[str] = self._node.get("color")
        self.position: Optional[float] = self._node.get("position")


class IssueLabel(LinearEntity):
    def __init__(self, client, node):
        super().__init__(client, node)
        self.name: str = self._node.get("name") or ""
        self.color: Optional[str] = self._node.get("color")


class Cycle(LinearEntity):
    """A team cycle. Completion is only known from ``completed_at``."""

    def __init__(self, client, node, team_id: Optional[str] = None):
        super().__init__(client, node)
        self.number: Optional[int] = self._node.get("number")
        self.name: Optional[str] = self._node.get("name")
        self.starts_at = parse_datetime(self._node.get("startsAt"))
        self.ends_at = parse_datetime(self._node.get("endsAt"))
        self.completed_at = parse_datetime(self._node.get("completedAt"))
        self.team_id = team_id


class Team(LinearEntity):
    def __init__(self, client, node):
        super().__init__(client, node)
        self.name: Optional[str] = self._node.get("name")
        self.key: Optional[str] = self._node.get("key")
        self.description: Optional[str] = self._node.get("description")

    async def states(self) -> List[WorkflowState]:
        """Workflow states of this team, in upstream order."""
        return await self._client.team_states(self.id)

    async def cycles(self) -> List[Cycle]:
        """All cycles of this team, in upstream order."""
        return await self._client.team_cycles(self.id)


class Comment(LinearEntity):
    def __init__(self, client, node):
        super().__init__(client, node)
        self.body: str = self._node.get("body") or ""
        self.created_at = parse_datetime(self._node.get("createdAt"))
        self.updated_at = parse_datetime(self._node.get("updatedAt"))

    async def user(self) -> Optional[User]:
        return self._embedded("user", User)


class IssueRelation(LinearEntity):
    """A typed edge from one issue to another (related, blocks, duplicate...)."""

    def __init__(self, client, node):
        super().__init__(client, node)
        self.type: str = self._node.get("type") or ""

    async def related_issue(self) -> Optional["Issue"]:
        return self._embedded("relatedIssue", Issue)


class Issue(LinearEntity):
    """An issue node.

    To-one relations (state, assignee, team, creator, parent) are read from
    the node when the selection included them. Issues built from a partial
    selection (children, relation targets) load the full node on first
    access. Collections are always fetched lazily.
    """

    _TO_ONE_KEYS = ("state", "assignee", "team", "creator", "parent")

    def __init__(self, client, node):
        super().__init__(client, node)
        self.identifier: str = self._node.get("identifier") or ""
        self.title: str = self._node.get("title") or ""
        self.description: Optional[str] = self._node.get("description")
        self.priority: Optional[int] = self._node.get("priority")
        self.estimate: Optional[float] = self._node.get("estimate")
        self.due_date = parse_datetime(self._node.get("dueDate"))
        self.url: Optional[str] = self._node.get("url")
        self.created_at = parse_datetime(self._node.get("createdAt"))
        self.updated_at = parse_datetime(self._node.get("updatedAt"))
        self._loaded = all(key in self._node for key in self._TO_ONE_KEYS)

    async def _to_one(self, key: str, entity_cls: type) -> Optional[Any]:
        if not self._loaded:
            full = await self._client.fetch_issue_node(self.id)
            if full:
                self._node.update(full)
            self._loaded = True
        return self._embedded(key, entity_cls)

    async def state(self) -> Optional[WorkflowState]:
        return await self._to_one("state", WorkflowState)

    async def assignee(self) -> Optional[User]:
        return await self._to_one("assignee", User)

    async def team(self) -> Optional[Team]:
        return await self._to_one("team", Team)

    async def creator(self) -> Optional[User]:
        return await self._to_one("creator", User)

    async def parent(self) -> Optional["Issue"]:
        return await self._to_one("parent", Issue)

    async def labels(self) -> List[IssueLabel]:
        return await self._client.issue_labels(self.id)

    async def children(self) -> List["Issue"]:
        return await self._client.issue_children(self.id)

    async def relations(self) -> List[IssueRelation]:
        return await self._client.issue_relations(self.id)

    async def comments(self) -> List[Comment]:
        return await self._client.issue_comments(self.id)

    async def update(self, input_data: Dict[str, Any]) -> bool:
        return await self._client.update_issue(self.id, input_data)

    async def delete(self) -> bool:
        return await self._client.delete_issue(self.id)


class ProjectSummary(LinearEntity):
    def __init__(self, client, node):
        super().__init__(client, node)
        self.name: Optional[str] = self._node.get("name")


class ProjectUpdate(LinearEntity):
    def __init__(self, client, node):
        super().__init__(client, node)
        self.body: str = self._node.get("body") or ""
        self.health: Optional[str] = self._node.get("health")
        self.diff_markdown: Optional[str] = self._node.get("diffMarkdown")
        self.url: Optional[str] = self._node.get("url")
        self.created_at = parse_datetime(self._node.get("createdAt"))
        self.updated_at = parse_datetime(self._node.get("updatedAt"))

    async def user(self) -> Optional[User]:
        return self._embedded("user", User)

    async def project(self) -> Optional[ProjectSummary]:
        return self._embedded("project", ProjectSummary)


class Project(LinearEntity):
    def __init__(self, client, node):
        super().__init__(client, node)
        self.name: str = self._node.get("name") or ""
        self.description: Optional[str] = self._node.get("description")
        self.slug_id: Optional[str] = self._node.get("slugId")
        self.icon: Optional[str] = self._node.get("icon")
        self.color: Optional[str] = self._node.get("color")
        self.url: Optional[str] = self._node.get("url")
        self.start_date: Optional[str] = self._node.get("startDate")
        self.target_date: Optional[str] = self._node.get("targetDate")
        self.started_at = parse_datetime(self._node.get("startedAt"))
        self.completed_at = parse_datetime(self._node.get("completedAt"))
        self.canceled_at = parse_datetime(self._node.get("canceledAt"))
        self.progress: Optional[float] = self._node.get("progress")
        self.health: Optional[str] = self._node.get("health")

    async def creator(self) -> Optional[User]:
        return self._embedded("creator", User)

    async def lead(self) -> Optional[User]:
        return self._embedded("lead", User)

    async def teams(self) -> List[Team]:
        return await self._client.project_teams(self.id)

    async def project_updates(
        self,
        first: int = 50,
        after: Optional[str] = None,
        include_archived: bool = True,
    ) -> Connection[ProjectUpdate]:
        return await self._client.project_updates(
            self.id, first=first, after=after, include_archived=include_archived
        )


class Document(LinearEntity):
    def __init__(self, client, node):
        super().__init__(client, node)
        self.title: str = self._node.get("title") or ""
        self.content: Optional[str] = self._node.get("content")
        self.icon: Optional[str] = self._node.get("icon")
        self.slug_id: Optional[str] = self._node.get("slugId")
        self.url: Optional[str] = self._node.get("url")
        self.is_public: Optional[bool] = self._node.get("isPublic")
        self.created_at = parse_datetime(self._node.get("createdAt"))
        self.updated_at = parse_datetime(self._node.get("updatedAt"))
        self.archived_at = parse_datetime(self._node.get("archivedAt"))

    async def creator(self) -> Optional[User]:
        return self._embedded("creator", User)

    async def updated_by(self) -> Optional[User]:
        return self._embedded("updatedBy", User)

    async def project(self) -> Optional[ProjectSummary]:
        return self._embedded("project", ProjectSummary)

    async def team(self) -> Optional[Team]:
        return self._embedded("team", Team)
