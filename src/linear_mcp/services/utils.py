"""Text and relationship helpers shared by the issue services."""

import asyncio
import re
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..models.dto import CommentDTO, RelationshipDTO
from ..upstream.entities import Comment, Issue

# Linear identifiers look like ABC-123
_ISSUE_MENTION = re.compile(r"([A-Z]+-\d+)")
_USER_MENTION = re.compile(r"@([a-zA-Z0-9_-]+)")

_WHITESPACE = re.compile(r"\s+")
_LINK = re.compile(r"\[([^\]]+)\]\([^)]+\)")
# Only strips a heading up to a newline or the next markdown construct.
_HEADING = re.compile(r"#{1,6}\s.*?(?:\n|(?=\*\*|__|_|\[|`))")
_BOLD = re.compile(r"(\*\*|__)(.*?)\1")
_ITALIC = re.compile(r"(\*|_)(.*?)\1")
_INLINE_CODE = re.compile(r"`([^`]+)`")


def _unique(values: List[str]) -> List[str]:
    return list(dict.fromkeys(values))


def extract_mentions(text: Optional[str]) -> Dict[str, List[str]]:
    """Find issue identifiers and @user handles in ``text``.

    Both lists are de-duplicated, keeping first-occurrence order.
    """
    if not text:
        return {"issues": [], "users": []}

    return {
        "issues": _unique(_ISSUE_MENTION.findall(text)),
        "users": _unique(_USER_MENTION.findall(text)),
    }


def clean_description(description: Optional[str]) -> Optional[str]:
    """Collapse whitespace and strip common markdown, keeping the text.

    Returns None for None or "" input. Whitespace-only input collapses to "".
    Fenced code blocks and horizontal rules are only whitespace-normalized.
    """
    if not description:
        return None

    cleaned = _WHITESPACE.sub(" ", description).strip()

    cleaned = _LINK.sub(r"\1", cleaned)
    cleaned = _HEADING.sub("", cleaned)
    cleaned = _BOLD.sub(r"\2", cleaned)
    cleaned = _ITALIC.sub(r"\2", cleaned)
    cleaned = _INLINE_CODE.sub(r"\1", cleaned)

    return cleaned


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 in UTC with millisecond precision, e.g. 2025-01-24T10:00:00.000Z."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (
        value.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


async def _comment_to_dto(comment: Comment) -> CommentDTO:
    user = await comment.user()
    return CommentDTO(
        id=comment.id,
        body=comment.body,
        user_id=user.id if user else "",
        user_name=user.name if user else None,
        created_at=format_timestamp(comment.created_at),
        updated_at=format_timestamp(comment.updated_at),
    )


async def get_comments(issue: Issue) -> List[CommentDTO]:
    """Comments of ``issue`` in upstream order, users resolved concurrently."""
    comments = await issue.comments()
    return list(await asyncio.gather(*(_comment_to_dto(c) for c in comments)))


async def get_relationships(issue: Issue) -> List[RelationshipDTO]:
    """Parent first, then sub-issues, then typed relations, each in upstream order.

    Relations whose target issue cannot be resolved are dropped.
    """
    relationships: List[RelationshipDTO] = []

    parent = await issue.parent()
    if parent:
        relationships.append(RelationshipDTO(
            type="parent",
            issue_id=parent.id,
            identifier=parent.identifier,
            title=parent.title,
        ))

    for child in await issue.children():
        relationships.append(RelationshipDTO(
            type="sub",
            issue_id=child.id,
            identifier=child.identifier,
            title=child.title,
        ))

    for relation in await issue.relations():
        related = await relation.related_issue()
        if related:
            relationships.append(RelationshipDTO(
                type=relation.type.lower(),
                issue_id=related.id,
                identifier=related.identifier,
                title=related.title,
            ))

    return relationships
