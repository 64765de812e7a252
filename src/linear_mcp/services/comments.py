"""Comment creation."""

import logging

from ..errors import ErrorKind, LinearToolError, internal_error, invalid_request
from ..models.dto import CommentDTO
from .base import BaseService
from .utils import format_timestamp

logger = logging.getLogger(__name__)


class CommentService(BaseService):
    async def create_comment(self, issue_id: str, body: str) -> CommentDTO:
        """Add a comment to an issue.

        Every failure, including a missing issue, is reported as
        "Failed to create comment: ..." with the original error as cause.
        """
        try:
            issue = await self.client.issue(issue_id)
            if not issue:
                raise invalid_request(f"Issue not found: {issue_id}")

            comment = await self.client.create_comment({"issueId": issue.id, "body": body})
            if not comment:
                raise internal_error("Failed to create comment")

            user = await comment.user()
            logger.info("Created comment %s on issue %s", comment.id, issue.identifier)

            return CommentDTO(
                id=comment.id,
                body=comment.body,
                user_id=user.id if user else "",
                user_name=user.name if user else None,
                created_at=format_timestamp(comment.created_at),
                updated_at=format_timestamp(comment.updated_at),
            )
        except Exception as e:
            raise LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "Failed to create comment", e)
