"""Document CRUD."""

import asyncio
import logging
from typing import Any, Dict, Optional

from ..errors import ErrorKind, LinearToolError, internal_error, invalid_request
from ..models.dto import (
    DeleteDocumentResponse,
    DocumentDTO,
    DocumentResponse,
    DocumentsResponse,
    PageInfoDTO,
    ProjectRef,
    TeamRef,
    UserRef,
)
from ..upstream.entities import Document
from .base import BaseService
from .projects import page_size
from .utils import clean_description, format_timestamp

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 200


def content_preview(content: Optional[str]) -> Optional[str]:
    if not content:
        return None
    return clean_description(content[:PREVIEW_LENGTH])


async def document_to_dto(document: Document, mode: str = "full") -> DocumentDTO:
    """Project a document entity onto its DTO.

    ``mode`` is "full" (raw content) or "preview" (cleaned first 200
    characters).
    """
    creator, updated_by, project, team = await asyncio.gather(
        document.creator(),
        document.updated_by(),
        document.project(),
        document.team(),
    )
    return DocumentDTO(
        id=document.id,
        title=document.title,
        content=document.content if mode == "full" else None,
        content_preview=content_preview(document.content) if mode != "full" else None,
        icon=document.icon,
        slug_id=document.slug_id,
        created_at=format_timestamp(document.created_at),
        updated_at=format_timestamp(document.updated_at),
        archived_at=format_timestamp(document.archived_at),
        creator=UserRef(id=creator.id, name=creator.name) if creator else None,
        last_updated_by=UserRef(id=updated_by.id, name=updated_by.name) if updated_by else None,
        project=ProjectRef(id=project.id, name=project.name) if project else None,
        team=TeamRef(id=team.id, name=team.name, key=team.key) if team else None,
        url=document.url,
        is_public=document.is_public,
    )


class DocumentService(BaseService):
    async def get_documents(
        self,
        name_filter: Optional[str] = None,
        include_archived: Optional[bool] = None,
        team_id: Optional[str] = None,
        project_id: Optional[str] = None,
        first: Optional[int] = None,
        after: Optional[str] = None,
    ) -> DocumentsResponse:
        try:
            filter_: Dict[str, Any] = {}
            if name_filter:
                filter_["title"] = {"contains": name_filter}
            if team_id:
                filter_["team"] = {"id": {"eq": team_id}}
            if project_id:
                filter_["project"] = {"id": {"eq": project_id}}

            connection = await self.client.documents(
                first=page_size(first),
                after=after,
                include_archived=include_archived is not False,
                filter=filter_ or None,
            )

            documents = list(await asyncio.gather(
                *(document_to_dto(d, mode="preview") for d in connection.nodes)
            ))
            return DocumentsResponse(
                documents=documents,
                page_info=PageInfoDTO(
                    has_next_page=connection.page_info.has_next_page,
                    end_cursor=connection.page_info.end_cursor or None,
                ),
                total_count=len(documents),
            )
        except LinearToolError:
            raise
        except Exception as e:
            raise LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "Failed to fetch documents", e)

    async def get_document(
        self,
        document_id: Optional[str] = None,
        document_slug: Optional[str] = None,
        include_full: Optional[bool] = None,
    ) -> DocumentResponse:
        try:
            if document_id:
                document = await self.client.document(document_id)
            elif document_slug:
                raise invalid_request("Fetching by slug is not yet implemented")
            else:
                raise invalid_request("Either documentId or documentSlug must be provided")

            if not document:
                raise invalid_request(f"Document not found: {document_id or document_slug}")

            mode = "full" if include_full is not False else "preview"
            return DocumentResponse(document=await document_to_dto(document, mode=mode))
        except LinearToolError:
            raise
        except Exception as e:
            raise LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "Failed to fetch document", e)

    async def create_document(
        self,
        team_id: str,
        title: str,
        content: Optional[str] = None,
        icon: Optional[str] = None,
        project_id: Optional[str] = None,
        is_public: Optional[bool] = None,
    ) -> DocumentResponse:
        try:
            input_data: Dict[str, Any] = {"teamId": team_id, "title": title}
            if content is not None:
                input_data["content"] = content
            if icon is not None:
                input_data["icon"] = icon
            if project_id is not None:
                input_data["projectId"] = project_id
            if is_public is not None:
                input_data["isPublic"] = is_public

            document = await self.client.create_document(input_data)
            if not document:
                raise internal_error("Failed to create document")

            logger.info("Created document %s in team %s", document.id, team_id)
            return DocumentResponse(document=await document_to_dto(document))
        except LinearToolError:
            raise
        except Exception as e:
            raise LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "Failed to create document", e)

    async def update_document(
        self,
        document_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
        icon: Optional[str] = None,
        project_id: Optional[str] = None,
        team_id: Optional[str] = None,
        is_archived: Optional[bool] = None,
        is_public: Optional[bool] = None,
    ) -> DocumentResponse:
        try:
            existing = await self.client.document(document_id)
            if not existing:
                raise invalid_request(f"Document not found: {document_id}")

            patch = {
                "title": title,
                "content": content,
                "icon": icon,
                "projectId": project_id,
                "teamId": team_id,
                "isArchived": is_archived,
                "isPublic": is_public,
            }
            input_data = {key: value for key, value in patch.items() if value is not None}

            document = await self.client.document_update(document_id, input_data)
            if not document:
                raise internal_error("Failed to update document")

            return DocumentResponse(document=await document_to_dto(document))
        except LinearToolError:
            raise
        except Exception as e:
            raise LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "Failed to update document", e)

    async def delete_document(self, document_id: str) -> DeleteDocumentResponse:
        """Delete a document; an unsuccessful response is reported, not raised."""
        try:
            success = await self.client.delete_document(document_id)
            return DeleteDocumentResponse(
                success=bool(success),
                message=(
                    "Document deleted successfully" if success
                    else "Failed to delete document"
                ),
            )
        except LinearToolError:
            raise
        except Exception as e:
            raise LinearToolError.wrap(ErrorKind.INTERNAL_ERROR, "Failed to delete document", e)
