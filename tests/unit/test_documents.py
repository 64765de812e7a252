"""Tests for DocumentService."""

import pytest

from linear_mcp.errors import ErrorKind, LinearToolError
from linear_mcp.services.documents import DocumentService, content_preview
from linear_mcp.upstream.entities import Connection, Document, PageInfo
from tests.conftest import team_node, user_node

pytestmark = pytest.mark.asyncio

LONG_CONTENT = "# Architecture\n\n" + "**word** " * 60


def _document(client, document_id="doc-1", **extra):
    node = {
        "id": document_id,
        "title": "Architecture Notes",
        "content": LONG_CONTENT,
        "icon": ":books:",
        "slugId": "architecture-notes",
        "url": "https://linear.app/test/document/architecture-notes",
        "createdAt": "2025-01-24T10:00:00.000Z",
        "updatedAt": "2025-01-25T10:00:00.000Z",
        "archivedAt": None,
        "creator": user_node("user-1", "John Doe"),
        "updatedBy": user_node("user-2", "Jane Smith"),
        "project": {"id": "project-1", "name": "Website Redesign"},
        "team": team_node(),
    }
    node.update(extra)
    return Document(client, node)


async def test_content_preview_is_cleaned_and_truncated():
    preview = content_preview(LONG_CONTENT)
    assert "**" not in preview
    assert len(preview) <= 200
    assert content_preview(None) is None


async def test_get_documents_returns_previews(client):
    client.documents.return_value = Connection(
        nodes=[_document(client)], page_info=PageInfo(has_next_page=True, end_cursor="c1")
    )

    result = await DocumentService(client).get_documents(
        name_filter="Arch", team_id="team-1", project_id="project-1", first=5, after="c0"
    )

    payload = result.to_payload()
    document = payload["documents"][0]
    assert "content" not in document
    assert document["contentPreview"] == content_preview(LONG_CONTENT)
    assert document["lastUpdatedBy"] == {"id": "user-2", "name": "Jane Smith"}
    assert document["team"] == {"id": "team-1", "name": "Engineering", "key": "ENG"}
    assert payload["pageInfo"] == {"hasNextPage": True, "endCursor": "c1"}
    assert payload["totalCount"] == 1
    client.documents.assert_awaited_once_with(
        first=5,
        after="c0",
        include_archived=True,
        filter={
            "title": {"contains": "Arch"},
            "team": {"id": {"eq": "team-1"}},
            "project": {"id": {"eq": "project-1"}},
        },
    )


async def test_get_documents_failure(client):
    client.documents.side_effect = RuntimeError("boom")

    with pytest.raises(LinearToolError) as exc_info:
        await DocumentService(client).get_documents()

    assert str(exc_info.value) == "Failed to fetch documents: boom"


async def test_get_document_full_content(client):
    client.document.return_value = _document(client)

    result = await DocumentService(client).get_document(document_id="doc-1")

    document = result.to_payload()["document"]
    assert document["content"] == LONG_CONTENT
    assert "contentPreview" not in document
    assert document["project"] == {"id": "project-1", "name": "Website Redesign"}


async def test_get_document_preview(client):
    client.document.return_value = _document(client)

    result = await DocumentService(client).get_document(document_id="doc-1", include_full=False)

    assert result.document.content is None
    assert result.document.content_preview == content_preview(LONG_CONTENT)


async def test_get_document_not_found(client):
    with pytest.raises(LinearToolError) as exc_info:
        await DocumentService(client).get_document(document_id="missing")

    assert exc_info.value.kind == ErrorKind.INVALID_REQUEST
    assert str(exc_info.value) == "Document not found: missing"


async def test_get_document_by_slug_not_supported(client):
    with pytest.raises(LinearToolError) as exc_info:
        await DocumentService(client).get_document(document_slug="architecture-notes")

    assert str(exc_info.value) == "Fetching by slug is not yet implemented"
    client.document.assert_not_awaited()


async def test_get_document_requires_an_identifier(client):
    with pytest.raises(LinearToolError) as exc_info:
        await DocumentService(client).get_document()

    assert exc_info.value.kind == ErrorKind.INVALID_REQUEST
    assert str(exc_info.value) == "Either documentId or documentSlug must be provided"


async def test_create_document(client):
    client.create_document.return_value = _document(client, "doc-new")

    result = await DocumentService(client).create_document(
        team_id="team-1", title="Architecture Notes", content="Hello", is_public=False
    )

    assert result.document.id == "doc-new"
    client.create_document.assert_awaited_once_with({
        "teamId": "team-1",
        "title": "Architecture Notes",
        "content": "Hello",
        "isPublic": False,
    })


async def test_create_document_without_result(client):
    with pytest.raises(LinearToolError) as exc_info:
        await DocumentService(client).create_document(team_id="team-1", title="X")

    assert exc_info.value.kind == ErrorKind.INTERNAL_ERROR
    assert str(exc_info.value) == "Failed to create document"


async def test_update_document_sends_only_given_fields(client):
    client.document.return_value = _document(client)
    client.document_update.return_value = _document(client, title="Renamed")

    result = await DocumentService(client).update_document(
        "doc-1", title="Renamed", is_archived=True
    )

    assert result.document.title == "Renamed"
    client.document_update.assert_awaited_once_with(
        "doc-1", {"title": "Renamed", "isArchived": True}
    )


async def test_update_document_not_found(client):
    with pytest.raises(LinearToolError) as exc_info:
        await DocumentService(client).update_document("missing", title="X")

    assert str(exc_info.value) == "Document not found: missing"
    client.document_update.assert_not_awaited()


async def test_delete_document(client):
    result = await DocumentService(client).delete_document("doc-1")
    assert result.to_payload() == {"success": True, "message": "Document deleted successfully"}


async def test_delete_document_unsuccessful(client):
    client.delete_document.return_value = False

    result = await DocumentService(client).delete_document("doc-1")

    assert result.to_payload() == {"success": False, "message": "Failed to delete document"}


async def test_delete_document_failure(client):
    client.delete_document.side_effect = RuntimeError("forbidden")

    with pytest.raises(LinearToolError) as exc_info:
        await DocumentService(client).delete_document("doc-1")

    assert str(exc_info.value) == "Failed to delete document: forbidden"
