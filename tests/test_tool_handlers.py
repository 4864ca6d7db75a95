"""Tests for RPC tool dispatch, argument validation and error mapping."""

import asyncio
import json

import pytest

pytestmark = pytest.mark.integration

from mcp import McpError

from jotion.config import get_settings
from jotion.mcp.tool_handlers import (
    CORRUPT_TREE,
    FORBIDDEN,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    NOT_FOUND,
    TOOL_HANDLERS,
    UNAUTHENTICATED,
    call_tool_handler,
)
from jotion.mcp.tool_schemas import get_tool_schemas
from jotion.mcp_server import call_tool
from jotion.storage.repositories import DocumentRepository


def call(temp_db, name, arguments, identity=None):
    result = asyncio.run(call_tool_handler(name, arguments, temp_db, identity))
    return json.loads(result[0].text)


def call_error(temp_db, name, arguments, identity=None):
    with pytest.raises(McpError) as exc_info:
        asyncio.run(call_tool_handler(name, arguments, temp_db, identity))
    return exc_info.value.error


def test_every_tool_has_schema_and_handler():
    assert set(get_tool_schemas()) == set(TOOL_HANDLERS)
    assert len(TOOL_HANDLERS) == 11


def test_create_and_get(temp_db, alice):
    created = call(temp_db, "create_document", {"title": "Notes"}, alice)
    assert created["title"] == "Notes"
    assert created["userId"] == alice.subject
    assert created["isArchived"] is False
    assert created["isPublished"] is False
    assert created["parentDocument"] is None

    fetched = call(temp_db, "get_document_by_id", {"id": created["id"]}, alice)
    assert fetched == created


def test_update_and_clear_fields(temp_db, alice):
    doc = call(temp_db, "create_document", {"title": "Notes"}, alice)
    updated = call(
        temp_db,
        "update_document",
        {"id": doc["id"], "icon": "📝", "coverImage": "c.png", "isPublished": True},
        alice,
    )
    assert updated["icon"] == "📝"
    assert updated["coverImage"] == "c.png"
    assert updated["isPublished"] is True
    assert updated["title"] == "Notes"

    assert call(temp_db, "remove_icon", {"id": doc["id"]}, alice)["icon"] is None
    assert call(temp_db, "remove_cover_image", {"id": doc["id"]}, alice)["coverImage"] is None


def test_archive_restore_and_listings(temp_db, alice):
    root = call(temp_db, "create_document", {"title": "Root"}, alice)
    child = call(temp_db, "create_document", {"title": "Child", "parentDocument": root["id"]}, alice)

    assert [d["id"] for d in call(temp_db, "get_sidebar", {"parentDocument": root["id"]}, alice)] == [child["id"]]

    archived = call(temp_db, "archive_document", {"id": root["id"]}, alice)
    assert archived["isArchived"] is True
    assert call(temp_db, "get_sidebar", {"parentDocument": root["id"]}, alice) == []
    assert {d["id"] for d in call(temp_db, "get_trashed_documents", {}, alice)} == {root["id"], child["id"]}
    assert call(temp_db, "search_documents", {}, alice) == []

    restored = call(temp_db, "restore_document", {"id": root["id"]}, alice)
    assert restored["isArchived"] is False
    assert [d["title"] for d in call(temp_db, "search_documents", {}, alice)] == ["Child", "Root"]


def test_remove_returns_removed(temp_db, alice):
    doc = call(temp_db, "create_document", {"title": "Doomed"}, alice)
    removed = call(temp_db, "remove_document", {"id": doc["id"]}, alice)
    assert removed["id"] == doc["id"]

    error = call_error(temp_db, "get_document_by_id", {"id": doc["id"]}, alice)
    assert error.code == NOT_FOUND


def test_unknown_tool(temp_db):
    error = call_error(temp_db, "drop_everything", {})
    assert error.code == METHOD_NOT_FOUND


def test_missing_required_argument(temp_db, alice):
    error = call_error(temp_db, "create_document", {}, alice)
    assert error.code == INVALID_PARAMS
    assert "title" in error.message


def test_wrong_argument_type(temp_db, alice):
    doc = call(temp_db, "create_document", {"title": "Notes"}, alice)
    error = call_error(temp_db, "update_document", {"id": doc["id"], "isPublished": "yes"}, alice)
    assert error.code == INVALID_PARAMS


def test_unknown_argument_rejected(temp_db, alice):
    doc = call(temp_db, "create_document", {"title": "Notes"}, alice)
    error = call_error(temp_db, "update_document", {"id": doc["id"], "userId": "user_bob"}, alice)
    assert error.code == INVALID_PARAMS


def test_unauthenticated(temp_db):
    error = call_error(temp_db, "search_documents", {})
    assert error.code == UNAUTHENTICATED


def test_forbidden_and_unauthorized(temp_db, alice, bob):
    doc = call(temp_db, "create_document", {"title": "Private"}, alice)
    assert call_error(temp_db, "remove_document", {"id": doc["id"]}, bob).code == FORBIDDEN
    assert call_error(temp_db, "get_document_by_id", {"id": doc["id"]}, bob).code == FORBIDDEN


def test_public_read_without_identity(temp_db, alice):
    doc = call(temp_db, "create_document", {"title": "Public"}, alice)
    call(temp_db, "update_document", {"id": doc["id"], "isPublished": True}, alice)

    assert call(temp_db, "get_document_by_id", {"id": doc["id"]})["title"] == "Public"


def test_corrupt_tree(temp_db, alice):
    a = call(temp_db, "create_document", {"title": "A"}, alice)
    b = call(temp_db, "create_document", {"title": "B", "parentDocument": a["id"]}, alice)
    with temp_db.session() as session:
        DocumentRepository(session).patch(a["id"], parent_document=b["id"])

    error = call_error(temp_db, "archive_document", {"id": a["id"]}, alice)
    assert error.code == CORRUPT_TREE


def test_stdio_server_identity_from_auth_token(temp_db, identity_provider, monkeypatch):
    monkeypatch.setenv("AUTH_TOKEN", identity_provider.issue_token("user_stdio"))
    get_settings.cache_clear()
    try:
        result = asyncio.run(call_tool("create_document", {"title": "Piped"}))
    finally:
        get_settings.cache_clear()

    assert json.loads(result[0].text)["userId"] == "user_stdio"


def test_stdio_server_without_auth_token_is_unauthenticated(temp_db, monkeypatch):
    monkeypatch.delenv("AUTH_TOKEN", raising=False)
    get_settings.cache_clear()
    try:
        with pytest.raises(McpError) as exc_info:
            asyncio.run(call_tool("get_trashed_documents", {}))
    finally:
        get_settings.cache_clear()

    assert exc_info.value.error.code == UNAUTHENTICATED
