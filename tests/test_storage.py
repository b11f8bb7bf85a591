"""Tests for the Supabase Storage client, using httpx's mock transport."""

import json

import httpx
import pytest

from services.errors import StorageError
from services.storage import ResumeStorage

BASE = "https://project.supabase.co"


def _storage(handler) -> ResumeStorage:
    return ResumeStorage(
        access_token="token-abc",
        base_url=BASE,
        api_key="anon-key",
        bucket="resume",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_list_parses_rows():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers["authorization"]
        seen["apikey"] = request.headers["apikey"]
        return httpx.Response(200, json=[
            {"name": ".emptyFolderPlaceholder", "id": "0", "created_at": "2026-01-01T00:00:00Z", "metadata": {}},
            {"name": "old.pdf", "id": "1", "created_at": "2026-01-01T00:00:00.000Z", "metadata": {"size": 1234}},
            {"name": "nested", "id": None, "created_at": None, "metadata": None},
        ])

    files = await _storage(handler).list("user-123")

    assert seen["url"] == f"{BASE}/storage/v1/object/list/resume"
    assert seen["body"]["prefix"] == "user-123"
    assert seen["auth"] == "Bearer token-abc"
    assert seen["apikey"] == "anon-key"
    assert [f.name for f in files] == ["old.pdf"]
    assert files[0].size == 1234
    assert files[0].created_at.year == 2026


@pytest.mark.asyncio
async def test_remove_sends_prefixes():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=[])

    await _storage(handler).remove(["user-123/old.pdf"])
    assert seen["method"] == "DELETE"
    assert seen["url"] == f"{BASE}/storage/v1/object/resume"
    assert seen["body"] == {"prefixes": ["user-123/old.pdf"]}


@pytest.mark.asyncio
async def test_upload_never_upserts():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["content"] = request.content
        return httpx.Response(200, json={"Key": "resume/user-123/jane.pdf"})

    path = await _storage(handler).upload("user-123/jane.pdf", b"%PDF-1.4", "application/pdf")
    assert path == "user-123/jane.pdf"
    assert seen["url"] == f"{BASE}/storage/v1/object/resume/user-123/jane.pdf"
    assert seen["headers"]["x-upsert"] == "false"
    assert seen["headers"]["content-type"] == "application/pdf"
    assert seen["content"] == b"%PDF-1.4"


@pytest.mark.asyncio
async def test_upload_conflict_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"error": "Duplicate", "message": "The resource already exists"})

    with pytest.raises(StorageError, match="409"):
        await _storage(handler).upload("user-123/jane.pdf", b"%PDF", "application/pdf")


@pytest.mark.asyncio
async def test_network_error_raises_storage_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(StorageError):
        await _storage(handler).list("user-123")


def test_public_url():
    storage = _storage(lambda request: httpx.Response(200))
    assert storage.public_url("user-123/jane.pdf") == (
        f"{BASE}/storage/v1/object/public/resume/user-123/jane.pdf"
    )


def test_missing_configuration():
    with pytest.raises(StorageError):
        ResumeStorage(access_token="t", base_url="", api_key="")
