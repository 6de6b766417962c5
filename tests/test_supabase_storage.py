import json
from dataclasses import replace

import httpx
import pytest
from domain.services.upload_service import StorageWriteError
from infrastructure.storage.supabase_storage import SupabaseStorage


async def test_upload_posts_bytes_without_upsert(settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = request.content
        return httpx.Response(200, json={"Key": "attachments/u1/a.pdf"})

    storage = SupabaseStorage(settings, transport=httpx.MockTransport(handler))

    key = await storage.upload("u1/a.pdf", b"%PDF-", "application/pdf")

    assert key == "u1/a.pdf"
    assert seen["url"] == "http://backend.test/storage/v1/object/attachments/u1/a.pdf"
    assert seen["headers"]["authorization"] == "Bearer service-role-key"
    assert seen["headers"]["x-upsert"] == "false"
    assert seen["headers"]["content-type"] == "application/pdf"
    assert seen["body"] == b"%PDF-"


async def test_rejected_write_raises_storage_error(settings):
    transport = httpx.MockTransport(
        lambda request: httpx.Response(409, json={"error": "Duplicate", "message": "The resource already exists"})
    )
    storage = SupabaseStorage(settings, transport=transport)

    with pytest.raises(StorageWriteError) as exc_info:
        await storage.upload("u1/a.pdf", b"%PDF-", "application/pdf")

    assert exc_info.value.message == "Failed to upload file to storage"
    assert exc_info.value.details["error"] == "Duplicate"


async def test_network_error_raises_storage_error(settings):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    storage = SupabaseStorage(settings, transport=httpx.MockTransport(handler))

    with pytest.raises(StorageWriteError):
        await storage.upload("u1/a.pdf", b"%PDF-", "application/pdf")


async def test_missing_credentials(settings):
    storage = SupabaseStorage(replace(settings, service_role_key=""))

    with pytest.raises(StorageWriteError, match="credentials"):
        await storage.upload("u1/a.pdf", b"%PDF-", "application/pdf")


async def test_signed_url_is_made_absolute(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/storage/v1/object/sign/attachments/u1/a.pdf"
        assert json.loads(request.content) == {"expiresIn": 600}
        return httpx.Response(200, json={"signedURL": "/object/sign/attachments/u1/a.pdf?token=t"})

    storage = SupabaseStorage(settings, transport=httpx.MockTransport(handler))

    url = await storage.create_signed_url("u1/a.pdf", 600)

    assert url == "http://backend.test/storage/v1/object/sign/attachments/u1/a.pdf?token=t"
