"""Object storage client for the managed backend's storage REST API.

Files are written to ``/storage/v1/object/{bucket}/{key}`` with the service
credential; downloads go through time-limited signed URLs.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx
from domain.repositories.storage_repository import ObjectStorage
from domain.services.upload_service import StorageWriteError
from utils.config import Settings

logger = logging.getLogger(__name__)


class SupabaseStorage(ObjectStorage):
    """httpx implementation of ``ObjectStorage``.

    Attributes:
        _settings (Settings): Backend URL, service credential and bucket.
        _transport (Optional[httpx.AsyncBaseTransport]): Transport override,
            used by tests to stub the backend.

    Example:
        >>> storage = SupabaseStorage(Settings.from_env())
        >>> await storage.upload("u1/3f0a.pdf", data, "application/pdf")
        'u1/3f0a.pdf'
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self._settings = settings
        self._transport = transport
        self._timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self._timeout)

    def _headers(self, **extra: str) -> dict:
        key = self._settings.service_role_key
        if not key:
            raise StorageWriteError("Storage credentials are not configured")
        headers = {"Authorization": f"Bearer {key}", "apikey": key}
        headers.update(extra)
        return headers

    def _object_url(self, *parts: str) -> str:
        return "/".join(
            [self._settings.storage_api_url, *parts[:-1], quote(parts[-1], safe="/")]
        )

    async def upload(
        self, path: str, content: bytes, content_type: str, upsert: bool = False
    ) -> str:
        """Write an object; with ``upsert=False`` an existing key is an error.

        Raises:
            StorageWriteError: If the storage API rejects the write.
        """
        url = self._object_url("object", self._settings.storage_bucket, path)
        headers = self._headers(
            **{
                "Content-Type": content_type or "application/octet-stream",
                "x-upsert": "true" if upsert else "false",
            }
        )

        try:
            async with self._client() as client:
                response = await client.post(url, content=content, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Storage request failed for {path}: {e}")
            raise StorageWriteError("Failed to upload file to storage", str(e)) from e

        if response.status_code not in (200, 201):
            details = _error_details(response)
            logger.error(
                f"Storage upload rejected for {path}: {response.status_code} {details}"
            )
            raise StorageWriteError("Failed to upload file to storage", details)

        return path

    async def create_signed_url(self, path: str, expires_in: int) -> str:
        """Create a time-limited download URL for ``path``.

        Raises:
            StorageWriteError: If the storage API refuses to sign the URL.
        """
        url = self._object_url("object/sign", self._settings.storage_bucket, path)
        headers = self._headers()

        try:
            async with self._client() as client:
                response = await client.post(
                    url, json={"expiresIn": int(expires_in)}, headers=headers
                )
        except httpx.HTTPError as e:
            logger.error(f"Signing request failed for {path}: {e}")
            raise StorageWriteError("Failed to create download URL", str(e)) from e

        if response.status_code != 200:
            details = _error_details(response)
            logger.error(f"Signing rejected for {path}: {response.status_code} {details}")
            raise StorageWriteError("Failed to create download URL", details)

        data = response.json()
        signed = data.get("signedURL") or data.get("signedUrl")
        if not signed:
            raise StorageWriteError("Failed to create download URL", data)
        if signed.startswith("/"):
            return f"{self._settings.storage_api_url}{signed}"
        return signed


def _error_details(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {"statusCode": response.status_code, "message": response.text}
