"""HTTP client for the IdeaBase Notes Service.

Every action checks the held session and validates its input before a
request is sent, so rejected actions never reach the network.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

import httpx
from domain.services.file_encoder import to_data_url
from domain.services.file_validator import FileDescriptor, validate_file
from utils.config import MAX_UPLOAD_SIZE

from client.session import Session

logger = logging.getLogger(__name__)

TRANSPORTS = ("multipart", "json")


class ClientError(Exception):
    """Exception raised when the service answers with an error.

    Attributes:
        message (str): Error message taken from the response body.
        status_code (Optional[int]): HTTP status, None for network failures.
        details (Any): ``details`` of upload errors, if any.
    """

    def __init__(
        self, message: str, status_code: Optional[int] = None, details: Any = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


def _error_from_response(response: httpx.Response) -> ClientError:
    try:
        data = response.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}
    message = data.get("error") or data.get("detail")
    if not isinstance(message, str):
        message = f"Request failed with status {response.status_code}"
    return ClientError(message, response.status_code, data.get("details"))


class IdeaBaseClient:
    """Async client over httpx.

    Attributes:
        base_url (str): Root URL of the service.
        session (Session): Session filled by ``sign_in`` / ``sign_up``.

    Example:
        >>> client = IdeaBaseClient("http://localhost:8002")
        >>> await client.sign_in("user@example.com", "secret123")
        >>> await client.upload_file("report.pdf", "application/pdf", data)
        {'message': 'File uploaded successfully', 'filePath': 'u1/....pdf', 'fileName': '....pdf'}
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[Session] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
        max_upload_size: int = MAX_UPLOAD_SIZE,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or Session()
        self._transport = transport
        self._timeout = timeout
        self._max_upload_size = max_upload_size

    async def _request(
        self, method: str, path: str, authenticated: bool = True, **kwargs
    ) -> Any:
        headers = kwargs.pop("headers", {})
        if authenticated:
            headers.update(self.session.auth_headers())

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, transport=self._transport, timeout=self._timeout
            ) as client:
                response = await client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ClientError(f"Network error: {e}") from e

        if response.status_code >= 400:
            raise _error_from_response(response)
        if response.status_code == 204:
            return None
        return response.json()

    async def _authenticate(self, path: str, email: str, password: str) -> Session:
        data = await self._request(
            "POST",
            path,
            authenticated=False,
            json={"email": email, "password": password},
        )
        self.session = Session(
            access_token=data["access_token"],
            user_id=data["user_id"],
            email=data.get("email"),
        )
        return self.session

    async def sign_in(self, email: str, password: str) -> Session:
        return await self._authenticate("/auth/sign-in", email, password)

    async def sign_up(self, email: str, password: str) -> Session:
        return await self._authenticate("/auth/sign-up", email, password)

    def sign_out(self) -> None:
        self.session.clear()

    async def create_note(
        self, title: str, content: str = "", tag_ids: Optional[Sequence[UUID]] = None
    ) -> Dict[str, Any]:
        self.session.require_user_id()
        return await self._request(
            "POST",
            "/notes",
            json={
                "title": title,
                "content": content,
                "tags": [str(tag_id) for tag_id in tag_ids or []],
            },
        )

    async def list_notes(self, page: int = 1, limit: int = 15) -> Dict[str, Any]:
        return await self._request("GET", "/notes", params={"page": page, "limit": limit})

    async def list_tags(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/tags")

    async def upload_file(
        self,
        file_name: str,
        content_type: str,
        content: bytes,
        note_id: Optional[UUID] = None,
        transport: str = "multipart",
    ) -> Dict[str, Any]:
        """Validate and upload a file.

        Args:
            file_name: Name of the picked file.
            content_type: Media type declared for the file.
            content: File bytes.
            note_id: Note the attachment should reference.
            transport: ``multipart`` sends the raw bytes, ``json`` sends a base64 data URL.

        Returns:
            dict: ``{message, filePath, fileName}``.

        Raises:
            AuthenticationRequiredError: If no session is held.
            FileValidationError: If the type or size is rejected locally.
            ClientError: If the service rejects the upload.
        """
        if transport not in TRANSPORTS:
            raise ValueError(f"Unknown upload transport: {transport}")

        user_id = self.session.require_user_id()
        validate_file(
            FileDescriptor(name=file_name, media_type=content_type, size=len(content)),
            self._max_upload_size,
        )
        logger.info(f"Uploading {file_name} ({len(content)} bytes) via {transport}")

        if transport == "json":
            body = {
                "encoding": "base64",
                "name": file_name,
                "type": content_type,
                "size": len(content),
                "content": to_data_url(content, content_type),
                "userId": user_id,
            }
            if note_id is not None:
                body["noteId"] = str(note_id)
            return await self._request("POST", "/functions/upload-file/json", json=body)

        form = {"userId": user_id}
        if note_id is not None:
            form["noteId"] = str(note_id)
        return await self._request(
            "POST",
            "/functions/upload-file",
            data=form,
            files={"file": (file_name, content, content_type)},
        )
