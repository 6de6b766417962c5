"""Attachment domain entities.

This module contains the Attachment entity describing a stored upload and the
UploadRequest value object every upload transport is converted into.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from domain.entities.file_type import FileType, file_extension


@dataclass(frozen=True)
class UploadRequest:
    """Single upload contract shared by the multipart and JSON transports.

    Attributes:
        file_name (str): Name declared by the client, e.g. ``report.pdf``.
        content_type (str): Media type declared by the client.
        content (bytes): Raw file bytes, already decoded from the transport.
        owner_id (str): Identity resolved from the caller's session.
        declared_size (Optional[int]): Size claimed by the client, if sent.
        note_id (Optional[UUID]): Note the attachment should reference.
        transport (str): ``multipart`` or ``base64``, kept for logging.

    Example:
        >>> request = UploadRequest(
        ...     file_name="report.pdf",
        ...     content_type="application/pdf",
        ...     content=b"%PDF-1.7...",
        ...     owner_id="u1",
        ... )
        >>> request.size
        11
    """

    file_name: str
    content_type: str
    content: bytes = field(repr=False)
    owner_id: str
    declared_size: Optional[int] = None
    note_id: Optional[UUID] = None
    transport: str = "multipart"

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        return file_extension(self.file_name)


def build_storage_key(owner_id: str, extension: str) -> str:
    """Derive a collision-resistant storage key ``{owner}/{uuid}.{ext}``.

    Example:
        >>> build_storage_key("u1", "pdf")  # doctest: +SKIP
        'u1/0b6f6c6e-3f0a-4d8c-9d0e-7a1c2b3d4e5f.pdf'
    """
    return f"{owner_id}/{uuid4()}.{extension.lower()}"


@dataclass
class Attachment:
    """Domain entity representing an uploaded file and its metadata row.

    Attributes:
        id (Optional[UUID]): Row identifier, None until persisted.
        file_name (str): Original name declared by the uploader.
        file_path (str): Storage key of the object.
        file_size (int): Size in bytes.
        file_type (FileType): Kind of the file.
        owner_id (str): Uploader identity.
        metadata (Dict[str, Any]): Audit blob (original name, uploader, time).
        note_id (Optional[UUID]): Optional back-reference to a note.
        created_at (Optional[datetime]): Creation timestamp.
    """

    id: Optional[UUID]
    file_name: str
    file_path: str
    file_size: int
    file_type: FileType
    owner_id: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    note_id: Optional[UUID] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_upload(
        cls, request: UploadRequest, file_type: FileType, file_path: str
    ) -> "Attachment":
        """Factory building the metadata row for a stored upload."""
        now = datetime.utcnow()
        return cls(
            id=None,
            file_name=request.file_name,
            file_path=file_path,
            file_size=request.size,
            file_type=file_type,
            owner_id=request.owner_id,
            metadata={
                "originalName": request.file_name,
                "uploadedBy": request.owner_id,
                "uploadedAt": now.isoformat() + "Z",
                "contentType": request.content_type,
            },
            note_id=request.note_id,
            created_at=now,
        )

    @property
    def stored_name(self) -> str:
        """Object name inside the owner's folder, e.g. ``<uuid>.pdf``."""
        return self.file_path.rsplit("/", 1)[-1]
