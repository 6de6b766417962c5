"""Upload gateway domain service.

This module contains the UploadService that validates an upload, writes the
bytes to object storage and records one metadata row referencing them.

The storage write and the metadata insert are not linked transactionally.
When the insert fails after a successful write the object stays in storage;
the failure is raised as ``MetadataWriteError`` carrying the orphaned key and
logged so the object can be reconciled by hand.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Tuple
from uuid import UUID

from domain.entities.attachment import Attachment, UploadRequest, build_storage_key
from domain.entities.file_type import FileType
from domain.services.file_signature import verify_signature
from domain.services.file_validator import (
    FileValidationError,
    UploadError,
    check_file_name,
    check_size,
    resolve_file_type,
)
from domain.services.note_service import NoteNotFoundError
from utils.config import Settings

if TYPE_CHECKING:
    from domain.repositories.attachment_repository import AttachmentRepository
    from domain.repositories.note_repository import NoteRepository
    from domain.repositories.storage_repository import ObjectStorage
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class StorageWriteError(UploadError):
    """Exception raised when the object store rejects a write."""

    pass


class MetadataWriteError(UploadError):
    """Exception raised when the metadata row cannot be inserted.

    Attributes:
        orphaned_path (str): Storage key of the object left without a row.
    """

    def __init__(self, message: str, orphaned_path: str, details: Optional[object] = None):
        super().__init__(message, details)
        self.orphaned_path = orphaned_path


class AttachmentNotFoundError(Exception):
    """Exception raised when an attachment is not found."""

    pass


class UploadService:
    """Domain service implementing the upload gateway.

    Attributes:
        _storage (ObjectStorage): Object store receiving the file bytes.
        _attachment_repository (AttachmentRepository): Metadata rows.
        _note_repository (NoteRepository): Used to check note back-references.
        _settings (Settings): Size ceiling, signature check and URL lifetime.

    Example:
        >>> service = UploadService(storage, attachment_repository, note_repository, settings)
        >>> attachment = await service.upload(db, request)
        >>> attachment.file_path
        'u1/0b6f6c6e-3f0a-4d8c-9d0e-7a1c2b3d4e5f.pdf'
    """

    def __init__(
        self,
        storage: "ObjectStorage",
        attachment_repository: "AttachmentRepository",
        note_repository: "NoteRepository",
        settings: Settings,
    ):
        self._storage = storage
        self._attachment_repository = attachment_repository
        self._note_repository = note_repository
        self._settings = settings

    def validate(self, request: UploadRequest) -> FileType:
        """Re-validate an upload server-side.

        Client-side validation is never trusted: the type, the real byte
        length and, when enabled, the leading bytes are all checked again.

        Raises:
            FileValidationError: If any check fails.
        """
        if not request.file_name or not request.file_name.strip():
            raise FileValidationError("No file uploaded")
        check_file_name(request.file_name)

        file_type = resolve_file_type(request.file_name, request.content_type)

        check_size(max(request.size, request.declared_size or 0), self._settings.max_upload_size)
        if request.declared_size is not None and request.declared_size != request.size:
            raise FileValidationError(
                "Declared file size does not match the uploaded content",
                {"declared": request.declared_size, "received": request.size},
            )

        if self._settings.verify_signature:
            verify_signature(file_type, request.content)
        return file_type

    async def upload(self, db_session: "Session", request: UploadRequest) -> Attachment:
        """Store an uploaded file and record its metadata row.

        Args:
            db_session: Database session for this operation
            request: Upload payload with the session owner's identity

        Returns:
            Attachment: The persisted metadata row

        Raises:
            FileValidationError: If the upload is rejected before any write
            NoteNotFoundError: If the referenced note is not the caller's
            StorageWriteError: If the object store rejects the write
            MetadataWriteError: If the row insert fails after the write
        """
        logger.info(
            f"Processing {request.transport} upload {request.file_name!r} "
            f"({request.size} bytes, {request.content_type}) for user {request.owner_id}"
        )

        file_type = self.validate(request)

        if request.note_id is not None:
            note = await self._note_repository.get_note_by_id(
                db_session, request.note_id, request.owner_id
            )
            if not note:
                raise NoteNotFoundError(f"Note {request.note_id} not found")

        file_path = build_storage_key(request.owner_id, request.extension)
        logger.info(f"Uploading file to storage: {file_path}")

        try:
            await self._storage.upload(
                file_path, request.content, request.content_type, upsert=False
            )
        except StorageWriteError:
            raise
        except Exception as e:
            logger.error(f"Storage upload error for {file_path}: {e}")
            raise StorageWriteError("Failed to upload file to storage", str(e)) from e

        logger.info(f"File uploaded to storage successfully: {file_path}")

        attachment = Attachment.from_upload(request, file_type, file_path)
        try:
            stored = await self._attachment_repository.create_attachment(
                db_session, attachment
            )
        except Exception as e:
            logger.error(
                f"Database insert error, storage object {file_path} is orphaned: {e}"
            )
            raise MetadataWriteError(
                "Failed to save file metadata", file_path, str(e)
            ) from e

        logger.info(f"File metadata saved to database: {stored.id}")
        return stored

    async def list_attachments(
        self, db_session: "Session", owner_id: str, note_id: Optional[UUID] = None
    ) -> List[Attachment]:
        return await self._attachment_repository.list_attachments(
            db_session, owner_id, note_id
        )

    async def create_download_url(
        self, db_session: "Session", attachment_id: UUID, owner_id: str
    ) -> Tuple[Attachment, str]:
        """Create a signed download URL for one of the owner's attachments.

        Raises:
            AttachmentNotFoundError: If the attachment is missing or not owned
            StorageWriteError: If the object store cannot sign the URL
        """
        attachment = await self._attachment_repository.get_attachment(
            db_session, attachment_id, owner_id
        )
        if not attachment:
            raise AttachmentNotFoundError(f"Attachment {attachment_id} not found")

        url = await self._storage.create_signed_url(
            attachment.file_path, self._settings.signed_url_expires
        )
        return attachment, url
