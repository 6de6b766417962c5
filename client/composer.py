"""Note-creation screen logic.

``NoteComposer`` owns the two independent action flows of the screen, saving
the note and uploading a file, and turns every outcome into a notification.
Failures never escape ``save`` or ``upload``.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from domain.services.file_validator import UploadError
from domain.services.session_guard import AuthenticationRequiredError

from client.api_client import ClientError, IdeaBaseClient

logger = logging.getLogger(__name__)

TITLE_REQUIRED_MESSAGE = "Please add a title"
NOTE_SAVED_MESSAGE = "Note saved successfully!"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class SaveState(str, Enum):
    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    FAILED = "failed"


class UploadState(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    UPLOADED = "uploaded"
    FAILED = "failed"


@dataclass(frozen=True)
class Notification:
    """User-visible toast.

    Attributes:
        level (str): ``success`` or ``error``.
        message (str): Text shown to the user.
    """

    level: str
    message: str


def _failure_message(error: Exception) -> str:
    if isinstance(error, AuthenticationRequiredError):
        return error.message
    if isinstance(error, (UploadError, ClientError)):
        return error.message
    return str(error) or UNEXPECTED_ERROR_MESSAGE


class NoteComposer:
    """State of the note-creation screen.

    Attributes:
        save_state (SaveState): Idle, Saving, Saved or Failed.
        upload_state (UploadState): Idle, Uploading, Uploaded or Failed.
        notifications (List[Notification]): Toasts in the order they were raised.
        note (Optional[dict]): Last saved note.
        uploads (List[dict]): Successful upload results.

    Example:
        >>> composer = NoteComposer(client)
        >>> await composer.save("", "<p>draft</p>")
        >>> composer.notifications[-1].message
        'Please add a title'
    """

    def __init__(self, client: IdeaBaseClient):
        self._client = client
        self.save_state = SaveState.IDLE
        self.upload_state = UploadState.IDLE
        self.notifications: List[Notification] = []
        self.note: Optional[Dict[str, Any]] = None
        self.uploads: List[Dict[str, Any]] = []

    @property
    def is_saving(self) -> bool:
        return self.save_state == SaveState.SAVING

    @property
    def is_uploading(self) -> bool:
        return self.upload_state == UploadState.UPLOADING

    def _notify(self, level: str, message: str) -> None:
        self.notifications.append(Notification(level=level, message=message))

    async def save(
        self, title: str, content: str = "", tag_ids: Optional[Sequence[UUID]] = None
    ) -> Optional[Dict[str, Any]]:
        """Persist the note; returns the saved note or None on failure."""
        if self.is_saving:
            return None

        try:
            self._client.session.require_user_id()
            if not title or not title.strip():
                raise ValueError(TITLE_REQUIRED_MESSAGE)
        except (AuthenticationRequiredError, ValueError) as e:
            self._notify("error", _failure_message(e))
            return None

        self.save_state = SaveState.SAVING
        try:
            self.note = await self._client.create_note(title, content, tag_ids)
        except Exception as e:
            logger.error(f"Saving note failed: {e}")
            self.save_state = SaveState.FAILED
            self._notify("error", _failure_message(e))
            return None

        self.save_state = SaveState.SAVED
        self._notify("success", NOTE_SAVED_MESSAGE)
        return self.note

    async def upload(
        self,
        file_name: str,
        content_type: str,
        content: bytes,
        transport: str = "multipart",
    ) -> Optional[Dict[str, Any]]:
        """Upload a picked file, attaching it to the saved note when there is one."""
        if self.is_uploading:
            return None

        note_id = UUID(self.note["id"]) if self.note else None
        self.upload_state = UploadState.UPLOADING
        try:
            result = await self._client.upload_file(
                file_name, content_type, content, note_id=note_id, transport=transport
            )
        except Exception as e:
            logger.error(f"Uploading {file_name} failed: {e}")
            self.upload_state = UploadState.FAILED
            self._notify("error", _failure_message(e))
            return None

        self.upload_state = UploadState.UPLOADED
        self.uploads.append(result)
        self._notify("success", result.get("message", "File uploaded successfully"))
        return result
