"""Attachment repository interface.

This module defines the abstract interface for attachment metadata rows.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

if TYPE_CHECKING:
    from domain.entities.attachment import Attachment
    from sqlalchemy.orm import Session


class AttachmentRepository(ABC):
    """Abstract repository for attachment metadata rows.

    Rows are insert-only: an attachment is created once per successful upload
    and never mutated.
    """

    @abstractmethod
    async def create_attachment(
        self, db_session: Session, attachment: Attachment
    ) -> Attachment:
        """Insert one metadata row.

        Returns:
            Attachment: The stored row with its generated ID.
        """
        pass

    @abstractmethod
    async def get_attachment(
        self, db_session: Session, attachment_id: UUID, owner_id: str
    ) -> Optional[Attachment]:
        """Get one of the owner's attachments, None if missing or not owned."""
        pass

    @abstractmethod
    async def list_attachments(
        self, db_session: Session, owner_id: str, note_id: Optional[UUID] = None
    ) -> List[Attachment]:
        """List the owner's attachments, newest first."""
        pass
