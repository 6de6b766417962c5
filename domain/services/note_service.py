"""Note domain service for the IdeaBase notes application.

This module contains the NoteService that orchestrates note operations
following Domain-Driven Design principles.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple
from uuid import UUID

from domain.entities.note import Note
from domain.entities.pagination import NoteListCriteria, PaginationMetadata
from domain.entities.tag import TagEntity

if TYPE_CHECKING:
    from domain.repositories.note_repository import NoteRepository
    from domain.repositories.tag_repository import TagRepository
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class NoteError(Exception):
    """Base exception for note-related errors."""

    pass


class NoteNotFoundError(NoteError):
    """Exception raised when a note is not found."""

    pass


class UnknownTagError(ValueError):
    """Exception raised when a note references tags the owner does not have."""

    pass


class NoteService:
    """Domain service for handling note operations.

    This service encapsulates the business logic for note management:
    creation, owner-scoped retrieval, updates and archiving.
    """

    def __init__(self, note_repository: "NoteRepository", tag_repository: "TagRepository"):
        """Initialize the note service with dependencies.

        Args:
            note_repository: Repository for performing note operations
            tag_repository: Repository used to resolve tag identifiers
        """
        self._note_repository = note_repository
        self._tag_repository = tag_repository

    async def create_note(
        self,
        db_session: "Session",
        title: str,
        content: Optional[str],
        owner_id: str,
        tag_ids: Optional[Sequence[UUID]] = None,
    ) -> Note:
        """Create a new note with business logic validation.

        The title is checked before any persistence call is made.

        Args:
            db_session: Database session for this operation
            title: Note title
            content: Note content (rich-text markup)
            owner_id: Identity of the note owner
            tag_ids: Identifiers of the owner's tags to attach

        Returns:
            Note: Created note with assigned ID

        Raises:
            ValueError: If the title is empty or a tag is unknown
            NoteError: If creation fails
        """
        logger.info(f"Creating note for user {owner_id}")

        # Validation happens in the entity before any repository call
        note = Note.create_new(title=title, content=content, owner_id=owner_id)

        try:
            note.tags = await self._resolve_tags(db_session, tag_ids, owner_id)
            created_note = await self._note_repository.create_note(db_session, note)
        except ValueError:
            raise
        except Exception as e:
            logger.error(f"Failed to create note: {str(e)}")
            raise NoteError(f"Failed to create note: {str(e)}") from e

        logger.info(f"Successfully created note {created_note.id}")
        return created_note

    async def get_note(self, db_session: "Session", note_id: UUID, owner_id: str) -> Note:
        """Get a note by ID with access control.

        Raises:
            NoteNotFoundError: If note not found or owned by someone else
        """
        note = await self._note_repository.get_note_by_id(db_session, note_id, owner_id)
        if not note:
            raise NoteNotFoundError(f"Note {note_id} not found")
        return note

    async def update_note(
        self,
        db_session: "Session",
        note_id: UUID,
        owner_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
        tag_ids: Optional[Sequence[UUID]] = None,
    ) -> Note:
        """Update an existing note with business logic validation.

        Args:
            db_session: Database session for this operation
            note_id: UUID of the note to update
            owner_id: Identity of the user attempting the update
            title: New title (optional)
            content: New content (optional)
            tag_ids: New tag identifiers replacing the current tags (optional)

        Returns:
            Note: Updated note

        Raises:
            NoteNotFoundError: If note not found
            ValueError: If update data is invalid
            NoteError: If update fails
        """
        logger.info(f"Updating note {note_id} for user {owner_id}")

        existing_note = await self.get_note(db_session, note_id, owner_id)

        if title is not None or content is not None:
            existing_note.update_content(title=title, content=content)

        try:
            if tag_ids is not None:
                existing_note.replace_tags(
                    await self._resolve_tags(db_session, tag_ids, owner_id)
                )
            updated_note = await self._note_repository.update_note(
                db_session, existing_note
            )
        except ValueError:
            raise
        except Exception as e:
            logger.error(f"Failed to update note {note_id}: {str(e)}")
            raise NoteError(f"Failed to update note: {str(e)}") from e

        logger.info(f"Successfully updated note {note_id}")
        return updated_note

    async def set_archived(
        self, db_session: "Session", note_id: UUID, owner_id: str, archived: bool
    ) -> Note:
        """Archive or restore one of the owner's notes.

        Raises:
            NoteNotFoundError: If note not found
            NoteError: If the update fails
        """
        note = await self.get_note(db_session, note_id, owner_id)
        if archived:
            note.archive()
        else:
            note.restore()

        try:
            return await self._note_repository.update_note(db_session, note)
        except Exception as e:
            logger.error(f"Failed to archive note {note_id}: {str(e)}")
            raise NoteError(f"Failed to update note: {str(e)}") from e

    async def list_notes(
        self, db_session: "Session", criteria: NoteListCriteria
    ) -> Tuple[List[Note], PaginationMetadata]:
        """Get paginated list of the owner's notes.

        Raises:
            NoteError: If retrieval fails
        """
        try:
            notes, total_count = await self._note_repository.list_notes(
                db_session, criteria
            )
        except Exception as e:
            logger.error(f"Failed to list notes: {str(e)}")
            raise NoteError(f"Failed to retrieve notes: {str(e)}") from e

        pagination = PaginationMetadata.calculate(
            current_page=criteria.page,
            total_notes=total_count,
            notes_per_page=criteria.limit,
        )
        logger.info(f"Retrieved {len(notes)} notes for user {criteria.owner_id}")
        return notes, pagination

    async def _resolve_tags(
        self,
        db_session: "Session",
        tag_ids: Optional[Sequence[UUID]],
        owner_id: str,
    ) -> List[TagEntity]:
        if not tag_ids:
            return []
        wanted = list(dict.fromkeys(tag_ids))
        tags = await self._tag_repository.get_by_ids(db_session, wanted, owner_id)
        found = {tag.id for tag in tags}
        missing = [str(tag_id) for tag_id in wanted if tag_id not in found]
        if missing:
            raise UnknownTagError(f"Unknown tags: {', '.join(missing)}")
        return tags
