"""Note repository interface for the IdeaBase notes application.

This module defines the repository interface for note operations
following Domain-Driven Design principles.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional, Tuple
from uuid import UUID

if TYPE_CHECKING:
    from domain.entities.note import Note
    from domain.entities.pagination import NoteListCriteria
    from sqlalchemy.orm import Session


class NoteRepository(ABC):
    """Abstract repository interface for note operations.

    This interface defines the contract for note repositories,
    allowing different implementations (e.g., SQLAlchemy, in-memory for tests)
    while keeping the domain layer independent of infrastructure concerns.

    Every lookup is scoped to the owner: a note belonging to someone else is
    indistinguishable from a missing note.
    """

    @abstractmethod
    async def create_note(self, db_session: Session, note: Note) -> Note:
        """Create a new note in the repository.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            note (Note): Domain Note entity to create

        Returns:
            Note: Created note with assigned ID and timestamps
        """
        pass

    @abstractmethod
    async def get_note_by_id(
        self, db_session: Session, note_id: UUID, owner_id: str
    ) -> Optional[Note]:
        """Get a note by ID if it belongs to ``owner_id``.

        Returns:
            Optional[Note]: Note if found and owned, None otherwise
        """
        pass

    @abstractmethod
    async def update_note(self, db_session: Session, note: Note) -> Note:
        """Persist title, content, tags and archived flag of an existing note.

        Returns:
            Note: Updated note with new timestamp
        """
        pass

    @abstractmethod
    async def list_notes(
        self, db_session: Session, criteria: NoteListCriteria
    ) -> Tuple[List[Note], int]:
        """Get one page of a user's notes.

        Returns:
            Tuple[List[Note], int]: Notes of the page and total matching count
        """
        pass
