"""Tag repository interface.

This module defines the abstract interface for tag data access
operations, following the Repository pattern from DDD.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from ..entities.tag import TagEntity


class TagRepository(ABC):
    """Abstract interface for tag repository operations.

    This interface defines the contract for tag data access
    without coupling to specific database implementations.
    Tags belong to one owner; every method is scoped to that owner.

    NOTE: All methods receive a fresh database session to ensure
    proper transaction management and avoid session leaks.
    """

    @abstractmethod
    async def get_all(self, db_session: Session, owner_id: str) -> List[TagEntity]:
        """Retrieve all tags of ``owner_id``.

        Example:
            >>> with get_db_session() as db:
            ...     tags = await repository.get_all(db, "u1")
            ...     print(len(tags))
            5
        """
        pass

    @abstractmethod
    async def get_by_id(
        self, db_session: Session, tag_id: UUID, owner_id: str
    ) -> Optional[TagEntity]:
        """Retrieve one of the owner's tags by its identifier."""
        pass

    @abstractmethod
    async def get_by_ids(
        self, db_session: Session, tag_ids: Sequence[UUID], owner_id: str
    ) -> List[TagEntity]:
        """Retrieve the owner's tags among ``tag_ids``; unknown ids are skipped."""
        pass

    @abstractmethod
    async def get_by_name(
        self, db_session: Session, name: str, owner_id: str
    ) -> Optional[TagEntity]:
        """Retrieve one of the owner's tags by name (case-insensitive)."""
        pass

    @abstractmethod
    async def save(self, db_session: Session, tag: TagEntity) -> TagEntity:
        """Save a tag entity to the repository.

        For new tags (id is None), this will create a new record.
        For existing tags, this will update the existing record.

        Returns:
            TagEntity: The saved tag entity with populated ID.
        """
        pass

    @abstractmethod
    async def delete(self, db_session: Session, tag_id: UUID, owner_id: str) -> bool:
        """Delete one of the owner's tags.

        Returns:
            bool: True if the tag was deleted, False if not found.
        """
        pass
