"""Tag domain service.

This module contains the TagService that implements business logic
for tag operations, orchestrating between entities and repositories.
"""

from typing import List, Optional
from uuid import UUID

from domain.entities.tag import TagEntity
from domain.repositories.tag_repository import TagRepository
from sqlalchemy.orm import Session


class TagNotFoundError(Exception):
    """Exception raised when a requested tag is not found."""

    pass


class TagAlreadyExistsError(Exception):
    """Exception raised when trying to create a tag that already exists."""

    pass


class TagService:
    """Domain service for tag business operations.

    This service contains the business logic for tag operations,
    coordinating between domain entities and repository interfaces.
    Tags are private to their owner.

    Attributes:
        _tag_repository (TagRepository): Repository for tag data access.

    Example:
        >>> service = TagService(tag_repository)
        >>> with get_db_session() as db:
        ...     tags = await service.get_all_tags(db, "u1")
        ...     print(len(tags))
        5
    """

    def __init__(self, tag_repository: TagRepository) -> None:
        """Initialize the tag service with required dependencies.

        Args:
            tag_repository (TagRepository): Repository implementation for tag data access.
        """
        self._tag_repository = tag_repository

    async def get_all_tags(self, db_session: Session, owner_id: str) -> List[TagEntity]:
        """Retrieve the owner's tags sorted by name."""
        tags = await self._tag_repository.get_all(db_session, owner_id)

        # Business rule: Return tags sorted by name for consistent ordering
        return sorted(tags, key=lambda tag: tag.name.lower())

    async def get_tag_by_id(
        self, db_session: Session, tag_id: UUID, owner_id: str
    ) -> TagEntity:
        """Retrieve one of the owner's tags.

        Raises:
            TagNotFoundError: If the tag does not exist or belongs to someone else.
        """
        tag = await self._tag_repository.get_by_id(db_session, tag_id, owner_id)
        if not tag:
            raise TagNotFoundError(f"Tag with ID {tag_id} not found")
        return tag

    async def create_tag(
        self, db_session: Session, owner_id: str, name: str, color: Optional[str] = None
    ) -> TagEntity:
        """Create a new tag for the owner.

        Raises:
            TagAlreadyExistsError: If the owner already has a tag with that name.
            ValueError: If the tag name or color is invalid.
        """
        # Validation happens in the entity constructor
        new_tag = TagEntity(id=None, name=name, owner_id=owner_id, color=color)

        # Business rule: Tag names must be unique per owner (case-insensitive)
        existing_tag = await self._tag_repository.get_by_name(
            db_session, new_tag.name, owner_id
        )
        if existing_tag:
            raise TagAlreadyExistsError(f"Tag with name '{new_tag.name}' already exists")

        return await self._tag_repository.save(db_session, new_tag)

    async def update_tag(
        self,
        db_session: Session,
        tag_id: UUID,
        owner_id: str,
        name: Optional[str] = None,
        color: Optional[str] = None,
    ) -> TagEntity:
        """Update name and/or color of an existing tag.

        Raises:
            TagNotFoundError: If the tag does not exist.
            TagAlreadyExistsError: If another tag of the owner has the new name.
            ValueError: If the new name or color is invalid.
        """
        existing_tag = await self.get_tag_by_id(db_session, tag_id, owner_id)
        updated_tag = TagEntity(
            id=tag_id,
            name=name if name is not None else existing_tag.name,
            owner_id=owner_id,
            color=color if color is not None else existing_tag.color,
        )

        # Business rule: Don't allow duplicate names (case-insensitive)
        if existing_tag.name.lower() != updated_tag.name.lower():
            duplicate_tag = await self._tag_repository.get_by_name(
                db_session, updated_tag.name, owner_id
            )
            if duplicate_tag and duplicate_tag.id != tag_id:
                raise TagAlreadyExistsError(
                    f"Tag with name '{updated_tag.name}' already exists"
                )

        return await self._tag_repository.save(db_session, updated_tag)

    async def delete_tag(self, db_session: Session, tag_id: UUID, owner_id: str) -> bool:
        """Delete one of the owner's tags.

        Returns:
            bool: True if the tag was deleted, False if not found.
        """
        return await self._tag_repository.delete(db_session, tag_id, owner_id)
