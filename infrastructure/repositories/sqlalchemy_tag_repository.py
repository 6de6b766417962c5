"""SQLAlchemy implementation of the tag repository.

This module contains the concrete implementation of TagRepository
using SQLAlchemy for database operations and entity mapping.
"""

from typing import List, Optional, Sequence
from uuid import UUID

from domain.entities.tag import TagEntity
from domain.repositories.tag_repository import TagRepository
from sqlalchemy import func
from sqlalchemy.orm import Session

from infrastructure.models.tag_orm import TagORM


class SqlAlchemyTagRepository(TagRepository):
    """SQLAlchemy implementation of the tag repository.

    This class implements the TagRepository using SQLAlchemy
    for database operations. It handles the conversion between domain
    entities and SQLAlchemy models.

    NOTE: This repository does not store the session internally.
    Each method receives a fresh session to ensure proper transaction management
    and avoid session leaks.

    Example:
        >>> repository = SqlAlchemyTagRepository()
        >>> with get_db_session() as db:
        ...     tags = await repository.get_all(db, "u1")
    """

    async def get_all(self, db_session: Session, owner_id: str) -> List[TagEntity]:
        tag_models = db_session.query(TagORM).filter(TagORM.owner_id == owner_id).all()
        return [self._model_to_entity(model) for model in tag_models]

    async def get_by_id(
        self, db_session: Session, tag_id: UUID, owner_id: str
    ) -> Optional[TagEntity]:
        tag_model = self._get_owned(db_session, tag_id, owner_id)
        return self._model_to_entity(tag_model) if tag_model else None

    async def get_by_ids(
        self, db_session: Session, tag_ids: Sequence[UUID], owner_id: str
    ) -> List[TagEntity]:
        if not tag_ids:
            return []
        tag_models = (
            db_session.query(TagORM)
            .filter(TagORM.id.in_(list(tag_ids)), TagORM.owner_id == owner_id)
            .all()
        )
        return [self._model_to_entity(model) for model in tag_models]

    async def get_by_name(
        self, db_session: Session, name: str, owner_id: str
    ) -> Optional[TagEntity]:
        """Retrieve one of the owner's tags by its name (case-insensitive)."""
        tag_model = (
            db_session.query(TagORM)
            .filter(
                TagORM.owner_id == owner_id,
                func.lower(TagORM.name) == name.strip().lower(),
            )
            .first()
        )
        return self._model_to_entity(tag_model) if tag_model else None

    async def save(self, db_session: Session, tag: TagEntity) -> TagEntity:
        """Save a tag entity to the database.

        For new tags (id is None), this will create a new record.
        For existing tags, this will update the existing record.

        Args:
            db_session (Session): Fresh SQLAlchemy database session for this operation.
            tag (TagEntity): The tag entity to save.

        Returns:
            TagEntity: The saved tag entity with populated ID.
        """
        try:
            tag_model = None
            if not tag.is_new():
                tag_model = self._get_owned(db_session, tag.id, tag.owner_id)

            if tag_model:
                tag_model.name = tag.name
                tag_model.color = tag.color
            else:
                tag_model = self._entity_to_model(tag)
                db_session.add(tag_model)

            db_session.commit()
            db_session.refresh(tag_model)
            return self._model_to_entity(tag_model)
        except Exception:
            db_session.rollback()
            raise

    async def delete(self, db_session: Session, tag_id: UUID, owner_id: str) -> bool:
        tag_model = self._get_owned(db_session, tag_id, owner_id)
        if not tag_model:
            return False
        try:
            db_session.delete(tag_model)
            db_session.commit()
        except Exception:
            db_session.rollback()
            raise
        return True

    def _get_owned(
        self, db_session: Session, tag_id: UUID, owner_id: str
    ) -> Optional[TagORM]:
        return (
            db_session.query(TagORM)
            .filter(TagORM.id == tag_id, TagORM.owner_id == owner_id)
            .first()
        )

    def _model_to_entity(self, tag_model: TagORM) -> TagEntity:
        """Convert SQLAlchemy model to domain entity."""
        return TagEntity(
            id=tag_model.id,
            name=tag_model.name,
            owner_id=tag_model.owner_id,
            color=tag_model.color,
        )

    def _entity_to_model(self, tag_entity: TagEntity) -> TagORM:
        """Convert domain entity to SQLAlchemy model."""
        return TagORM(
            id=tag_entity.id,
            name=tag_entity.name,
            owner_id=tag_entity.owner_id,
            color=tag_entity.color,
        )
