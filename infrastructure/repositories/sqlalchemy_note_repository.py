"""SQLAlchemy implementation of the note repository.

This module contains the concrete implementation of the NoteRepository
using SQLAlchemy for database operations.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from domain.entities.note import Note
from domain.entities.pagination import NoteListCriteria
from domain.entities.tag import TagEntity
from domain.repositories.note_repository import NoteRepository
from infrastructure.models.associations import note_tags
from infrastructure.models.note_orm import NoteORM
from infrastructure.models.tag_orm import TagORM
from sqlalchemy import distinct, func
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class SQLAlchemyNoteRepository(NoteRepository):
    """SQLAlchemy implementation of the note repository.

    NOTE: This repository does not store the session internally.
    Each method receives a fresh session to ensure proper transaction management
    and avoid session leaks.
    """

    async def create_note(self, db_session: Session, note: Note) -> Note:
        """Insert a note and link the owner's existing tags.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            note (Note): Domain Note entity to create

        Returns:
            Note: Created note with assigned ID and timestamps
        """
        try:
            db_note = NoteORM(
                title=note.title,
                content=note.content,
                owner_id=note.owner_id,
                is_archived=note.is_archived,
                created_at=note.created_at,
                updated_at=note.updated_at,
            )
            db_note.tags = self._load_tags(db_session, note.tags, note.owner_id)

            db_session.add(db_note)
            db_session.commit()
            db_session.refresh(db_note)

            return self._orm_to_domain_entity(db_note)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to create note: {str(e)}")
            raise

    async def get_note_by_id(
        self, db_session: Session, note_id: UUID, owner_id: str
    ) -> Optional[Note]:
        note_orm = self._get_owned(db_session, note_id, owner_id)
        if not note_orm:
            logger.info(f"Note {note_id} not found for user {owner_id}")
            return None
        return self._orm_to_domain_entity(note_orm)

    async def update_note(self, db_session: Session, note: Note) -> Note:
        """Persist the mutable fields of an existing note.

        Raises:
            ValueError: If the note is not found for its owner.
        """
        try:
            note_orm = self._get_owned(db_session, note.id, note.owner_id)
            if not note_orm:
                raise ValueError(f"Note {note.id} not found")

            note_orm.title = note.title
            note_orm.content = note.content
            note_orm.is_archived = note.is_archived
            note_orm.updated_at = note.updated_at
            note_orm.tags = self._load_tags(db_session, note.tags, note.owner_id)

            db_session.commit()
            db_session.refresh(note_orm)
            return self._orm_to_domain_entity(note_orm)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to update note {note.id}: {str(e)}")
            raise

    async def list_notes(
        self, db_session: Session, criteria: NoteListCriteria
    ) -> Tuple[List[Note], int]:
        """Get one page of a user's notes, most recently updated first.

        Tag filtering keeps only notes carrying all requested tags.
        """
        try:
            base_query = db_session.query(NoteORM).filter(
                NoteORM.owner_id == criteria.owner_id
            )
            if criteria.archived is not None:
                base_query = base_query.filter(
                    NoteORM.is_archived == criteria.archived
                )

            if criteria.tag_ids:
                tag_ids = list(criteria.tag_ids)
                base_query = (
                    base_query.join(note_tags)
                    .filter(note_tags.c.tag_id.in_(tag_ids))
                    .group_by(NoteORM.id)
                    .having(func.count(distinct(note_tags.c.tag_id)) == len(tag_ids))
                )

            total_count = base_query.count()

            notes_orm = (
                base_query.order_by(NoteORM.updated_at.desc())
                .offset(criteria.offset)
                .limit(criteria.limit)
                .all()
            )
            return [self._orm_to_domain_entity(n) for n in notes_orm], total_count

        except Exception as e:
            logger.error(f"Failed to list notes for {criteria.owner_id}: {str(e)}")
            raise

    def _get_owned(
        self, db_session: Session, note_id: UUID, owner_id: str
    ) -> Optional[NoteORM]:
        return (
            db_session.query(NoteORM)
            .filter(NoteORM.id == note_id, NoteORM.owner_id == owner_id)
            .first()
        )

    def _load_tags(
        self, db_session: Session, tags: List[TagEntity], owner_id: str
    ) -> List[TagORM]:
        # Only link existing tags of the owner, never create new ones
        tag_ids = [tag.id for tag in tags if tag.id is not None]
        if not tag_ids:
            return []
        return (
            db_session.query(TagORM)
            .filter(TagORM.id.in_(tag_ids), TagORM.owner_id == owner_id)
            .all()
        )

    def _orm_to_domain_entity(self, note_orm: NoteORM) -> Note:
        """Convert SQLAlchemy ORM object to domain entity."""
        tag_entities = [
            TagEntity(
                id=tag_orm.id,
                name=tag_orm.name,
                owner_id=tag_orm.owner_id,
                color=tag_orm.color,
            )
            for tag_orm in note_orm.tags
        ]

        return Note(
            id=note_orm.id,
            title=note_orm.title,
            content=note_orm.content or "",
            owner_id=note_orm.owner_id,
            tags=sorted(tag_entities, key=lambda tag: tag.name.lower()),
            created_at=note_orm.created_at,
            updated_at=note_orm.updated_at,
            is_archived=note_orm.is_archived,
        )
