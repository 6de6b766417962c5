"""SQLAlchemy implementation of the attachment repository."""

from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from domain.entities.attachment import Attachment
from domain.repositories.attachment_repository import AttachmentRepository
from infrastructure.models.attachment_orm import AttachmentORM
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class SqlAlchemyAttachmentRepository(AttachmentRepository):
    """SQLAlchemy implementation of the attachment repository.

    NOTE: This repository does not store the session internally.
    Each method receives a fresh session.
    """

    async def create_attachment(
        self, db_session: Session, attachment: Attachment
    ) -> Attachment:
        try:
            row = AttachmentORM(
                file_name=attachment.file_name,
                file_path=attachment.file_path,
                file_size=attachment.file_size,
                file_type=attachment.file_type,
                owner_id=attachment.owner_id,
                metadata_=dict(attachment.metadata),
                note_id=attachment.note_id,
                created_at=attachment.created_at,
            )
            db_session.add(row)
            db_session.commit()
            db_session.refresh(row)
            return self._orm_to_domain_entity(row)
        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to insert attachment {attachment.file_path}: {str(e)}")
            raise

    async def get_attachment(
        self, db_session: Session, attachment_id: UUID, owner_id: str
    ) -> Optional[Attachment]:
        row = (
            db_session.query(AttachmentORM)
            .filter(
                AttachmentORM.id == attachment_id, AttachmentORM.owner_id == owner_id
            )
            .first()
        )
        return self._orm_to_domain_entity(row) if row else None

    async def list_attachments(
        self, db_session: Session, owner_id: str, note_id: Optional[UUID] = None
    ) -> List[Attachment]:
        query = db_session.query(AttachmentORM).filter(
            AttachmentORM.owner_id == owner_id
        )
        if note_id is not None:
            query = query.filter(AttachmentORM.note_id == note_id)
        rows = query.order_by(AttachmentORM.created_at.desc()).all()
        return [self._orm_to_domain_entity(row) for row in rows]

    def _orm_to_domain_entity(self, row: AttachmentORM) -> Attachment:
        return Attachment(
            id=row.id,
            file_name=row.file_name,
            file_path=row.file_path,
            file_size=row.file_size,
            file_type=row.file_type,
            owner_id=row.owner_id,
            metadata=dict(row.metadata_ or {}),
            note_id=row.note_id,
            created_at=row.created_at,
        )
