"""SQLAlchemy ORM model for Note entity.

This module contains the NoteORM class that defines the database schema
for notes and handles note data persistence.

Classes:
    NoteORM: SQLAlchemy model for notes with rich-text content, owner and tags.

Architecture:
    This ORM model is part of the Infrastructure layer and should only be used by:
    - SqlAlchemyNoteRepository implementation
    - Database migration scripts
    - Other infrastructure-specific code

    Domain code should use the Note entity instead of this ORM model.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from infrastructure.models.base import Base


class NoteORM(Base):
    """SQLAlchemy ORM model for notes.

    Attributes:
        id (UUID): Primary key, auto-generated UUID.
        title (str): Note title, max 255 characters.
        content (str): Rich-text content serialized as markup.
        owner_id (str): Identity of the user who owns the note.
        created_at (datetime): Timestamp when note was created.
        updated_at (datetime): Timestamp when note was last updated.
        is_archived (bool): Archived flag, defaults to False.
        tags (List[TagORM]): Many-to-many relationship with tags.
        attachments (List[AttachmentORM]): Files uploaded for this note.

    Table Schema:
        - Table name: 'notes'
        - Primary key: id (UUID)
        - Indexes: id (primary key index), owner_id

    Example:
        >>> note_orm = NoteORM(title="Work Note", content="<p>Task</p>", owner_id="user-uuid")
        >>> db.add(note_orm)
        >>> db.commit()
    """

    __tablename__ = "notes"

    # Primary key with auto-generated UUID
    id = Column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True,
        comment="Primary key, auto-generated UUID",
    )

    title = Column(
        String(255), nullable=False, comment="Note title, max 255 characters"
    )

    content = Column(
        Text, nullable=False, default="", comment="Rich-text content as markup"
    )

    # Owner identification (authentication provider user ID)
    owner_id = Column(
        String(255),
        nullable=False,
        index=True,
        comment="Identity of the user who owns the note",
    )

    # Timestamps
    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        comment="Timestamp when note was created",
    )

    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
        comment="Timestamp when note was last updated",
    )

    is_archived = Column(
        Boolean,
        default=False,
        nullable=False,
        comment="Archived flag, defaults to False",
    )

    # Many-to-many relationship with tags
    tags = relationship(
        "TagORM", secondary="note_tags", back_populates="notes", lazy="select"
    )

    attachments = relationship("AttachmentORM", back_populates="note", lazy="select")

    def __repr__(self) -> str:
        return (
            f"<NoteORM(id={self.id}, title='{self.title}', owner_id='{self.owner_id}')>"
        )

    def __str__(self) -> str:
        return self.title
