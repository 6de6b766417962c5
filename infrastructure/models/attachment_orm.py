"""SQLAlchemy ORM model for Attachment entity.

This module contains the AttachmentORM class that defines the database schema
for the metadata rows describing uploaded files.
"""

import uuid
from datetime import datetime

from domain.entities.file_type import FileType
from domain.services.file_validator import MAX_FILE_NAME_LENGTH
from infrastructure.models.base import Base
from sqlalchemy import JSON, BigInteger, Column, DateTime, Enum, ForeignKey, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import relationship


class AttachmentORM(Base):
    """SQLAlchemy ORM model for uploaded file metadata.

    Attributes:
        id (UUID): Primary key, auto-generated UUID.
        file_name (str): Original file name declared by the uploader.
        file_path (str): Storage key ``{owner}/{uuid}.{ext}``, unique.
        file_size (int): Size in bytes.
        file_type (FileType): Closed enum of supported kinds.
        owner_id (str): Identity of the uploader.
        metadata_ (dict): Audit blob stored in the ``metadata`` column.
        note_id (UUID): Optional back-reference to a note.
        created_at (datetime): Timestamp when the row was inserted.

    Table Schema:
        - Table name: 'attachments'
        - Primary key: id (UUID)
        - Foreign key: note_id -> notes.id
        - Unique constraint: file_path
    """

    __tablename__ = "attachments"

    id = Column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True,
        comment="Primary key, auto-generated UUID",
    )

    file_name = Column(
        String(MAX_FILE_NAME_LENGTH), nullable=False, comment="Original file name"
    )

    file_path = Column(
        String(1024), nullable=False, unique=True, comment="Storage key of the object"
    )

    file_size = Column(BigInteger, nullable=False, comment="Size in bytes")

    file_type = Column(
        Enum(FileType, name="file_type"), nullable=False, comment="Kind of the file"
    )

    owner_id = Column(
        String(255), nullable=False, index=True, comment="Identity of the uploader"
    )

    # "metadata" is reserved on declarative classes
    metadata_ = Column(
        "metadata",
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=True,
        comment="Original name, uploader and upload time",
    )

    note_id = Column(
        UUID(as_uuid=True),
        ForeignKey("notes.id", ondelete="SET NULL"),
        nullable=True,
        comment="Optional back-reference to a note",
    )

    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        comment="Timestamp when the row was inserted",
    )

    note = relationship("NoteORM", back_populates="attachments", lazy="select")

    def __repr__(self) -> str:
        return f"<AttachmentORM(id={self.id}, file_path='{self.file_path}')>"

    def __str__(self) -> str:
        return self.file_name
