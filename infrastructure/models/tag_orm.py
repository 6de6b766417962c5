"""SQLAlchemy ORM model for Tag entity.

This module contains the TagORM class that defines the database schema
for tags and handles tag data persistence.

Architecture:
    This ORM model is part of the Infrastructure layer and should only be used by
    SqlAlchemyTagRepository and other infrastructure-specific code.
    Domain code should use TagEntity instead of this ORM model.
"""

import uuid

from infrastructure.models.base import Base
from sqlalchemy import Column, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship


class TagORM(Base):
    """SQLAlchemy ORM model for tags that categorize notes.

    Attributes:
        id (UUID): Primary key, auto-generated UUID.
        name (str): Tag name, max 50 characters, unique per owner.
        color (str): Optional display color as ``#RRGGBB``.
        owner_id (str): Identity of the user the tag belongs to.
        notes (List[NoteORM]): Many-to-many relationship with notes.

    Table Schema:
        - Table name: 'tags'
        - Primary key: id (UUID)
        - Unique constraint: (owner_id, name)

    Example:
        >>> tag_orm = TagORM(name="work", owner_id="user-uuid", color="#FFAA00")
        >>> db.add(tag_orm)
        >>> db.commit()
    """

    __tablename__ = "tags"
    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_tags_owner_name"),
    )

    # Primary key with auto-generated UUID
    id = Column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True,
        comment="Primary key, auto-generated UUID",
    )

    name = Column(
        String(50),
        nullable=False,
        comment="Tag name, unique per owner",
    )

    color = Column(String(7), nullable=True, comment="Display color as #RRGGBB")

    owner_id = Column(
        String(255),
        nullable=False,
        index=True,
        comment="Identity of the user the tag belongs to",
    )

    # Many-to-many relationship with notes
    notes = relationship(
        "NoteORM", secondary="note_tags", back_populates="tags", lazy="select"
    )

    def __repr__(self) -> str:
        return f"<TagORM(id={self.id}, name='{self.name}', owner_id='{self.owner_id}')>"

    def __str__(self) -> str:
        return self.name
