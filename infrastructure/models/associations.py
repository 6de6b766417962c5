"""Association tables for many-to-many relationships in SQLAlchemy ORM.

Tables:
    note_tags: Associates notes with tags (many-to-many relationship)
"""

from infrastructure.models.base import Base
from sqlalchemy import Column, ForeignKey, Table
from sqlalchemy.dialects.postgresql import UUID

note_tags = Table(
    "note_tags",
    Base.metadata,
    Column(
        "note_id",
        UUID(as_uuid=True),
        ForeignKey("notes.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        UUID(as_uuid=True),
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    comment="Association table for many-to-many relationship between notes and tags",
)
