"""Engine, session factory and schema bootstrap for the relational store.

Importing this module registers every ORM model on the shared declarative
base so relationships declared by name can be resolved.
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from infrastructure.models.associations import note_tags  # noqa: F401
from infrastructure.models.attachment_orm import AttachmentORM  # noqa: F401
from infrastructure.models.base import Base
from infrastructure.models.note_orm import NoteORM  # noqa: F401
from infrastructure.models.tag_orm import TagORM  # noqa: F401

logger = logging.getLogger(__name__)


def build_engine(database_url: str, **kwargs) -> Engine:
    """Create the SQLAlchemy engine for ``database_url``."""
    return create_engine(database_url, pool_pre_ping=True, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create missing tables (notes, tags, note_tags, attachments)."""
    logger.info("Ensuring database schema")
    Base.metadata.create_all(bind=engine)
