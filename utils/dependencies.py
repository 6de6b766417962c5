"""Database, configuration and service dependencies for the Notes Service.

This module provides dependency injection functions for FastAPI,
including settings, database session management and service factories.

Functions:
    - get_settings: Process configuration read once from the environment
    - get_db: Database session factory with automatic cleanup
    - get_note_service / get_tag_service / get_upload_service: Domain services
    - get_identity_client: Authentication provider client

Architecture:
    These utilities are shared across all layers and provide clean dependency
    injection for database access and external services. Tests replace them
    through ``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Generator

from domain.services.note_service import NoteService
from domain.services.tag_service import TagService
from domain.services.upload_service import UploadService
from fastapi import Depends
from infrastructure.auth.identity_client import IdentityClient
from infrastructure.database import build_engine, build_session_factory
from infrastructure.repositories.sqlalchemy_attachment_repository import (
    SqlAlchemyAttachmentRepository,
)
from infrastructure.repositories.sqlalchemy_note_repository import (
    SQLAlchemyNoteRepository,
)
from infrastructure.repositories.sqlalchemy_tag_repository import (
    SqlAlchemyTagRepository,
)
from infrastructure.storage.supabase_storage import SupabaseStorage
from sqlalchemy.orm import Session, sessionmaker

from .config import Settings


@lru_cache()
def get_settings() -> Settings:
    """Read the configuration once per process."""
    return Settings.from_env()


@lru_cache()
def get_session_factory() -> sessionmaker:
    """Create the engine and session factory on first use."""
    settings = get_settings()
    return build_session_factory(build_engine(settings.database_url))


def get_db() -> Generator[Session, None, None]:
    """Get database session with automatic cleanup.

    Yields:
        Session: SQLAlchemy database session that automatically closes after use.
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def get_tag_service() -> TagService:
    """Create the tag service with its repository dependency.

    The session is injected per-request in each endpoint method.
    """
    return TagService(SqlAlchemyTagRepository())


def get_note_service() -> NoteService:
    """Create the note service with its repository dependencies."""
    return NoteService(SQLAlchemyNoteRepository(), SqlAlchemyTagRepository())


def get_upload_service(settings: Settings = Depends(get_settings)) -> UploadService:
    """Create the upload gateway with storage and metadata repositories."""
    return UploadService(
        storage=SupabaseStorage(settings),
        attachment_repository=SqlAlchemyAttachmentRepository(),
        note_repository=SQLAlchemyNoteRepository(),
        settings=settings,
    )


def get_identity_client(settings: Settings = Depends(get_settings)) -> IdentityClient:
    return IdentityClient(settings)
