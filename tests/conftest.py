import time
from typing import Dict, List, Optional
from uuid import UUID, uuid4

import jwt
import pytest
from domain.entities.attachment import Attachment
from domain.repositories.attachment_repository import AttachmentRepository
from domain.repositories.storage_repository import ObjectStorage
from domain.services.upload_service import StorageWriteError
from infrastructure.database import init_db
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from utils.config import Settings

JWT_SECRET = "ideabase-test-secret-0123456789abcdef"
PDF_HEADER = b"%PDF-1.7\n"
MIB = 1024 * 1024


def make_token(user_id: str, secret: str = JWT_SECRET, **claims) -> str:
    payload = {"sub": user_id, "exp": int(time.time()) + 3600, "role": "authenticated"}
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


def pdf_bytes(size: int) -> bytes:
    return PDF_HEADER + b"\x00" * (size - len(PDF_HEADER))


class InMemoryStorage(ObjectStorage):
    """Object store double recording every write."""

    def __init__(self, fail_with: Optional[Exception] = None):
        self.objects: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}
        self.fail_with = fail_with

    async def upload(self, path, content, content_type, upsert=False):
        if self.fail_with is not None:
            raise self.fail_with
        if path in self.objects and not upsert:
            raise StorageWriteError("Failed to upload file to storage", "The resource already exists")
        self.objects[path] = content
        self.content_types[path] = content_type
        return path

    async def create_signed_url(self, path, expires_in):
        if path not in self.objects:
            raise StorageWriteError("Failed to create download URL", "Object not found")
        return f"http://storage.test/signed/{path}?expires={expires_in}"


class InMemoryAttachmentRepository(AttachmentRepository):
    def __init__(self, fail_with: Optional[Exception] = None):
        self.rows: List[Attachment] = []
        self.fail_with = fail_with

    async def create_attachment(self, db_session, attachment):
        if self.fail_with is not None:
            raise self.fail_with
        attachment.id = uuid4()
        self.rows.append(attachment)
        return attachment

    async def get_attachment(self, db_session, attachment_id: UUID, owner_id: str):
        for row in self.rows:
            if row.id == attachment_id and row.owner_id == owner_id:
                return row
        return None

    async def list_attachments(self, db_session, owner_id, note_id=None):
        return [
            row
            for row in self.rows
            if row.owner_id == owner_id and (note_id is None or row.note_id == note_id)
        ]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        supabase_url="http://backend.test",
        service_role_key="service-role-key",
        anon_key="anon-key",
        jwt_secret=JWT_SECRET,
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def attachment_repository() -> InMemoryAttachmentRepository:
    return InMemoryAttachmentRepository()
