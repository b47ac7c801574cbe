import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.pop("NOTIFICATION_WEBHOOK_URL", None)

import itertools
from typing import Dict, List, Optional

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.db.models  # noqa: F401
from app.core.db import get_db
from app.core.security import create_access_token
from app.db.base import Base
from app.db.repositories.document_repository import DocumentRepository
from app.domains.access.entities import Actor, Notification
from app.domains.access.errors import TransportError
from app.domains.documents.entities import Document
from app.domains.documents.services import DocumentService
from app.main import app as fastapi_app

ALICE = Actor(user_id="user_alice", email="alice@x.com", name="Alice", avatar="https://img.example/alice.png")
BOB = Actor(user_id="user_bob", email="bob@y.com", name="Bob")


class InMemoryDocumentStore:
    def __init__(self):
        self.documents: Dict[str, Document] = {}
        self.update_calls = 0

    async def create(self, document: Document) -> Document:
        self.documents[document.id] = document.clone()
        return document.clone()

    async def get(self, document_id: str) -> Optional[Document]:
        document = self.documents.get(document_id)
        return document.clone() if document else None

    async def update(self, document_id, title=None, users_accesses=None) -> Optional[Document]:
        document = self.documents.get(document_id)
        if document is None:
            return None
        self.update_calls += 1
        if title is not None:
            document.title = title
        for user_key, scopes in (users_accesses or {}).items():
            if scopes is None:
                document.users_accesses.pop(user_key, None)
            else:
                document.users_accesses[user_key] = list(scopes)
        return document.clone()

    async def delete(self, document_id: str) -> bool:
        return self.documents.pop(document_id, None) is not None

    async def list_for_accessor(self, user_key: str) -> List[Document]:
        return [doc.clone() for doc in self.documents.values() if user_key in doc.users_accesses]


class RecordingTransport:
    def __init__(self):
        self.sent: List[Notification] = []

    async def send(self, notification: Notification) -> None:
        self.sent.append(notification)


class FailingTransport:
    def __init__(self, error: Exception = None):
        self.error = error or TransportError("transport is down")
        self.attempts = 0

    async def send(self, notification: Notification) -> None:
        self.attempts += 1
        raise self.error


def sequential_ids(prefix: str = "id"):
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def auth_headers(actor: Actor) -> dict:
    token = create_access_token(
        {"sub": actor.user_id, "email": actor.email, "name": actor.name, "avatar": actor.avatar}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def repository(session):
    return DocumentRepository(session)


@pytest.fixture
def document_service(repository, transport):
    return DocumentService(repository, transport, id_generator=sequential_ids("doc"))


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=fastapi_app), base_url="http://test"
    ) as client:
        yield client
    fastapi_app.dependency_overrides.clear()
