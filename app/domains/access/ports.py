"""Внешние зависимости ядра управления доступом.

Реализации передаются явно (хранилище - репозиторий SQLAlchemy,
транспорт - inbox или webhook), глобального клиента нет.
"""
import uuid
from typing import Protocol, Optional, Dict, List, TYPE_CHECKING

if TYPE_CHECKING:
    from app.domains.access.entities import Notification
    from app.domains.documents.entities import Document


class DocumentStore(Protocol):
    async def create(self, document: "Document") -> "Document": ...

    async def get(self, document_id: str) -> Optional["Document"]: ...

    async def update(
        self,
        document_id: str,
        title: Optional[str] = None,
        users_accesses: Optional[Dict[str, Optional[List[str]]]] = None,
    ) -> Optional["Document"]: ...

    async def delete(self, document_id: str) -> bool: ...

    async def list_for_accessor(self, user_key: str) -> List["Document"]: ...


class IdGenerator(Protocol):
    def __call__(self) -> str: ...


class NotificationTransport(Protocol):
    async def send(self, notification: "Notification") -> None: ...


def new_id() -> str:
    return uuid.uuid4().hex
