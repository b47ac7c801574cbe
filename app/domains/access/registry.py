from typing import Set, TYPE_CHECKING

from app.domains.access.entities import AccessEntry, CapabilitySet, normalize_user_key
from app.domains.access.errors import DocumentNotFound, ProtectedEntry
from app.domains.access.ports import DocumentStore

if TYPE_CHECKING:
    from app.domains.documents.entities import Document


class AccessRegistry:
    """Реестр доступа: документ -> {пользователь -> набор возможностей}

    Единственный владелец записей доступа. Запись создателя документа
    защищена здесь же, независимо от проверок движка политик.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    async def grant(self, document_id: str, user_key: str, capabilities: CapabilitySet) -> AccessEntry:
        """Идемпотентная выдача (перезапись) доступа"""
        user_key = normalize_user_key(user_key)
        if capabilities is CapabilitySet.NONE:
            return await self.revoke(document_id, user_key)

        document = await self._load(document_id)
        if user_key == document.creator_email and not capabilities.can_write:
            raise ProtectedEntry(document_id, user_key)

        updated = await self.store.update(
            document_id,
            users_accesses={user_key: capabilities.scopes},
        )
        if updated is None:
            raise DocumentNotFound(document_id)
        return AccessEntry(document_id, user_key, updated.capabilities_of(user_key))

    async def revoke(self, document_id: str, user_key: str) -> AccessEntry:
        """Отзыв доступа; отзыв отсутствующей записи - успешный no-op"""
        user_key = normalize_user_key(user_key)
        document = await self._load(document_id)
        if user_key == document.creator_email:
            raise ProtectedEntry(document_id, user_key)

        if user_key in document.users_accesses:
            updated = await self.store.update(document_id, users_accesses={user_key: None})
            if updated is None:
                raise DocumentNotFound(document_id)

        return AccessEntry(document_id, user_key, CapabilitySet.NONE)

    async def get(self, document_id: str, user_key: str) -> CapabilitySet:
        document = await self._load(document_id)
        return document.capabilities_of(normalize_user_key(user_key))

    async def list_accessors(self, document_id: str) -> Set[str]:
        document = await self._load(document_id)
        return set(document.users_accesses)

    async def query(self, user_key: str) -> Set[str]:
        """Документы, к которым у пользователя есть хоть какой-то доступ"""
        user_key = normalize_user_key(user_key)
        documents = await self.store.list_for_accessor(user_key)
        return {
            document.id
            for document in documents
            if document.capabilities_of(user_key) is not CapabilitySet.NONE
        }

    async def _load(self, document_id: str) -> "Document":
        document = await self.store.get(document_id)
        if document is None:
            raise DocumentNotFound(document_id)
        return document
