import logging
from typing import Optional, List, Union

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.document_repository import DocumentRepository
from app.domains.access.entities import (
    AccessChangeRequest, AccessEntry, AccessLevel, Actor, CapabilitySet, normalize_user_key
)
from app.domains.access.errors import AccessDenied, DocumentNotFound
from app.domains.access.notifier import ChangeNotifier
from app.domains.access.ports import DocumentStore, IdGenerator, NotificationTransport, new_id
from app.domains.access.registry import AccessRegistry
from app.domains.access.services import AccessPolicyEngine
from app.domains.documents.entities import Document

logger = logging.getLogger(__name__)


class DocumentService:
    """Сервис для работы с документами и их соавторами"""
    
    def __init__(
        self,
        store: DocumentStore,
        transport: NotificationTransport,
        id_generator: IdGenerator = new_id
    ):
        self.store = store
        self.id_generator = id_generator
        self.registry = AccessRegistry(store)
        self.policy_engine = AccessPolicyEngine(
            store,
            self.registry,
            ChangeNotifier(transport),
            id_generator=id_generator
        )
    
    @classmethod
    def from_session(cls, session: AsyncSession, transport: NotificationTransport) -> "DocumentService":
        return cls(DocumentRepository(session), transport)
    
    async def create_document(self, owner_id: str, owner_email: str) -> Document:
        """Создание нового документа"""
        document = Document.create_document(
            document_id=self.id_generator(),
            creator_id=owner_id,
            creator_email=normalize_user_key(owner_email)
        )
        created_document = await self.store.create(document)
        logger.info(f"Document {created_document.id} created by {owner_email}")
        return created_document
    
    async def get_document(self, document_id: str, requesting_user: str) -> Document:
        """Получение документа; требуется любая запись доступа"""
        document = await self._load(document_id)
        if not document.has_access(normalize_user_key(requesting_user)):
            raise AccessDenied()
        return document
    
    async def update_document(
        self,
        document_id: str,
        new_title: str,
        requested_by: Optional[str] = None
    ) -> Document:
        """Переименование документа"""
        if requested_by is not None:
            document = await self._load(document_id)
            if not document.can_edit(normalize_user_key(requested_by)):
                raise AccessDenied("You don't have permission to edit this document")
        
        updated = await self.store.update(document_id, title=new_title)
        if updated is None:
            raise DocumentNotFound(document_id)
        return updated
    
    async def list_documents_for_user(self, user_email: str) -> List[Document]:
        """Документы, доступные пользователю"""
        return await self.store.list_for_accessor(normalize_user_key(user_email))
    
    async def delete_document(self, document_id: str, requested_by: Optional[str] = None) -> None:
        """Удаление документа вместе со всеми записями доступа"""
        if requested_by is not None:
            document = await self._load(document_id)
            # Только создатель может удалить документ
            if not document.is_creator(normalize_user_key(requested_by)):
                raise AccessDenied("Only the owner can delete this document")
        
        if not await self.store.delete(document_id):
            raise DocumentNotFound(document_id)
        logger.info(f"Document {document_id} deleted")
    
    async def share_document(
        self,
        document_id: str,
        target_email: str,
        level: Union[AccessLevel, str],
        initiator: Actor
    ) -> AccessEntry:
        """Предоставление доступа к документу с уведомлением получателя"""
        await self._ensure_can_manage(document_id, initiator)
        return await self.policy_engine.apply_change(
            AccessChangeRequest(
                document_id=document_id,
                target_user=target_email,
                requested_level=level,
                initiating_user=initiator
            )
        )
    
    async def remove_collaborator(
        self,
        document_id: str,
        target_email: str,
        initiator: Optional[Actor] = None
    ) -> AccessEntry:
        """Удаление соавтора; создателя удалить нельзя"""
        if initiator is not None:
            await self._ensure_can_manage(document_id, initiator)
        return await self.policy_engine.apply_change(
            AccessChangeRequest(
                document_id=document_id,
                target_user=target_email,
                requested_level=None,
                initiating_user=initiator
            )
        )
    
    async def list_collaborators(self, document_id: str, requesting_user: str) -> List[AccessEntry]:
        """Список соавторов документа"""
        document = await self.get_document(document_id, requesting_user)
        return document.access_entries()
    
    async def _ensure_can_manage(self, document_id: str, initiator: Actor) -> None:
        capabilities = await self.registry.get(document_id, initiator.email)
        if capabilities is not CapabilitySet.READ_WRITE:
            raise AccessDenied("You don't have permission to share this document")
    
    async def _load(self, document_id: str) -> Document:
        document = await self.store.get(document_id)
        if document is None:
            raise DocumentNotFound(document_id)
        return document
