from typing import Optional, List, Dict, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from app.db.base import utcnow
from app.db.models.document import Document as DocumentModel, DocumentAccess as DocumentAccessModel
from app.domains.access.errors import DocumentStoreError

if TYPE_CHECKING:
    from app.domains.documents.entities import Document


class DocumentRepository:
    """Хранилище документов вместе с их картой доступа.

    Документ и его записи доступа читаются и изменяются как единое целое;
    наружу отдаются только независимые доменные снимки.
    """
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def create(self, document: "Document") -> "Document":
        """Создание нового документа"""
        db_document = DocumentModel(
            uuid=document.id,
            title=document.title,
            creator_id=document.creator_id,
            creator_email=document.creator_email,
            created_at=document.created_at,
            updated_at=document.updated_at,
            accesses=[
                DocumentAccessModel(
                    user_key=user_key,
                    scopes=list(scopes),
                    created_at=document.created_at,
                    updated_at=document.created_at
                )
                for user_key, scopes in document.users_accesses.items()
            ]
        )
        
        self.session.add(db_document)
        await self._commit("creating a document")
        return self._to_domain(db_document)
    
    async def get(self, document_id: str) -> Optional["Document"]:
        """Получение документа по идентификатору"""
        db_document = await self._get_model(document_id)
        return self._to_domain(db_document) if db_document else None
    
    async def update(
        self,
        document_id: str,
        title: Optional[str] = None,
        users_accesses: Optional[Dict[str, Optional[List[str]]]] = None
    ) -> Optional["Document"]:
        """Обновление метаданных и карты доступа одной транзакцией.

        users_accesses - патч {пользователь: скоупы}, None удаляет запись.
        Строка документа блокируется на время изменения.
        """
        db_document = await self._get_model(document_id, for_update=True)
        if db_document is None:
            return None
        
        now = utcnow()
        if title is not None:
            db_document.title = title
        
        if users_accesses:
            current = {access.user_key: access for access in db_document.accesses}
            for user_key, scopes in users_accesses.items():
                access = current.get(user_key)
                if scopes is None:
                    if access is not None:
                        db_document.accesses.remove(access)
                elif access is None:
                    db_document.accesses.append(
                        DocumentAccessModel(user_key=user_key, scopes=list(scopes), created_at=now, updated_at=now)
                    )
                else:
                    access.scopes = list(scopes)
                    access.updated_at = now
        
        db_document.updated_at = now
        await self._commit("updating a document")
        return self._to_domain(db_document)
    
    async def delete(self, document_id: str) -> bool:
        """Удаление документа и всех записей доступа"""
        db_document = await self._get_model(document_id, for_update=True)
        if db_document is None:
            return False
        
        await self.session.delete(db_document)
        await self._commit("deleting a document")
        return True
    
    async def list_for_accessor(self, user_key: str) -> List["Document"]:
        """Документы, в карте доступа которых есть пользователь"""
        try:
            result = await self.session.execute(
                select(DocumentModel)
                .join(DocumentModel.accesses)
                .where(DocumentAccessModel.user_key == user_key)
                .order_by(DocumentModel.updated_at.desc())
            )
        except SQLAlchemyError as e:
            raise DocumentStoreError(f"Error happened while listing documents: {e}") from e
        db_documents = result.scalars().unique().all()
        return [self._to_domain(doc) for doc in db_documents]
    
    async def _get_model(self, document_id: str, for_update: bool = False) -> Optional[DocumentModel]:
        query = select(DocumentModel).where(DocumentModel.uuid == document_id)
        if for_update:
            query = query.with_for_update()
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            raise DocumentStoreError(f"Error happened while getting a document: {e}") from e
        return result.scalar_one_or_none()
    
    async def _commit(self, action: str) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DocumentStoreError(f"Error happened while {action}: {e}") from e
    
    def _to_domain(self, db_document: DocumentModel) -> "Document":
        """Преобразование модели БД в доменную сущность"""
        from app.domains.documents.entities import Document
        
        return Document(
            id=db_document.uuid,
            title=db_document.title,
            creator_id=db_document.creator_id,
            creator_email=db_document.creator_email,
            users_accesses={access.user_key: list(access.scopes or []) for access in db_document.accesses},
            created_at=db_document.created_at,
            updated_at=db_document.updated_at
        )
