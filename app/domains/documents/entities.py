from datetime import datetime, timezone
from typing import Optional, Dict, List

from app.domains.access.entities import AccessEntry, CapabilitySet

DEFAULT_TITLE = "Untitled"


class Document:
    """Сущность документа (комнаты совместного редактирования)"""
    
    def __init__(
        self,
        id: str,
        creator_id: str,
        creator_email: str,
        title: str = DEFAULT_TITLE,
        users_accesses: Optional[Dict[str, List[str]]] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.title = title
        self.creator_id = creator_id
        self.creator_email = creator_email
        self.users_accesses = users_accesses or {}
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or self.created_at
    
    def capabilities_of(self, user_key: str) -> CapabilitySet:
        """Набор возможностей пользователя в документе"""
        return CapabilitySet.from_scopes(self.users_accesses.get(user_key))
    
    def has_access(self, user_key: str) -> bool:
        return user_key in self.users_accesses
    
    def can_edit(self, user_key: str) -> bool:
        return self.capabilities_of(user_key).can_write
    
    def is_creator(self, user_key: str) -> bool:
        return user_key == self.creator_email or user_key == self.creator_id
    
    def access_entries(self) -> List[AccessEntry]:
        return [
            AccessEntry(self.id, user_key, CapabilitySet.from_scopes(scopes))
            for user_key, scopes in sorted(self.users_accesses.items())
        ]
    
    def clone(self) -> "Document":
        """Независимая копия документа вместе с картой доступа"""
        return Document(
            id=self.id,
            creator_id=self.creator_id,
            creator_email=self.creator_email,
            title=self.title,
            users_accesses={key: list(scopes) for key, scopes in self.users_accesses.items()},
            created_at=self.created_at,
            updated_at=self.updated_at
        )
    
    @classmethod
    def create_document(cls, document_id: str, creator_id: str, creator_email: str) -> "Document":
        """Новый документ: создатель - единственный соавтор с правом записи"""
        return cls(
            id=document_id,
            creator_id=creator_id,
            creator_email=creator_email,
            title=DEFAULT_TITLE,
            users_accesses={creator_email: CapabilitySet.READ_WRITE.scopes}
        )
    
    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.id == other.id
    
    def __hash__(self) -> int:
        return hash(self.id)
    
    def __repr__(self) -> str:
        return f"Document(id={self.id}, title={self.title}, creator={self.creator_email})"
