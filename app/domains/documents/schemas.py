from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime

from app.domains.access.entities import AccessLevel, CapabilitySet


class DocumentUpdate(BaseModel):
    """Схема для обновления документа"""
    title: str = Field(..., min_length=1, max_length=255)
    
    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip()


class DocumentAccessResponse(BaseModel):
    """Схема записи доступа пользователя к документу"""
    document_id: str
    user_key: str
    capabilities: CapabilitySet
    scopes: List[str]


class DocumentResponse(BaseModel):
    """Схема для ответа с данными документа"""
    id: str
    title: str
    creator_id: str
    creator_email: str
    users_accesses: List[DocumentAccessResponse]
    created_at: datetime
    updated_at: datetime


class DocumentListResponse(BaseModel):
    """Схема для списка документов"""
    documents: List[DocumentResponse]
    total: int


class DocumentShareRequest(BaseModel):
    """Схема для запроса на предоставление доступа к документу"""
    email: EmailStr
    # Проверяется кодеком уровней доступа, а не схемой
    level: str = Field(default=AccessLevel.VIEWER.value, min_length=1, max_length=32)


class InboxNotificationResponse(BaseModel):
    """Схема уведомления во входящих"""
    id: str
    kind: str
    document_id: str
    activity_data: dict
    read_at: Optional[datetime] = None
    created_at: datetime
