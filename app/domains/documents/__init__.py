from app.domains.documents.entities import Document, DEFAULT_TITLE
from app.domains.documents.schemas import (
    DocumentUpdate, DocumentResponse, DocumentListResponse, DocumentAccessResponse,
    DocumentShareRequest, InboxNotificationResponse
)
from app.domains.documents.services import DocumentService

__all__ = [
    "Document", "DEFAULT_TITLE",
    "DocumentUpdate", "DocumentResponse", "DocumentListResponse", "DocumentAccessResponse",
    "DocumentShareRequest", "InboxNotificationResponse",
    "DocumentService"
]
