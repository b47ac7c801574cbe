from app.db.repositories.document_repository import DocumentRepository
from app.db.repositories.notification_repository import InboxNotificationRepository

__all__ = [
    "DocumentRepository",
    "InboxNotificationRepository"
]
