from app.db.models.document import Document, DocumentAccess
from app.db.models.notification import InboxNotification

__all__ = [
    "Document",
    "DocumentAccess",
    "InboxNotification"
]
