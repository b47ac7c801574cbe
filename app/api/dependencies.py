from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.db import get_db
from app.domains.access.ports import NotificationTransport
from app.domains.access.transports import InboxNotificationTransport, WebhookNotificationTransport
from app.domains.documents.services import DocumentService


def get_notification_transport(db: AsyncSession = Depends(get_db)) -> NotificationTransport:
    if settings.notification_webhook_url:
        return WebhookNotificationTransport(
            settings.notification_webhook_url,
            timeout=settings.notification_timeout
        )
    return InboxNotificationTransport(db)


def get_document_service(
    db: AsyncSession = Depends(get_db),
    transport: NotificationTransport = Depends(get_notification_transport)
) -> DocumentService:
    return DocumentService.from_session(db, transport)
