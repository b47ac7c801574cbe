import logging
from typing import Optional

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.notification import InboxNotification as InboxNotificationModel
from app.domains.access.entities import Notification
from app.domains.access.errors import TransportError

logger = logging.getLogger(__name__)


def notification_payload(notification: Notification) -> dict:
    return {
        "userId": notification.recipient,
        "kind": notification.kind,
        "subjectId": notification.id,
        "roomId": notification.document_id,
        "activityData": notification.activity_data(),
    }


class InboxNotificationTransport:
    """Сохранение уведомления во входящие получателя"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def send(self, notification: Notification) -> None:
        db_notification = InboxNotificationModel(
            uuid=notification.id,
            recipient=notification.recipient,
            document_id=notification.document_id,
            kind=notification.kind,
            activity_data=notification.activity_data(),
            created_at=notification.created_at,
            updated_at=notification.created_at,
        )

        self.session.add(db_notification)
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise TransportError(f"Could not store inbox notification: {e}") from e


class WebhookNotificationTransport:
    """Отправка уведомления POST-запросом на внешний адрес"""

    def __init__(self, url: str, timeout: float = 5.0, client: Optional[httpx.AsyncClient] = None):
        self.url = url
        self.timeout = timeout
        self.client = client

    async def send(self, notification: Notification) -> None:
        payload = notification_payload(notification)
        try:
            if self.client is not None:
                response = await self.client.post(self.url, json=payload, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.url, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise TransportError(f"Webhook {self.url} failed: {e}") from e

        logger.debug(f"Webhook accepted notification {notification.id} with status {response.status_code}")
