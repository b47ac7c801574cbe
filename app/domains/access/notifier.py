import logging

from app.domains.access.entities import Notification
from app.domains.access.errors import TransportError
from app.domains.access.ports import NotificationTransport

logger = logging.getLogger(__name__)


class ChangeNotifier:
    """Уведомление пользователя об изменении доступа.

    Одна попытка доставки, без повторов. Ошибка доставки логируется и
    никак не влияет на уже примененное изменение доступа.
    """

    def __init__(self, transport: NotificationTransport):
        self.transport = transport

    async def notify(self, notification: Notification) -> bool:
        try:
            await self.transport.send(notification)
        except TransportError as e:
            logger.warning(
                f"Failed to deliver notification {notification.id} to {notification.recipient}: {e}"
            )
            return False
        except Exception:
            logger.exception(
                f"Unexpected error while delivering notification {notification.id} to {notification.recipient}"
            )
            return False

        logger.info(f"Notification {notification.id} delivered to {notification.recipient}")
        return True
