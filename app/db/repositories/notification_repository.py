from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update

from app.db.base import utcnow
from app.db.models.notification import InboxNotification as InboxNotificationModel


class InboxNotificationRepository:
    """Репозиторий для входящих уведомлений"""
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def get_by_recipient(self, recipient: str, limit: int = 50, offset: int = 0) -> List[InboxNotificationModel]:
        """Уведомления получателя, новые первыми"""
        result = await self.session.execute(
            select(InboxNotificationModel)
            .where(InboxNotificationModel.recipient == recipient)
            .order_by(InboxNotificationModel.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())
    
    async def mark_read(self, notification_uuid: str, recipient: str) -> bool:
        """Отметка уведомления как прочитанного"""
        stmt = (
            update(InboxNotificationModel)
            .where(InboxNotificationModel.uuid == notification_uuid)
            .where(InboxNotificationModel.recipient == recipient)
            .values(read_at=utcnow(), updated_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0
