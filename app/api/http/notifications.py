from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.auth import get_current_user
from app.core.db import get_db
from app.db.repositories.notification_repository import InboxNotificationRepository
from app.domains.access.entities import Actor
from app.domains.documents.schemas import InboxNotificationResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=List[InboxNotificationResponse])
async def get_inbox(
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Входящие уведомления текущего пользователя"""
    repository = InboxNotificationRepository(db)
    
    offset = (page - 1) * per_page
    notifications = await repository.get_by_recipient(user.email, limit=per_page, offset=offset)
    
    return [
        InboxNotificationResponse(
            id=notification.uuid,
            kind=notification.kind,
            document_id=notification.document_id,
            activity_data=notification.activity_data,
            read_at=notification.read_at,
            created_at=notification.created_at
        )
        for notification in notifications
    ]


@router.post("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_notification_read(
    notification_id: str,
    user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Отметка уведомления как прочитанного"""
    repository = InboxNotificationRepository(db)
    
    if not await repository.mark_read(notification_id, user.email):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found"
        )
