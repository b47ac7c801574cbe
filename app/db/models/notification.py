from sqlalchemy import Column, String, DateTime, JSON

from app.db.base import BaseModel


class InboxNotification(BaseModel):
    __tablename__ = "inbox_notifications"
    
    recipient = Column(String(255), nullable=False, index=True)
    document_id = Column(String(64), nullable=False)
    kind = Column(String(64), nullable=False, default="$documentAccess")
    activity_data = Column(JSON, nullable=False, default=dict)
    read_at = Column(DateTime(timezone=True), nullable=True)
