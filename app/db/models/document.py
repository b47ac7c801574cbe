from sqlalchemy import Column, String, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import BaseModel


class Document(BaseModel):
    __tablename__ = "documents"
    
    title = Column(String(255), nullable=False, default="Untitled")
    creator_id = Column(String(255), nullable=False)
    creator_email = Column(String(255), nullable=False, index=True)
    
    # Relationships
    accesses = relationship(
        "DocumentAccess",
        back_populates="document",
        cascade="all, delete-orphan",
        lazy="selectin"
    )


class DocumentAccess(BaseModel):
    __tablename__ = "document_accesses"
    __table_args__ = (
        UniqueConstraint("document_id", "user_key", name="uq_document_accesses_document_user"),
    )
    
    document_id = Column(String(64), ForeignKey("documents.uuid", ondelete="CASCADE"), nullable=False)
    user_key = Column(String(255), nullable=False, index=True)
    scopes = Column(JSON, nullable=False, default=list)
    
    # Relationships
    document = relationship("Document", back_populates="accesses")
