from datetime import datetime

from sqlalchemy import Column, String, Text, ForeignKey, DateTime, Enum, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship

from collabdocs.db.base import BaseModel
from collabdocs.domains.sharing.entities import Permission as SharePermission


class Document(BaseModel):
    __tablename__ = "documents"

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False, default="")
    owner = Column(String(100), index=True, nullable=False)

    # Relationships
    shares = relationship("DocumentShare", back_populates="document", cascade="all, delete-orphan", passive_deletes=True)


class DocumentShare(BaseModel):
    __tablename__ = "document_shares"
    __table_args__ = (
        UniqueConstraint("document_id", "shared_with_user", name="uq_document_shares_document_user"),
    )

    document_id = Column(Uuid, ForeignKey("documents.uuid", ondelete="CASCADE"), nullable=False, index=True)
    shared_with_user = Column(String(100), index=True, nullable=False)
    permission = Column(Enum(SharePermission, name="share_permission"), nullable=False)
    shared_by_user = Column(String(100), nullable=False)
    shared_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    document = relationship("Document", back_populates="shares")
