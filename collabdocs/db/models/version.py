from datetime import datetime

from sqlalchemy import Column, String, Text, DateTime, Uuid

from collabdocs.db.base import BaseModel


class DocumentVersion(BaseModel):
    __tablename__ = "document_versions"

    # без внешнего ключа: история переживает удаление документа
    document_id = Column(Uuid, index=True, nullable=False)
    content = Column(Text, nullable=False)
    edited_by = Column(String(100), index=True, nullable=False)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
