from sqlalchemy import Column, String, Text, Boolean

from collabdocs.db.base import BaseModel


class DocumentTemplate(BaseModel):
    __tablename__ = "document_templates"

    name = Column(String(255), nullable=False)
    description = Column(Text, default="")
    content = Column(Text, nullable=False, default="")
    category = Column(String(100), index=True, nullable=False)
    created_by = Column(String(100), index=True, nullable=False)
    is_public = Column(Boolean, nullable=False, default=True)
