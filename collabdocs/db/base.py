import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, Uuid

from collabdocs.core.db import Base


class BaseModel(Base):
    """Общие колонки: суррогатный id, внешний uuid и метки времени"""

    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)
    uuid = Column(Uuid, unique=True, index=True, nullable=False, default=uuid.uuid4)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
