from pydantic import BaseModel, Field, ConfigDict
from typing import List
import uuid
from datetime import datetime


class VersionCreate(BaseModel):
    """Схема для записи снимка в журнал"""
    document_id: uuid.UUID
    content: str = Field(..., max_length=1000000)


class VersionResponse(BaseModel):
    """Схема для ответа с данными версии документа"""
    uuid: uuid.UUID
    document_id: uuid.UUID
    content: str
    edited_by: str
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class VersionHistoryResponse(BaseModel):
    document_id: uuid.UUID
    versions: List[VersionResponse]
    total: int


class ContributionsResponse(BaseModel):
    username: str
    versions: List[VersionResponse]


class VersionDiffResponse(BaseModel):
    """Схема для ответа с разницей между версиями"""
    document_id: uuid.UUID
    from_version: uuid.UUID
    to_version: uuid.UUID
    diff: str
