from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import List
import uuid
from datetime import datetime

from collabdocs.domains.sharing.entities import Permission


class ShareCreate(BaseModel):
    """Запрос на предоставление доступа к документу"""
    shared_with_user: str = Field(..., min_length=1, max_length=100)
    permission: Permission = Permission.READ

    @field_validator('shared_with_user')
    @classmethod
    def validate_username(cls, v):
        if not v.strip():
            raise ValueError('Username cannot be empty')
        return v.strip()


class ShareUpdate(BaseModel):
    """Изменение уровня доступа"""
    permission: Permission


class ShareResponse(BaseModel):
    """Право доступа к документу"""
    uuid: uuid.UUID
    document_id: uuid.UUID
    shared_with_user: str
    permission: Permission
    shared_by_user: str
    shared_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ShareListResponse(BaseModel):
    document_id: uuid.UUID
    shares: List[ShareResponse]
