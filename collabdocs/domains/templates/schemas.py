from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional, List
import uuid
from datetime import datetime


class TemplateBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=10000)
    content: str = Field(default="", max_length=1000000)
    category: str = Field(..., min_length=1, max_length=100)

    @field_validator('name', 'category')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Value cannot be empty')
        return v.strip()


class TemplateCreate(TemplateBase):
    is_public: bool = True


class TemplateUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=10000)
    content: Optional[str] = Field(None, max_length=1000000)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    is_public: Optional[bool] = None


class TemplateResponse(TemplateBase):
    uuid: uuid.UUID
    created_by: str
    is_public: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TemplateListResponse(BaseModel):
    templates: List[TemplateResponse]


class DocumentFromTemplateRequest(BaseModel):
    """Создание документа из шаблона"""
    title: str = Field(..., min_length=1, max_length=255)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip()
