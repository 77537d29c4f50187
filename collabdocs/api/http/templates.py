from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from collabdocs.api.http.documents import to_document_response
from collabdocs.core.auth import get_current_username
from collabdocs.core.db import get_db
from collabdocs.domains.documents.schemas import DocumentResponse
from collabdocs.domains.documents.services import DocumentService
from collabdocs.domains.templates.schemas import (
    TemplateCreate, TemplateUpdate, TemplateResponse, TemplateListResponse,
    DocumentFromTemplateRequest
)
from collabdocs.domains.templates.services import TemplateService

router = APIRouter(prefix="/templates", tags=["templates"])


@router.post("/", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(
    template_data: TemplateCreate,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    template = await TemplateService(db).create_template(template_data, username)
    return TemplateResponse.model_validate(template)


@router.get("/", response_model=TemplateListResponse)
async def list_templates(
    category: Optional[str] = Query(None, min_length=1, max_length=100),
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Доступные шаблоны, при необходимости одной категории"""
    templates = await TemplateService(db).list_templates(username, category)
    return TemplateListResponse(templates=[TemplateResponse.model_validate(t) for t in templates])


@router.get("/category/{category}", response_model=TemplateListResponse)
async def list_templates_by_category(
    category: str,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    templates = await TemplateService(db).list_by_category(category, username)
    return TemplateListResponse(templates=[TemplateResponse.model_validate(t) for t in templates])


@router.get("/{template_uuid}", response_model=TemplateResponse)
async def get_template(
    template_uuid: uuid.UUID,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    template = await TemplateService(db).get_template(template_uuid, username)
    return TemplateResponse.model_validate(template)


@router.put("/{template_uuid}", response_model=TemplateResponse)
async def update_template(
    template_uuid: uuid.UUID,
    update_data: TemplateUpdate,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    template = await TemplateService(db).update_template(template_uuid, update_data, username)
    return TemplateResponse.model_validate(template)


@router.delete("/{template_uuid}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_uuid: uuid.UUID,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    await TemplateService(db).delete_template(template_uuid, username)


@router.post("/{template_uuid}/documents", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document_from_template(
    template_uuid: uuid.UUID,
    request: DocumentFromTemplateRequest,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Создание документа из шаблона"""
    document = await DocumentService(db).create_document_from_template(template_uuid, request.title, username)
    return to_document_response(document)
