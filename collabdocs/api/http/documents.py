from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from collabdocs.core.auth import get_current_username
from collabdocs.core.db import get_db
from collabdocs.domains.documents.entities import Document
from collabdocs.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, DocumentResponse, DocumentListResponse,
    DocumentPermissionResponse
)
from collabdocs.domains.documents.services import DocumentService
from collabdocs.domains.sharing.schemas import ShareCreate, ShareUpdate, ShareResponse, ShareListResponse
from collabdocs.domains.sharing.services import AccessControlService, ShareService
from collabdocs.domains.versions.schemas import VersionResponse, VersionHistoryResponse

router = APIRouter(prefix="/documents", tags=["documents"])


def to_document_response(document: Document) -> DocumentResponse:
    return DocumentResponse(
        uuid=document.uuid,
        title=document.title,
        content=document.content,
        owner=document.owner,
        created_at=document.created_at,
        updated_at=document.updated_at,
        word_count=document.get_word_count(),
        content_length=document.get_content_length()
    )


@router.post("/", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreate,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Создание нового документа"""
    document = await DocumentService(db).create_document(document_data, username)
    return to_document_response(document)


@router.get("/", response_model=DocumentListResponse)
async def list_documents(
    scope: str = Query("all", pattern="^(all|owned|shared)$"),
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Документы пользователя: собственные, доступные по праву или все вместе"""
    document_service = DocumentService(db)

    if scope == "owned":
        documents = await document_service.list_owned(username)
    elif scope == "shared":
        documents = await document_service.list_shared(username)
    else:
        documents = await document_service.list_accessible(username)

    return DocumentListResponse(
        documents=[to_document_response(doc) for doc in documents],
        total=len(documents)
    )


@router.get("/{document_uuid}", response_model=DocumentResponse)
async def get_document(
    document_uuid: uuid.UUID,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Получение документа по UUID"""
    document = await DocumentService(db).get_document(document_uuid, username)
    return to_document_response(document)


@router.put("/{document_uuid}", response_model=DocumentResponse)
async def update_document(
    document_uuid: uuid.UUID,
    update_data: DocumentUpdate,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Обновление документа"""
    document = await DocumentService(db).update_document(document_uuid, update_data, username)
    return to_document_response(document)


@router.delete("/{document_uuid}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_uuid: uuid.UUID,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Удаление документа"""
    await DocumentService(db).delete_document(document_uuid, username)


@router.get("/{document_uuid}/permission", response_model=DocumentPermissionResponse)
async def get_permission(
    document_uuid: uuid.UUID,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Эффективный уровень доступа текущего пользователя"""
    access_control = AccessControlService(db)
    document = await access_control.get_document_or_404(document_uuid)
    access = await access_control.get_access(document, username)

    return DocumentPermissionResponse(
        document_id=document.uuid,
        username=username,
        permission=access.effective_permission(username),
        is_owner=access.is_owner(username)
    )


# Права доступа
@router.post("/{document_uuid}/shares", response_model=ShareResponse, status_code=status.HTTP_201_CREATED)
async def create_share(
    document_uuid: uuid.UUID,
    share_data: ShareCreate,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Предоставление доступа к документу"""
    share = await ShareService(db).create_share(
        document_uuid,
        share_data.shared_with_user,
        share_data.permission,
        username
    )
    return ShareResponse.model_validate(share)


@router.get("/{document_uuid}/shares", response_model=ShareListResponse)
async def list_shares(
    document_uuid: uuid.UUID,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Список выданных прав (только для владельца)"""
    shares = await ShareService(db).list_shares(document_uuid, username)
    return ShareListResponse(
        document_id=document_uuid,
        shares=[ShareResponse.model_validate(share) for share in shares]
    )


@router.put("/{document_uuid}/shares/{shared_with_user}", response_model=ShareResponse)
async def update_share(
    document_uuid: uuid.UUID,
    shared_with_user: str,
    share_data: ShareUpdate,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Изменение уровня доступа"""
    share = await ShareService(db).update_share(document_uuid, shared_with_user, share_data.permission, username)
    return ShareResponse.model_validate(share)


@router.delete("/{document_uuid}/shares/{shared_with_user}", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_share(
    document_uuid: uuid.UUID,
    shared_with_user: str,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Отзыв доступа"""
    await ShareService(db).revoke_share(document_uuid, shared_with_user, username)


# Версии документов
@router.get("/{document_uuid}/versions", response_model=VersionHistoryResponse)
async def get_document_versions(
    document_uuid: uuid.UUID,
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, le=100),
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """История версий документа, новые первыми"""
    document_service = DocumentService(db)

    offset = (page - 1) * per_page if per_page else 0
    versions = await document_service.version_history(document_uuid, username, per_page, offset)
    total = await document_service.versions.count(document_uuid)

    return VersionHistoryResponse(
        document_id=document_uuid,
        versions=[VersionResponse.model_validate(version) for version in versions],
        total=total
    )


@router.post("/{document_uuid}/versions/{version_uuid}/restore", response_model=DocumentResponse)
async def restore_document_version(
    document_uuid: uuid.UUID,
    version_uuid: uuid.UUID,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Восстановление документа из версии"""
    document = await DocumentService(db).restore_version(document_uuid, version_uuid, username)
    return to_document_response(document)
