from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from collabdocs.core.auth import get_current_username
from collabdocs.core.db import get_db
from collabdocs.core.exceptions import AuthorizationException
from collabdocs.domains.documents.services import DocumentService
from collabdocs.domains.versions.schemas import (
    VersionCreate, VersionResponse, ContributionsResponse, VersionDiffResponse
)
from collabdocs.domains.versions.services import VersionHistoryService

router = APIRouter(prefix="/versions", tags=["versions"])


@router.post("/", response_model=VersionResponse, status_code=status.HTTP_201_CREATED)
async def record_version(
    version_data: VersionCreate,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Запись снимка в журнал; автор - текущий пользователь"""
    version = await DocumentService(db).record_snapshot(version_data.document_id, version_data.content, username)
    return VersionResponse.model_validate(version)


@router.get("/contributions/{contributor}", response_model=ContributionsResponse)
async def get_contributions(
    contributor: str,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Версии, записанные пользователем (только свои)"""
    if contributor != username:
        raise AuthorizationException("Contributions are visible only to their author")

    versions = await VersionHistoryService(db).contributions_by_user(contributor)
    return ContributionsResponse(
        username=contributor,
        versions=[VersionResponse.model_validate(version) for version in versions]
    )


@router.get("/{version_uuid}", response_model=VersionResponse)
async def revert_to_version(
    version_uuid: uuid.UUID,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Снимок версии; документ не меняется (см. POST /documents/{id}/versions/{version}/restore)"""
    version = await DocumentService(db).get_version(version_uuid, username)
    return VersionResponse.model_validate(version)


@router.get("/{from_version_uuid}/diff/{to_version_uuid}", response_model=VersionDiffResponse)
async def compare_versions(
    from_version_uuid: uuid.UUID,
    to_version_uuid: uuid.UUID,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db)
):
    """Сравнение двух версий одного документа"""
    document_service = DocumentService(db)
    diff = await document_service.compare_versions(from_version_uuid, to_version_uuid, username)
    version = await document_service.versions.revert(from_version_uuid)

    return VersionDiffResponse(
        document_id=version.document_id,
        from_version=from_version_uuid,
        to_version=to_version_uuid,
        diff=diff
    )
