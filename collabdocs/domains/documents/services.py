import logging
from typing import Optional, List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from collabdocs.core.exceptions import AuthorizationException, NotFoundException
from collabdocs.db.repositories.document_repository import DocumentRepository
from collabdocs.db.repositories.share_repository import DocumentShareRepository
from collabdocs.db.repositories.template_repository import DocumentTemplateRepository
from collabdocs.domains.documents.entities import Document
from collabdocs.domains.documents.schemas import DocumentCreate, DocumentUpdate
from collabdocs.domains.sharing.entities import Permission
from collabdocs.domains.sharing.services import AccessControlService
from collabdocs.domains.versions.entities import DocumentVersion
from collabdocs.domains.versions.services import VersionHistoryService

logger = logging.getLogger(__name__)


class DocumentService:
    """Сервис для работы с документами.

    Каждое изменение содержимого записывается в журнал версий в той же
    транзакции, что и сам документ. Конкурентные правки не сливаются:
    побеждает последняя запись.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.document_repository = DocumentRepository(session)
        self.share_repository = DocumentShareRepository(session)
        self.template_repository = DocumentTemplateRepository(session)
        self.access_control = AccessControlService(session)
        self.versions = VersionHistoryService(session)

    async def create_document(self, document_data: DocumentCreate, owner: str) -> Document:
        """Создание нового документа с начальной версией"""
        document = Document.create_document(
            title=document_data.title,
            owner=owner,
            content=document_data.content
        )

        try:
            created_document = await self.document_repository.create(document)
            await self.versions.append(created_document.uuid, created_document.content, owner)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

        logger.info("Document %s created by %s", created_document.uuid, owner)
        return created_document

    async def get_document(self, document_uuid: uuid.UUID, username: str) -> Document:
        """Получение документа; нужен доступ READ"""
        return await self.access_control.require_permission(document_uuid, username, Permission.READ)

    async def list_owned(self, owner: str, limit: Optional[int] = None, offset: int = 0) -> List[Document]:
        """Документы, созданные пользователем"""
        return await self.document_repository.get_by_owner(owner, limit, offset)

    async def list_shared(self, username: str) -> List[Document]:
        """Документы, к которым пользователю выдан доступ"""
        shares = await self.share_repository.get_by_user(username)
        return await self.document_repository.get_by_uuids(share.document_id for share in shares)

    async def list_accessible(self, username: str) -> List[Document]:
        """Собственные и доступные пользователю документы без повторов"""
        owned = await self.list_owned(username)
        shared = await self.list_shared(username)

        seen = set()
        documents = []
        for document in owned + shared:
            if document.uuid in seen:
                continue
            seen.add(document.uuid)
            documents.append(document)
        return documents

    async def count_owned(self, owner: str) -> int:
        return await self.document_repository.count_by_owner(owner)

    async def update_document(
        self,
        document_uuid: uuid.UUID,
        update_data: DocumentUpdate,
        username: str
    ) -> Document:
        """Обновление документа; нужен доступ WRITE"""
        document = await self.access_control.require_permission(document_uuid, username, Permission.WRITE)

        if update_data.title:
            document.update_title(update_data.title)

        try:
            if update_data.content is not None and document.update_content(update_data.content):
                await self.versions.append(document.uuid, document.content, username)

            updated = await self.document_repository.update(document)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

        logger.info("Document %s updated by %s", document_uuid, username)
        return updated

    async def delete_document(self, document_uuid: uuid.UUID, username: str) -> None:
        """Удаление документа; нужен ADMIN (владелец им обладает всегда).

        Права доступа удаляются вместе с документом, журнал версий остается.
        """
        await self.access_control.require_permission(document_uuid, username, Permission.ADMIN)

        try:
            removed_shares = await self.share_repository.delete_by_document(document_uuid)
            await self.document_repository.delete(document_uuid)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

        logger.info("Document %s deleted by %s (%d shares removed)", document_uuid, username, removed_shares)

    async def restore_version(
        self,
        document_uuid: uuid.UUID,
        version_uuid: uuid.UUID,
        username: str
    ) -> Document:
        """Применение сохраненной версии к документу как обычной правки"""
        document = await self.access_control.require_permission(document_uuid, username, Permission.WRITE)

        version = await self.versions.revert(version_uuid)
        if version.document_id != document.uuid:
            raise NotFoundException(
                "Version",
                details={"version_id": str(version_uuid), "document_id": str(document_uuid)}
            )

        document.update_content(version.content)
        try:
            await self.versions.append(document.uuid, document.content, username)
            restored = await self.document_repository.update(document)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

        logger.info("Document %s restored to version %s by %s", document_uuid, version_uuid, username)
        return restored

    async def require_history_access(self, document_uuid: uuid.UUID, username: str) -> None:
        """Доступ к истории: READ на документ, а после его удаления - только авторам версий"""
        document = await self.document_repository.get_by_uuid(document_uuid)

        if document is not None:
            await self.access_control.require_permission(document_uuid, username, Permission.READ)
            return

        if not await self.versions.is_contributor(document_uuid, username):
            if await self.versions.count(document_uuid) == 0:
                raise NotFoundException("Document", details={"document_id": str(document_uuid)})
            raise AuthorizationException(
                "Only contributors can read the history of a deleted document",
                details={"document_id": str(document_uuid)}
            )

    async def version_history(
        self,
        document_uuid: uuid.UUID,
        username: str,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[DocumentVersion]:
        await self.require_history_access(document_uuid, username)
        return await self.versions.history(document_uuid, limit, offset)

    async def get_version(self, version_uuid: uuid.UUID, username: str) -> DocumentVersion:
        """Снимок версии с проверкой доступа к истории документа"""
        version = await self.versions.revert(version_uuid)
        await self.require_history_access(version.document_id, username)
        return version

    async def compare_versions(self, from_version_uuid: uuid.UUID, to_version_uuid: uuid.UUID, username: str) -> str:
        await self.get_version(from_version_uuid, username)
        return await self.versions.compare_versions(from_version_uuid, to_version_uuid)

    async def record_snapshot(self, document_uuid: uuid.UUID, content: str, username: str) -> DocumentVersion:
        """Запись снимка в журнал от имени пользователя с доступом WRITE"""
        await self.access_control.require_permission(document_uuid, username, Permission.WRITE)
        return await self.versions.record_version(document_uuid, content, username)

    async def create_document_from_template(self, template_uuid: uuid.UUID, title: str, owner: str) -> Document:
        """Создание документа из шаблона, видимого пользователю"""
        template = await self.template_repository.get_by_uuid(template_uuid)
        if not template or not template.is_visible_to(owner):
            raise NotFoundException("Template", details={"template_id": str(template_uuid)})

        return await self.create_document(DocumentCreate(title=title, content=template.content), owner)
