import logging
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from collabdocs.core.exceptions import NotFoundException, ValidationException
from collabdocs.db.repositories.version_repository import DocumentVersionRepository
from collabdocs.domains.versions.entities import DocumentVersion

logger = logging.getLogger(__name__)


class VersionHistoryService:
    """Журнал версий документов.

    Журнал только дополняется. Проверка прав - забота вызывающего, а сам
    журнал не зависит от хранилища документов и ничего в нем не меняет.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.version_repository = DocumentVersionRepository(session)

    async def append(self, document_uuid: uuid.UUID, content: str, edited_by: str) -> DocumentVersion:
        """Добавление снимка без фиксации транзакции"""
        version = DocumentVersion.create_version(
            document_id=document_uuid,
            content=content,
            edited_by=edited_by
        )
        created = await self.version_repository.create(version)
        logger.info("Recorded version %s of document %s by %s", created.uuid, document_uuid, edited_by)
        return created

    async def record_version(self, document_uuid: uuid.UUID, content: str, edited_by: str) -> DocumentVersion:
        """Запись снимка содержимого в журнал"""
        try:
            created = await self.append(document_uuid, content, edited_by)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return created

    async def history(
        self,
        document_uuid: uuid.UUID,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[DocumentVersion]:
        """История документа от новых версий к старым; пустой список, если версий нет"""
        return await self.version_repository.get_by_document(document_uuid, limit, offset)

    async def count(self, document_uuid: uuid.UUID) -> int:
        return await self.version_repository.count_by_document(document_uuid)

    async def revert(self, version_uuid: uuid.UUID) -> DocumentVersion:
        """Получение сохраненного снимка.

        Документ не меняется; применить снимок можно через
        DocumentService.restore_version.
        """
        version = await self.version_repository.get_by_uuid(version_uuid)
        if not version:
            raise NotFoundException("Version", details={"version_id": str(version_uuid)})
        return version

    async def contributions_by_user(self, username: str) -> List[DocumentVersion]:
        """Все версии, записанные пользователем"""
        return await self.version_repository.get_by_editor(username)

    async def is_contributor(self, document_uuid: uuid.UUID, username: str) -> bool:
        return await self.version_repository.has_editor(document_uuid, username)

    async def compare_versions(self, from_version_uuid: uuid.UUID, to_version_uuid: uuid.UUID) -> str:
        """Сравнение двух версий одного документа"""
        from_version = await self.revert(from_version_uuid)
        to_version = await self.revert(to_version_uuid)

        if from_version.document_id != to_version.document_id:
            raise ValidationException(
                "Versions belong to different documents",
                details={
                    "from_document_id": str(from_version.document_id),
                    "to_document_id": str(to_version.document_id)
                }
            )

        return from_version.get_diff(to_version)
