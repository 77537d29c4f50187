from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, and_
import uuid

from collabdocs.db.models.version import DocumentVersion as DocumentVersionModel

if TYPE_CHECKING:
    from collabdocs.domains.versions.entities import DocumentVersion


class DocumentVersionRepository:
    """Журнал версий: только добавление и чтение"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, version: "DocumentVersion") -> "DocumentVersion":
        """Добавление снимка в журнал"""
        db_version = DocumentVersionModel(
            uuid=version.uuid,
            document_id=version.document_id,
            content=version.content,
            edited_by=version.edited_by,
            timestamp=version.timestamp
        )

        self.session.add(db_version)
        await self.session.flush()
        return self._to_domain(db_version)

    async def get_by_uuid(self, version_uuid: uuid.UUID) -> Optional["DocumentVersion"]:
        """Получение версии по UUID"""
        result = await self.session.execute(
            select(DocumentVersionModel).where(DocumentVersionModel.uuid == version_uuid)
        )
        db_version = result.scalar_one_or_none()
        return self._to_domain(db_version) if db_version else None

    async def get_by_document(
        self,
        document_id: uuid.UUID,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List["DocumentVersion"]:
        """Версии документа от новых к старым; при равном времени - по порядку вставки"""
        query = (
            select(DocumentVersionModel)
            .where(DocumentVersionModel.document_id == document_id)
            .order_by(DocumentVersionModel.timestamp.desc(), DocumentVersionModel.id.desc())
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return [self._to_domain(version) for version in result.scalars().all()]

    async def get_by_editor(self, username: str) -> List["DocumentVersion"]:
        """Все версии, записанные пользователем"""
        result = await self.session.execute(
            select(DocumentVersionModel)
            .where(DocumentVersionModel.edited_by == username)
            .order_by(DocumentVersionModel.timestamp.desc(), DocumentVersionModel.id.desc())
        )
        return [self._to_domain(version) for version in result.scalars().all()]

    async def has_editor(self, document_id: uuid.UUID, username: str) -> bool:
        """Редактировал ли пользователь документ хотя бы раз"""
        result = await self.session.execute(
            select(func.count(DocumentVersionModel.id)).where(
                and_(
                    DocumentVersionModel.document_id == document_id,
                    DocumentVersionModel.edited_by == username
                )
            )
        )
        return result.scalar() > 0

    async def count_by_document(self, document_id: uuid.UUID) -> int:
        """Подсчет количества версий документа"""
        result = await self.session.execute(
            select(func.count(DocumentVersionModel.id))
            .where(DocumentVersionModel.document_id == document_id)
        )
        return result.scalar()

    def _to_domain(self, db_version: DocumentVersionModel) -> "DocumentVersion":
        """Преобразование модели БД в доменную сущность"""
        from collabdocs.domains.versions.entities import DocumentVersion

        return DocumentVersion(
            uuid=db_version.uuid,
            document_id=db_version.document_id,
            content=db_version.content,
            edited_by=db_version.edited_by,
            timestamp=db_version.timestamp
        )
