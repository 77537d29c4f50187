from typing import Optional, List, Iterable, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func
import uuid

from collabdocs.db.models.document import Document as DocumentModel

if TYPE_CHECKING:
    from collabdocs.domains.documents.entities import Document


class DocumentRepository:
    """Репозиторий для работы с документами.

    Методы не фиксируют транзакцию: commit/rollback остается за сервисом,
    чтобы запись документа и запись в журнал версий шли одной транзакцией.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: "Document") -> "Document":
        """Создание нового документа"""
        db_document = DocumentModel(
            uuid=document.uuid,
            title=document.title,
            content=document.content,
            owner=document.owner,
            created_at=document.created_at,
            updated_at=document.updated_at
        )

        self.session.add(db_document)
        await self.session.flush()
        return self._to_domain(db_document)

    async def get_by_uuid(self, document_uuid: uuid.UUID) -> Optional["Document"]:
        """Получение документа по UUID"""
        result = await self.session.execute(
            select(DocumentModel).where(DocumentModel.uuid == document_uuid)
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def get_by_uuids(self, document_uuids: Iterable[uuid.UUID]) -> List["Document"]:
        """Получение документов по списку UUID"""
        document_uuids = list(document_uuids)
        if not document_uuids:
            return []

        result = await self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.uuid.in_(document_uuids))
            .order_by(DocumentModel.updated_at.desc(), DocumentModel.id.desc())
        )
        return [self._to_domain(doc) for doc in result.scalars().all()]

    async def get_by_owner(self, owner: str, limit: Optional[int] = None, offset: int = 0) -> List["Document"]:
        """Получение документов по владельцу; без limit - все"""
        query = (
            select(DocumentModel)
            .where(DocumentModel.owner == owner)
            .order_by(DocumentModel.updated_at.desc(), DocumentModel.id.desc())
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        db_documents = result.scalars().all()
        return [self._to_domain(doc) for doc in db_documents]

    async def update(self, document: "Document") -> "Document":
        """Обновление документа (последняя запись побеждает)"""
        stmt = (
            update(DocumentModel)
            .where(DocumentModel.uuid == document.uuid)
            .values(
                title=document.title,
                content=document.content,
                updated_at=document.updated_at
            )
        )

        await self.session.execute(stmt)
        await self.session.flush()

        return await self.get_by_uuid(document.uuid)

    async def delete(self, document_uuid: uuid.UUID) -> bool:
        """Удаление документа"""
        stmt = delete(DocumentModel).where(DocumentModel.uuid == document_uuid)
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def count_by_owner(self, owner: str) -> int:
        """Подсчет количества документов владельца"""
        result = await self.session.execute(
            select(func.count(DocumentModel.id)).where(DocumentModel.owner == owner)
        )
        return result.scalar()

    def _to_domain(self, db_document: DocumentModel) -> "Document":
        """Преобразование модели БД в доменную сущность"""
        from collabdocs.domains.documents.entities import Document

        return Document(
            uuid=db_document.uuid,
            title=db_document.title,
            content=db_document.content,
            owner=db_document.owner,
            created_at=db_document.created_at,
            updated_at=db_document.updated_at
        )
