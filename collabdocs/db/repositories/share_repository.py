from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, and_
from sqlalchemy.exc import IntegrityError
import uuid

from collabdocs.core.exceptions import ConflictException
from collabdocs.db.models.document import DocumentShare as DocumentShareModel

if TYPE_CHECKING:
    from collabdocs.domains.sharing.entities import DocumentShare, Permission


class DocumentShareRepository:
    """Репозиторий прав доступа к документам"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, share: "DocumentShare") -> "DocumentShare":
        """Создание права доступа.

        Уникальность пары (документ, пользователь) гарантирует ограничение БД,
        поэтому два параллельных создания не могут завершиться оба.
        """
        db_share = DocumentShareModel(
            uuid=share.uuid,
            document_id=share.document_id,
            shared_with_user=share.shared_with_user,
            permission=share.permission,
            shared_by_user=share.shared_by_user,
            shared_at=share.shared_at
        )

        self.session.add(db_share)
        try:
            await self.session.flush()
        except IntegrityError:
            # откат транзакции - забота сервиса
            raise ConflictException(
                "Document already shared with this user",
                details={"document_id": str(share.document_id), "user": share.shared_with_user}
            )
        return self._to_domain(db_share)

    async def get_by_document_and_user(
        self,
        document_id: uuid.UUID,
        username: str
    ) -> Optional["DocumentShare"]:
        result = await self.session.execute(
            select(DocumentShareModel).where(
                and_(
                    DocumentShareModel.document_id == document_id,
                    DocumentShareModel.shared_with_user == username
                )
            )
        )
        db_share = result.scalar_one_or_none()
        return self._to_domain(db_share) if db_share else None

    async def get_by_document(self, document_id: uuid.UUID) -> List["DocumentShare"]:
        result = await self.session.execute(
            select(DocumentShareModel)
            .where(DocumentShareModel.document_id == document_id)
            .order_by(DocumentShareModel.shared_at, DocumentShareModel.id)
        )
        return [self._to_domain(share) for share in result.scalars().all()]

    async def get_by_user(self, username: str) -> List["DocumentShare"]:
        """Права, выданные пользователю на чужие документы"""
        result = await self.session.execute(
            select(DocumentShareModel)
            .where(DocumentShareModel.shared_with_user == username)
            .order_by(DocumentShareModel.shared_at.desc(), DocumentShareModel.id.desc())
        )
        return [self._to_domain(share) for share in result.scalars().all()]

    async def update_permission(
        self,
        document_id: uuid.UUID,
        username: str,
        permission: "Permission"
    ) -> Optional["DocumentShare"]:
        await self.session.execute(
            update(DocumentShareModel)
            .where(
                and_(
                    DocumentShareModel.document_id == document_id,
                    DocumentShareModel.shared_with_user == username
                )
            )
            .values(permission=permission)
        )
        await self.session.flush()
        return await self.get_by_document_and_user(document_id, username)

    async def delete_by_document_and_user(self, document_id: uuid.UUID, username: str) -> bool:
        """Удаление права; отсутствие записи ошибкой не считается"""
        result = await self.session.execute(
            delete(DocumentShareModel).where(
                and_(
                    DocumentShareModel.document_id == document_id,
                    DocumentShareModel.shared_with_user == username
                )
            )
        )
        return result.rowcount > 0

    async def delete_by_document(self, document_id: uuid.UUID) -> int:
        """Удаление всех прав на документ"""
        result = await self.session.execute(
            delete(DocumentShareModel).where(DocumentShareModel.document_id == document_id)
        )
        return result.rowcount

    def _to_domain(self, db_share: DocumentShareModel) -> "DocumentShare":
        """Преобразование модели БД в доменную сущность"""
        from collabdocs.domains.sharing.entities import DocumentShare

        return DocumentShare(
            uuid=db_share.uuid,
            document_id=db_share.document_id,
            shared_with_user=db_share.shared_with_user,
            permission=db_share.permission,
            shared_by_user=db_share.shared_by_user,
            shared_at=db_share.shared_at
        )
