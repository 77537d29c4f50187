import logging
from typing import Optional, List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from collabdocs.core.exceptions import (
    AuthorizationException, ConflictException, NotFoundException, ValidationException
)
from collabdocs.db.repositories.document_repository import DocumentRepository
from collabdocs.db.repositories.share_repository import DocumentShareRepository
from collabdocs.domains.documents.entities import Document
from collabdocs.domains.sharing.entities import DocumentShare, DocumentAccess, Permission

logger = logging.getLogger(__name__)


class AccessControlService:
    """Вычисление прав пользователя на документ.

    Только чтение. Отсутствующий документ дает NotFound раньше любой
    проверки прав, так что вызывающий видит 404, а не 403.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.document_repository = DocumentRepository(session)
        self.share_repository = DocumentShareRepository(session)

    async def get_document_or_404(self, document_uuid: uuid.UUID) -> Document:
        document = await self.document_repository.get_by_uuid(document_uuid)
        if not document:
            raise NotFoundException("Document", details={"document_id": str(document_uuid)})
        return document

    async def get_access(self, document: Document, username: str) -> DocumentAccess:
        # владельцу права не нужны, хранилище не опрашиваем
        if document.is_owned_by(username):
            return DocumentAccess(document.owner)

        share = await self.share_repository.get_by_document_and_user(document.uuid, username)
        return DocumentAccess(document.owner, share)

    async def effective_permission(self, document_uuid: uuid.UUID, username: str) -> Optional[Permission]:
        """Эффективный уровень доступа или None"""
        document = await self.get_document_or_404(document_uuid)
        access = await self.get_access(document, username)
        return access.effective_permission(username)

    async def has_permission(self, document_uuid: uuid.UUID, username: str, required: Permission) -> bool:
        """True, если эффективный уровень не ниже требуемого"""
        document = await self.get_document_or_404(document_uuid)
        access = await self.get_access(document, username)
        return access.has_permission(username, required)

    async def require_permission(self, document_uuid: uuid.UUID, username: str, required: Permission) -> Document:
        """Возвращает документ или бросает AuthorizationException"""
        document = await self.get_document_or_404(document_uuid)
        access = await self.get_access(document, username)

        if not access.has_permission(username, required):
            logger.warning(
                "User %s denied %s access to document %s", username, Permission(required).value, document_uuid
            )
            raise AuthorizationException(
                f"{Permission(required).value} permission required",
                details={"document_id": str(document_uuid)}
            )
        return document


class ShareService:
    """Управление правами доступа. Все изменения доступны только владельцу."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.access_control = AccessControlService(session)
        self.share_repository = DocumentShareRepository(session)
        self.document_repository = DocumentRepository(session)

    async def _require_owner(self, document_uuid: uuid.UUID, acting_user: str, action: str) -> Document:
        document = await self.access_control.get_document_or_404(document_uuid)

        # ADMIN по праву доступа не заменяет владения
        if not document.is_owned_by(acting_user):
            logger.warning("User %s is not the owner of document %s, cannot %s", acting_user, document_uuid, action)
            raise AuthorizationException(
                f"Only document owner can {action}",
                details={"document_id": str(document_uuid)}
            )
        return document

    async def create_share(
        self,
        document_uuid: uuid.UUID,
        shared_with_user: str,
        permission: Permission,
        acting_user: str
    ) -> DocumentShare:
        """Выдача права доступа пользователю"""
        document = await self._require_owner(document_uuid, acting_user, "share")

        if document.is_owned_by(shared_with_user):
            raise ValidationException("Document cannot be shared with its owner")

        existing = await self.share_repository.get_by_document_and_user(document_uuid, shared_with_user)
        if existing:
            raise ConflictException(
                "Document already shared with this user",
                details={"document_id": str(document_uuid), "user": shared_with_user}
            )

        share = DocumentShare.create_share(
            document_id=document_uuid,
            shared_with_user=shared_with_user,
            permission=permission,
            shared_by_user=acting_user
        )
        try:
            created = await self.share_repository.create(share)
            await self.session.commit()
        except (ConflictException, SQLAlchemyError):
            await self.session.rollback()
            raise

        logger.info(
            "Document %s shared with %s (%s) by %s",
            document_uuid, shared_with_user, created.permission.value, acting_user
        )
        return created

    async def update_share(
        self,
        document_uuid: uuid.UUID,
        shared_with_user: str,
        permission: Permission,
        acting_user: str
    ) -> DocumentShare:
        """Изменение уровня существующего права"""
        await self._require_owner(document_uuid, acting_user, "change sharing")

        existing = await self.share_repository.get_by_document_and_user(document_uuid, shared_with_user)
        if not existing:
            raise NotFoundException("Share", details={"document_id": str(document_uuid), "user": shared_with_user})

        updated = await self.share_repository.update_permission(document_uuid, shared_with_user, Permission(permission))
        await self.session.commit()

        logger.info(
            "Share of document %s for %s changed %s -> %s",
            document_uuid, shared_with_user, existing.permission.value, updated.permission.value
        )
        return updated

    async def revoke_share(self, document_uuid: uuid.UUID, shared_with_user: str, acting_user: str) -> None:
        """Отзыв права; повторный отзыв ошибкой не является"""
        await self._require_owner(document_uuid, acting_user, "revoke sharing")

        removed = await self.share_repository.delete_by_document_and_user(document_uuid, shared_with_user)
        await self.session.commit()

        if removed:
            logger.info("Share of document %s for %s revoked by %s", document_uuid, shared_with_user, acting_user)

    async def list_shares(self, document_uuid: uuid.UUID, acting_user: str) -> List[DocumentShare]:
        """Список прав на документ; получатели прав друг друга не видят"""
        await self._require_owner(document_uuid, acting_user, "list shares")
        return await self.share_repository.get_by_document(document_uuid)

    async def shared_with(self, username: str) -> List[DocumentShare]:
        """Права, выданные пользователю"""
        return await self.share_repository.get_by_user(username)
