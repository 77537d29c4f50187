import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from collabdocs.core.exceptions import AuthorizationException, NotFoundException
from collabdocs.db.repositories.template_repository import DocumentTemplateRepository
from collabdocs.domains.templates.entities import DocumentTemplate
from collabdocs.domains.templates.schemas import TemplateCreate, TemplateUpdate

logger = logging.getLogger(__name__)


class TemplateService:
    """Сервис шаблонов документов"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.template_repository = DocumentTemplateRepository(session)

    async def create_template(self, template_data: TemplateCreate, created_by: str) -> DocumentTemplate:
        template = DocumentTemplate.create_template(
            name=template_data.name,
            description=template_data.description,
            content=template_data.content,
            category=template_data.category,
            created_by=created_by,
            is_public=template_data.is_public
        )
        created = await self.template_repository.create(template)
        await self.session.commit()

        logger.info("Template %s created by %s", created.uuid, created_by)
        return created

    async def list_templates(self, username: str, category: Optional[str] = None) -> List[DocumentTemplate]:
        """Публичные шаблоны и собственные шаблоны пользователя"""
        return await self.template_repository.get_accessible(username, category)

    async def list_by_category(self, category: str, username: str) -> List[DocumentTemplate]:
        return await self.list_templates(username, category)

    async def get_template(self, template_uuid: uuid.UUID, username: str) -> DocumentTemplate:
        """Шаблон, видимый пользователю; чужой приватный шаблон не раскрывается"""
        template = await self.template_repository.get_by_uuid(template_uuid)
        if not template or not template.is_visible_to(username):
            raise NotFoundException("Template", details={"template_id": str(template_uuid)})
        return template

    async def _get_for_modification(self, template_uuid: uuid.UUID, username: str) -> DocumentTemplate:
        template = await self.template_repository.get_by_uuid(template_uuid)
        if not template:
            raise NotFoundException("Template", details={"template_id": str(template_uuid)})

        # публичность не дает права на изменение
        if not template.can_modify(username):
            logger.warning("User %s tried to modify template %s", username, template_uuid)
            raise AuthorizationException("Only template author can modify it")
        return template

    async def update_template(
        self,
        template_uuid: uuid.UUID,
        update_data: TemplateUpdate,
        username: str
    ) -> DocumentTemplate:
        template = await self._get_for_modification(template_uuid, username)

        template.update(
            name=update_data.name,
            description=update_data.description,
            content=update_data.content,
            category=update_data.category,
            is_public=update_data.is_public
        )
        updated = await self.template_repository.update(template)
        await self.session.commit()

        logger.info("Template %s updated by %s", template_uuid, username)
        return updated

    async def delete_template(self, template_uuid: uuid.UUID, username: str) -> None:
        await self._get_for_modification(template_uuid, username)

        await self.template_repository.delete(template_uuid)
        await self.session.commit()

        logger.info("Template %s deleted by %s", template_uuid, username)
