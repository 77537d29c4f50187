from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, or_
import uuid

from collabdocs.db.models.template import DocumentTemplate as DocumentTemplateModel

if TYPE_CHECKING:
    from collabdocs.domains.templates.entities import DocumentTemplate


class DocumentTemplateRepository:
    """Репозиторий шаблонов документов"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, template: "DocumentTemplate") -> "DocumentTemplate":
        db_template = DocumentTemplateModel(
            uuid=template.uuid,
            name=template.name,
            description=template.description,
            content=template.content,
            category=template.category,
            created_by=template.created_by,
            is_public=template.is_public,
            created_at=template.created_at,
            updated_at=template.updated_at
        )

        self.session.add(db_template)
        await self.session.flush()
        return self._to_domain(db_template)

    async def get_by_uuid(self, template_uuid: uuid.UUID) -> Optional["DocumentTemplate"]:
        result = await self.session.execute(
            select(DocumentTemplateModel).where(DocumentTemplateModel.uuid == template_uuid)
        )
        db_template = result.scalar_one_or_none()
        return self._to_domain(db_template) if db_template else None

    async def get_accessible(self, username: str, category: Optional[str] = None) -> List["DocumentTemplate"]:
        """Публичные шаблоны и шаблоны пользователя"""
        query = select(DocumentTemplateModel).where(
            or_(
                DocumentTemplateModel.is_public.is_(True),
                DocumentTemplateModel.created_by == username
            )
        )
        if category is not None:
            query = query.where(DocumentTemplateModel.category == category)

        result = await self.session.execute(
            query.order_by(DocumentTemplateModel.name, DocumentTemplateModel.id)
        )
        return [self._to_domain(template) for template in result.scalars().all()]

    async def update(self, template: "DocumentTemplate") -> "DocumentTemplate":
        await self.session.execute(
            update(DocumentTemplateModel)
            .where(DocumentTemplateModel.uuid == template.uuid)
            .values(
                name=template.name,
                description=template.description,
                content=template.content,
                category=template.category,
                is_public=template.is_public,
                updated_at=template.updated_at
            )
        )
        await self.session.flush()
        return await self.get_by_uuid(template.uuid)

    async def delete(self, template_uuid: uuid.UUID) -> bool:
        result = await self.session.execute(
            delete(DocumentTemplateModel).where(DocumentTemplateModel.uuid == template_uuid)
        )
        return result.rowcount > 0

    def _to_domain(self, db_template: DocumentTemplateModel) -> "DocumentTemplate":
        """Преобразование модели БД в доменную сущность"""
        from collabdocs.domains.templates.entities import DocumentTemplate

        return DocumentTemplate(
            uuid=db_template.uuid,
            name=db_template.name,
            description=db_template.description,
            content=db_template.content,
            category=db_template.category,
            created_by=db_template.created_by,
            is_public=db_template.is_public,
            created_at=db_template.created_at,
            updated_at=db_template.updated_at
        )
