import uuid
from datetime import datetime
from typing import Optional


class DocumentTemplate:
    """Шаблон, из которого можно создать документ"""

    def __init__(
        self,
        uuid: uuid.UUID,
        name: str,
        category: str,
        created_by: str,
        description: str = "",
        content: str = "",
        is_public: bool = True,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.name = name
        self.description = description
        self.content = content
        self.category = category
        self.created_by = created_by
        self.is_public = is_public
        self.created_at = created_at or datetime.utcnow()
        self.updated_at = updated_at or datetime.utcnow()

    def is_visible_to(self, username: str) -> bool:
        """Публичный шаблон виден всем, приватный - только автору"""
        return self.is_public or self.created_by == username

    def can_modify(self, username: str) -> bool:
        return self.created_by == username

    def update(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        content: Optional[str] = None,
        category: Optional[str] = None,
        is_public: Optional[bool] = None
    ) -> None:
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if content is not None:
            self.content = content
        if category is not None:
            self.category = category
        if is_public is not None:
            self.is_public = is_public
        self.updated_at = datetime.utcnow()

    @classmethod
    def create_template(
        cls,
        name: str,
        category: str,
        created_by: str,
        description: str = "",
        content: str = "",
        is_public: bool = True
    ) -> "DocumentTemplate":
        return cls(
            uuid=uuid.uuid4(),
            name=name,
            description=description,
            content=content,
            category=category,
            created_by=created_by,
            is_public=is_public
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, DocumentTemplate):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"DocumentTemplate(uuid={self.uuid}, name={self.name}, category={self.category})"
