import uuid
from datetime import datetime
from typing import Optional


class Document:
    """Сущность документа домена Documents"""

    def __init__(
        self,
        uuid: uuid.UUID,
        title: str,
        content: str = "",
        owner: str = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.title = title
        self.content = content
        self.owner = owner
        self.created_at = created_at or datetime.utcnow()
        self.updated_at = updated_at or datetime.utcnow()

    def update_content(self, new_content: str) -> bool:
        """Обновление содержимого; возвращает True, если текст изменился"""
        changed = new_content != self.content
        self.content = new_content
        self.updated_at = datetime.utcnow()
        return changed

    def update_title(self, new_title: str) -> None:
        """Обновление заголовка документа"""
        self.title = new_title
        self.updated_at = datetime.utcnow()

    def is_owned_by(self, username: str) -> bool:
        return self.owner == username

    def get_content_length(self) -> int:
        """Получение длины содержимого документа"""
        return len(self.content)

    def get_word_count(self) -> int:
        """Подсчет количества слов в документе"""
        if not self.content.strip():
            return 0
        return len(self.content.split())

    @classmethod
    def create_document(cls, title: str, owner: str, content: str = "") -> "Document":
        """Создание нового документа"""
        return cls(
            uuid=uuid.uuid4(),
            title=title,
            content=content,
            owner=owner
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.uuid == other.uuid

    def __hash__(self) -> int:
        return hash(self.uuid)

    def __repr__(self) -> str:
        return f"Document(uuid={self.uuid}, title={self.title}, owner={self.owner})"
