import difflib
import uuid
from datetime import datetime
from typing import Optional


class DocumentVersion:
    """Снимок содержимого документа в журнале версий"""

    def __init__(
        self,
        uuid: uuid.UUID,
        document_id: uuid.UUID,
        content: str,
        edited_by: str,
        timestamp: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.document_id = document_id
        self.content = content
        self.edited_by = edited_by
        self.timestamp = timestamp or datetime.utcnow()

    def get_diff(self, other: "DocumentVersion") -> str:
        """Разница между этой и другой версией в формате unified diff"""
        if self.content == other.content:
            return ""

        diff = difflib.unified_diff(
            self.content.splitlines(keepends=True),
            other.content.splitlines(keepends=True),
            fromfile=f"version {self.uuid}",
            tofile=f"version {other.uuid}",
        )
        return "".join(diff)

    @classmethod
    def create_version(cls, document_id: uuid.UUID, content: str, edited_by: str) -> "DocumentVersion":
        """Создание новой версии документа"""
        return cls(
            uuid=uuid.uuid4(),
            document_id=document_id,
            content=content,
            edited_by=edited_by
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, DocumentVersion):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"DocumentVersion(uuid={self.uuid}, document_id={self.document_id}, edited_by={self.edited_by})"
