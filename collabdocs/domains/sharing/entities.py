import enum
import uuid
from datetime import datetime
from typing import Optional


class Permission(str, enum.Enum):
    """Уровень доступа к документу: READ < WRITE < ADMIN"""

    READ = "READ"
    WRITE = "WRITE"
    ADMIN = "ADMIN"

    @property
    def rank(self) -> int:
        return _PERMISSION_RANK[self]

    def implies(self, required: "Permission") -> bool:
        """Уровень включает все возможности уровней ниже себя"""
        return self.rank >= Permission(required).rank

    # str уже определяет сравнения лексикографически, поэтому
    # все четыре оператора переопределены явно
    def __lt__(self, other):
        if isinstance(other, Permission):
            return self.rank < other.rank
        return NotImplemented

    def __le__(self, other):
        if isinstance(other, Permission):
            return self.rank <= other.rank
        return NotImplemented

    def __gt__(self, other):
        if isinstance(other, Permission):
            return self.rank > other.rank
        return NotImplemented

    def __ge__(self, other):
        if isinstance(other, Permission):
            return self.rank >= other.rank
        return NotImplemented


_PERMISSION_RANK = {
    Permission.READ: 1,
    Permission.WRITE: 2,
    Permission.ADMIN: 3,
}


class DocumentShare:
    """Право доступа пользователя к чужому документу"""

    def __init__(
        self,
        uuid: uuid.UUID,
        document_id: uuid.UUID,
        shared_with_user: str,
        permission: Permission,
        shared_by_user: str,
        shared_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.document_id = document_id
        self.shared_with_user = shared_with_user
        self.permission = permission
        self.shared_by_user = shared_by_user
        self.shared_at = shared_at or datetime.utcnow()

    @classmethod
    def create_share(
        cls,
        document_id: uuid.UUID,
        shared_with_user: str,
        permission: Permission,
        shared_by_user: str
    ) -> "DocumentShare":
        """Создание нового права доступа"""
        return cls(
            uuid=uuid.uuid4(),
            document_id=document_id,
            shared_with_user=shared_with_user,
            permission=Permission(permission),
            shared_by_user=shared_by_user
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, DocumentShare):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return (
            f"DocumentShare(document_id={self.document_id}, "
            f"user={self.shared_with_user}, permission={self.permission.value})"
        )


class DocumentAccess:
    """Вычисление эффективного уровня доступа к документу"""

    def __init__(self, owner: str, share: Optional[DocumentShare] = None):
        self.owner = owner
        self.share = share

    def is_owner(self, username: str) -> bool:
        return username == self.owner

    def effective_permission(self, username: str) -> Optional[Permission]:
        # владелец всегда ADMIN, права доступа не смотрим
        if self.is_owner(username):
            return Permission.ADMIN

        if self.share is not None and self.share.shared_with_user == username:
            return self.share.permission

        return None

    def has_permission(self, username: str, required: Permission) -> bool:
        permission = self.effective_permission(username)
        return permission is not None and permission.implies(required)

    def can_read(self, username: str) -> bool:
        return self.has_permission(username, Permission.READ)

    def can_edit(self, username: str) -> bool:
        return self.has_permission(username, Permission.WRITE)

    def can_admin(self, username: str) -> bool:
        return self.has_permission(username, Permission.ADMIN)
