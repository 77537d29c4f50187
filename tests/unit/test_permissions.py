"""
Unit Tests for permission levels and effective access
Tests for collabdocs/domains/sharing/entities.py
"""

import uuid

import pytest

from collabdocs.domains.sharing.entities import DocumentAccess, DocumentShare, Permission


def make_share(user: str, permission: Permission) -> DocumentShare:
    return DocumentShare.create_share(
        document_id=uuid.uuid4(),
        shared_with_user=user,
        permission=permission,
        shared_by_user="alice"
    )


@pytest.mark.unit
class TestPermissionOrder:
    """READ < WRITE < ADMIN, independent of string ordering"""

    def test_total_order(self):
        assert Permission.READ < Permission.WRITE < Permission.ADMIN
        assert Permission.ADMIN > Permission.READ
        assert Permission.WRITE >= Permission.WRITE
        assert Permission.READ <= Permission.READ

    def test_order_differs_from_lexicographic(self):
        # "ADMIN" < "READ" as strings, but not as permissions
        assert "ADMIN" < "READ"
        assert Permission.ADMIN > Permission.READ

    def test_max_and_sorted_use_rank(self):
        levels = [Permission.WRITE, Permission.ADMIN, Permission.READ]
        assert sorted(levels) == [Permission.READ, Permission.WRITE, Permission.ADMIN]
        assert max(levels) is Permission.ADMIN

    @pytest.mark.parametrize("granted,required,expected", [
        (Permission.READ, Permission.READ, True),
        (Permission.READ, Permission.WRITE, False),
        (Permission.READ, Permission.ADMIN, False),
        (Permission.WRITE, Permission.READ, True),
        (Permission.WRITE, Permission.WRITE, True),
        (Permission.WRITE, Permission.ADMIN, False),
        (Permission.ADMIN, Permission.READ, True),
        (Permission.ADMIN, Permission.WRITE, True),
        (Permission.ADMIN, Permission.ADMIN, True),
    ])
    def test_implies(self, granted, required, expected):
        assert granted.implies(required) is expected

    def test_serialized_as_string(self):
        assert Permission("WRITE") is Permission.WRITE
        assert Permission.ADMIN.value == "ADMIN"
        assert Permission.READ == "READ"

    def test_comparison_with_other_type_is_not_supported(self):
        with pytest.raises(TypeError):
            Permission.READ < 1


@pytest.mark.unit
class TestDocumentAccess:
    """Effective permission of a user on a document"""

    def test_owner_is_admin_without_share(self):
        access = DocumentAccess("alice")
        assert access.effective_permission("alice") is Permission.ADMIN
        assert access.is_owner("alice")
        assert access.can_admin("alice")

    def test_owner_is_admin_even_with_lower_share(self):
        # owner supremacy: a stray share row never lowers the owner
        access = DocumentAccess("alice", make_share("alice", Permission.READ))
        assert access.effective_permission("alice") is Permission.ADMIN

    def test_grantee_gets_share_permission(self):
        access = DocumentAccess("alice", make_share("bob", Permission.WRITE))
        assert access.effective_permission("bob") is Permission.WRITE
        assert access.can_read("bob")
        assert access.can_edit("bob")
        assert not access.can_admin("bob")
        assert not access.is_owner("bob")

    def test_stranger_has_nothing(self):
        access = DocumentAccess("alice", make_share("bob", Permission.ADMIN))
        assert access.effective_permission("carol") is None
        assert not access.can_read("carol")

    def test_share_for_another_user_is_ignored(self):
        access = DocumentAccess("alice", make_share("bob", Permission.READ))
        assert access.has_permission("dave", Permission.READ) is False


@pytest.mark.unit
class TestDocumentShare:

    def test_create_share_normalizes_permission(self):
        share = DocumentShare.create_share(uuid.uuid4(), "bob", "WRITE", "alice")
        assert share.permission is Permission.WRITE
        assert share.shared_by_user == "alice"
        assert share.shared_at is not None

    def test_equality_by_uuid(self):
        share = make_share("bob", Permission.READ)
        other = make_share("bob", Permission.READ)
        assert share == share
        assert share != other
