"""
Tests for AccessControlService and ShareService
"""

import uuid
from unittest.mock import AsyncMock

import pytest

from collabdocs.core.exceptions import (
    AuthorizationException, ConflictException, NotFoundException, ValidationException
)
from collabdocs.db.repositories.share_repository import DocumentShareRepository
from collabdocs.domains.documents.schemas import DocumentCreate
from collabdocs.domains.documents.services import DocumentService
from collabdocs.domains.sharing.entities import DocumentShare, Permission
from collabdocs.domains.sharing.services import AccessControlService, ShareService


async def create_document(session, owner="alice", content="hello"):
    return await DocumentService(session).create_document(
        DocumentCreate(title="Plan", content=content), owner
    )


class TestAccessControl:

    @pytest.mark.asyncio
    async def test_owner_is_admin(self, db_session):
        document = await create_document(db_session)
        access_control = AccessControlService(db_session)

        assert await access_control.effective_permission(document.uuid, "alice") is Permission.ADMIN
        for level in Permission:
            assert await access_control.has_permission(document.uuid, "alice", level)

    @pytest.mark.asyncio
    async def test_stranger_has_no_permission(self, db_session):
        document = await create_document(db_session)
        access_control = AccessControlService(db_session)

        assert await access_control.effective_permission(document.uuid, "bob") is None
        assert not await access_control.has_permission(document.uuid, "bob", Permission.READ)

    @pytest.mark.asyncio
    async def test_permission_is_monotonic(self, db_session):
        document = await create_document(db_session)
        await ShareService(db_session).create_share(document.uuid, "bob", Permission.WRITE, "alice")
        access_control = AccessControlService(db_session)

        assert await access_control.has_permission(document.uuid, "bob", Permission.READ)
        assert await access_control.has_permission(document.uuid, "bob", Permission.WRITE)
        assert not await access_control.has_permission(document.uuid, "bob", Permission.ADMIN)

    @pytest.mark.asyncio
    async def test_missing_document_is_not_found_before_forbidden(self, db_session):
        access_control = AccessControlService(db_session)

        with pytest.raises(NotFoundException):
            await access_control.effective_permission(uuid.uuid4(), "bob")
        with pytest.raises(NotFoundException):
            await access_control.require_permission(uuid.uuid4(), "bob", Permission.READ)

    @pytest.mark.asyncio
    async def test_require_permission(self, db_session):
        document = await create_document(db_session)
        await ShareService(db_session).create_share(document.uuid, "bob", Permission.READ, "alice")
        access_control = AccessControlService(db_session)

        returned = await access_control.require_permission(document.uuid, "bob", Permission.READ)
        assert returned.uuid == document.uuid

        with pytest.raises(AuthorizationException) as exc_info:
            await access_control.require_permission(document.uuid, "bob", Permission.WRITE)
        assert exc_info.value.message == "WRITE permission required"


class TestShareService:

    @pytest.mark.asyncio
    async def test_create_share(self, db_session):
        document = await create_document(db_session)

        share = await ShareService(db_session).create_share(document.uuid, "bob", Permission.READ, "alice")

        assert share.document_id == document.uuid
        assert share.shared_with_user == "bob"
        assert share.permission is Permission.READ
        assert share.shared_by_user == "alice"
        assert share.shared_at is not None

    @pytest.mark.asyncio
    async def test_duplicate_share_conflicts(self, db_session):
        document = await create_document(db_session)
        share_service = ShareService(db_session)
        await share_service.create_share(document.uuid, "bob", Permission.READ, "alice")

        with pytest.raises(ConflictException):
            await share_service.create_share(document.uuid, "bob", Permission.WRITE, "alice")

        shares = await share_service.list_shares(document.uuid, "alice")
        assert len(shares) == 1
        assert shares[0].permission is Permission.READ

    @pytest.mark.asyncio
    async def test_unique_constraint_translates_to_conflict(self, db_session):
        # two inserts that both passed the pre-check
        document = await create_document(db_session)
        repository = DocumentShareRepository(db_session)
        await repository.create(DocumentShare.create_share(document.uuid, "bob", Permission.READ, "alice"))

        with pytest.raises(ConflictException):
            await repository.create(DocumentShare.create_share(document.uuid, "bob", Permission.WRITE, "alice"))

    @pytest.mark.asyncio
    async def test_conflict_on_insert_rolls_back_session(self, db_session, monkeypatch):
        # a concurrent grant slipped past the lookup, only the constraint catches it
        document = await create_document(db_session)
        share_service = ShareService(db_session)
        await share_service.create_share(document.uuid, "bob", Permission.READ, "alice")
        monkeypatch.setattr(
            share_service.share_repository, "get_by_document_and_user", AsyncMock(return_value=None)
        )

        with pytest.raises(ConflictException):
            await share_service.create_share(document.uuid, "bob", Permission.WRITE, "alice")

        shares = await share_service.list_shares(document.uuid, "alice")
        assert len(shares) == 1
        assert shares[0].permission is Permission.READ

    @pytest.mark.asyncio
    async def test_share_with_owner_rejected(self, db_session):
        document = await create_document(db_session)

        with pytest.raises(ValidationException):
            await ShareService(db_session).create_share(document.uuid, "alice", Permission.READ, "alice")

    @pytest.mark.asyncio
    async def test_share_on_missing_document(self, db_session):
        with pytest.raises(NotFoundException):
            await ShareService(db_session).create_share(uuid.uuid4(), "bob", Permission.READ, "alice")

    @pytest.mark.asyncio
    async def test_share_mutations_are_owner_only_even_for_admin(self, db_session):
        document = await create_document(db_session)
        share_service = ShareService(db_session)
        await share_service.create_share(document.uuid, "bob", Permission.ADMIN, "alice")
        await share_service.create_share(document.uuid, "carol", Permission.READ, "alice")

        with pytest.raises(AuthorizationException):
            await share_service.create_share(document.uuid, "dave", Permission.READ, "bob")
        with pytest.raises(AuthorizationException):
            await share_service.revoke_share(document.uuid, "carol", "bob")
        with pytest.raises(AuthorizationException):
            await share_service.update_share(document.uuid, "carol", Permission.WRITE, "bob")
        with pytest.raises(AuthorizationException):
            await share_service.list_shares(document.uuid, "bob")

        assert len(await share_service.list_shares(document.uuid, "alice")) == 2

    @pytest.mark.asyncio
    async def test_update_share_keeps_identity(self, db_session):
        document = await create_document(db_session)
        share_service = ShareService(db_session)
        share = await share_service.create_share(document.uuid, "bob", Permission.READ, "alice")

        updated = await share_service.update_share(document.uuid, "bob", Permission.WRITE, "alice")

        assert updated.uuid == share.uuid
        assert updated.permission is Permission.WRITE
        assert await AccessControlService(db_session).effective_permission(document.uuid, "bob") is Permission.WRITE

    @pytest.mark.asyncio
    async def test_update_missing_share(self, db_session):
        document = await create_document(db_session)

        with pytest.raises(NotFoundException):
            await ShareService(db_session).update_share(document.uuid, "bob", Permission.WRITE, "alice")

    @pytest.mark.asyncio
    async def test_revoke_share(self, db_session):
        document = await create_document(db_session)
        share_service = ShareService(db_session)
        await share_service.create_share(document.uuid, "bob", Permission.WRITE, "alice")

        await share_service.revoke_share(document.uuid, "bob", "alice")

        assert await AccessControlService(db_session).effective_permission(document.uuid, "bob") is None
        # revoking again is not an error
        await share_service.revoke_share(document.uuid, "bob", "alice")

    @pytest.mark.asyncio
    async def test_shared_with(self, db_session):
        first = await create_document(db_session)
        second = await create_document(db_session, owner="carol")
        share_service = ShareService(db_session)
        await share_service.create_share(first.uuid, "bob", Permission.READ, "alice")
        await share_service.create_share(second.uuid, "bob", Permission.WRITE, "carol")

        shares = await share_service.shared_with("bob")

        assert {share.document_id for share in shares} == {first.uuid, second.uuid}
        assert await share_service.shared_with("dave") == []
