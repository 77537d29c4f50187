"""
Unit Tests for domain entities
"""

import uuid

import pytest

from collabdocs.domains.documents.entities import Document
from collabdocs.domains.templates.entities import DocumentTemplate
from collabdocs.domains.versions.entities import DocumentVersion


@pytest.mark.unit
class TestDocument:

    def test_create_document(self):
        document = Document.create_document(title="Notes", owner="alice", content="one two")
        assert isinstance(document.uuid, uuid.UUID)
        assert document.is_owned_by("alice")
        assert not document.is_owned_by("bob")

    def test_update_content_reports_change(self):
        document = Document.create_document(title="Notes", owner="alice", content="a")
        previous = document.updated_at

        assert document.update_content("b") is True
        assert document.content == "b"
        assert document.updated_at >= previous
        assert document.update_content("b") is False

    def test_word_count(self):
        assert Document.create_document("t", "alice", "").get_word_count() == 0
        assert Document.create_document("t", "alice", "   \n ").get_word_count() == 0
        assert Document.create_document("t", "alice", "hello big\nworld").get_word_count() == 3

    def test_content_length(self):
        assert Document.create_document("t", "alice", "hello").get_content_length() == 5

    def test_identity_by_uuid(self):
        document = Document.create_document("t", "alice")
        copy = Document(uuid=document.uuid, title="other", owner="bob")
        assert document == copy
        assert len({document, copy}) == 1


@pytest.mark.unit
class TestDocumentVersion:

    def test_diff_of_equal_content_is_empty(self):
        doc_id = uuid.uuid4()
        first = DocumentVersion.create_version(doc_id, "same\n", "alice")
        second = DocumentVersion.create_version(doc_id, "same\n", "bob")
        assert first.get_diff(second) == ""

    def test_unified_diff(self):
        doc_id = uuid.uuid4()
        first = DocumentVersion.create_version(doc_id, "line one\nline two\n", "alice")
        second = DocumentVersion.create_version(doc_id, "line one\nline 2\n", "bob")

        diff = first.get_diff(second)

        assert "-line two" in diff
        assert "+line 2" in diff
        assert f"version {first.uuid}" in diff

    def test_timestamp_defaults_to_now(self):
        version = DocumentVersion.create_version(uuid.uuid4(), "", "alice")
        assert version.timestamp is not None


@pytest.mark.unit
class TestDocumentTemplate:

    def test_public_template_visible_to_everyone(self):
        template = DocumentTemplate.create_template("Memo", "office", "alice")
        assert template.is_visible_to("bob")
        assert not template.can_modify("bob")
        assert template.can_modify("alice")

    def test_private_template_visible_to_author_only(self):
        template = DocumentTemplate.create_template("Memo", "office", "alice", is_public=False)
        assert template.is_visible_to("alice")
        assert not template.is_visible_to("bob")

    def test_update_keeps_unset_fields(self):
        template = DocumentTemplate.create_template("Memo", "office", "alice", content="body")
        template.update(name="Letter", is_public=False)

        assert template.name == "Letter"
        assert template.content == "body"
        assert template.category == "office"
        assert template.is_public is False
