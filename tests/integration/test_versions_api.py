"""
Integration Tests for the versions and templates API
Tests for collabdocs/api/http/versions.py and collabdocs/api/http/templates.py
"""

import uuid

import pytest
from httpx import AsyncClient


async def create_document(client: AsyncClient, headers: dict, content="one\n") -> str:
    response = await client.post("/documents/", json={"title": "Doc", "content": content}, headers=headers)
    assert response.status_code == 201
    return response.json()["uuid"]


async def latest_version(client: AsyncClient, document_id: str, headers: dict) -> dict:
    response = await client.get(f"/documents/{document_id}/versions", headers=headers)
    return response.json()["versions"][0]


@pytest.mark.integration
class TestVersionsAPI:

    @pytest.mark.asyncio
    async def test_record_version(self, client: AsyncClient, alice_headers: dict):
        document_id = await create_document(client, alice_headers)

        response = await client.post(
            "/versions/",
            json={"document_id": document_id, "content": "draft"},
            headers=alice_headers
        )

        assert response.status_code == 201
        body = response.json()
        assert body["edited_by"] == "alice"
        assert body["content"] == "draft"
        # the live document is not changed by a snapshot
        document = (await client.get(f"/documents/{document_id}", headers=alice_headers)).json()
        assert document["content"] == "one\n"

    @pytest.mark.asyncio
    async def test_record_version_without_write(self, client: AsyncClient, alice_headers: dict, bob_headers: dict):
        document_id = await create_document(client, alice_headers)

        response = await client.post(
            "/versions/",
            json={"document_id": document_id, "content": "draft"},
            headers=bob_headers
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_get_version_is_read_only(self, client: AsyncClient, alice_headers: dict):
        document_id = await create_document(client, alice_headers)
        first = await latest_version(client, document_id, alice_headers)
        await client.put(f"/documents/{document_id}", json={"content": "two\n"}, headers=alice_headers)

        response = await client.get(f"/versions/{first['uuid']}", headers=alice_headers)

        assert response.status_code == 200
        assert response.json()["content"] == "one\n"
        document = (await client.get(f"/documents/{document_id}", headers=alice_headers)).json()
        assert document["content"] == "two\n"

    @pytest.mark.asyncio
    async def test_get_version_requires_read(self, client: AsyncClient, alice_headers: dict, bob_headers: dict):
        document_id = await create_document(client, alice_headers)
        first = await latest_version(client, document_id, alice_headers)

        response = await client.get(f"/versions/{first['uuid']}", headers=bob_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_version(self, client: AsyncClient, alice_headers: dict):
        response = await client.get(f"/versions/{uuid.uuid4()}", headers=alice_headers)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_diff(self, client: AsyncClient, alice_headers: dict):
        document_id = await create_document(client, alice_headers)
        first = await latest_version(client, document_id, alice_headers)
        await client.put(f"/documents/{document_id}", json={"content": "two\n"}, headers=alice_headers)
        second = await latest_version(client, document_id, alice_headers)

        response = await client.get(f"/versions/{first['uuid']}/diff/{second['uuid']}", headers=alice_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["document_id"] == document_id
        assert "-one" in body["diff"]
        assert "+two" in body["diff"]

    @pytest.mark.asyncio
    async def test_diff_across_documents(self, client: AsyncClient, alice_headers: dict):
        first = await latest_version(client, await create_document(client, alice_headers), alice_headers)
        second = await latest_version(client, await create_document(client, alice_headers), alice_headers)

        response = await client.get(f"/versions/{first['uuid']}/diff/{second['uuid']}", headers=alice_headers)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_contributions(self, client: AsyncClient, alice_headers: dict, bob_headers: dict):
        await create_document(client, alice_headers)
        await create_document(client, alice_headers)

        response = await client.get("/versions/contributions/alice", headers=alice_headers)

        assert response.status_code == 200
        assert len(response.json()["versions"]) == 2
        assert (await client.get("/versions/contributions/alice", headers=bob_headers)).status_code == 403


@pytest.mark.integration
class TestTemplatesAPI:

    @pytest.mark.asyncio
    async def test_template_flow(self, client: AsyncClient, alice_headers: dict, bob_headers: dict):
        response = await client.post(
            "/templates/",
            json={"name": "Minutes", "category": "office", "content": "Agenda:\n"},
            headers=alice_headers
        )
        assert response.status_code == 201
        template = response.json()
        assert template["is_public"] is True

        listed = (await client.get("/templates/", headers=bob_headers)).json()
        assert [t["uuid"] for t in listed["templates"]] == [template["uuid"]]

        by_category = (await client.get("/templates/category/office", headers=bob_headers)).json()
        assert len(by_category["templates"]) == 1

        response = await client.post(
            f"/templates/{template['uuid']}/documents",
            json={"title": "Monday"},
            headers=bob_headers
        )
        assert response.status_code == 201
        assert response.json()["owner"] == "bob"
        assert response.json()["content"] == "Agenda:\n"

    @pytest.mark.asyncio
    async def test_private_template_hidden(self, client: AsyncClient, alice_headers: dict, bob_headers: dict):
        response = await client.post(
            "/templates/",
            json={"name": "Secret", "category": "office", "is_public": False},
            headers=alice_headers
        )
        template_id = response.json()["uuid"]

        assert (await client.get(f"/templates/{template_id}", headers=bob_headers)).status_code == 404
        assert (await client.get(f"/templates/{template_id}", headers=alice_headers)).status_code == 200

    @pytest.mark.asyncio
    async def test_only_author_updates(self, client: AsyncClient, alice_headers: dict, bob_headers: dict):
        response = await client.post(
            "/templates/",
            json={"name": "Minutes", "category": "office"},
            headers=alice_headers
        )
        url = f"/templates/{response.json()['uuid']}"

        assert (await client.put(url, json={"name": "Hijacked"}, headers=bob_headers)).status_code == 403
        assert (await client.delete(url, headers=bob_headers)).status_code == 403

        response = await client.put(url, json={"name": "Standup"}, headers=alice_headers)
        assert response.status_code == 200
        assert response.json()["name"] == "Standup"

        assert (await client.delete(url, headers=alice_headers)).status_code == 204
