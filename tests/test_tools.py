"""Tests for /tools password checks and icon serving."""

import uuid

import pytest

from app.models import ImportantDocument, Note, ToolIcon
from app.utils.security import hash_password


@pytest.fixture
async def make_document(db, admin_user):
    async def _make(requires_password: bool, password: str | None = None) -> ImportantDocument:
        document = ImportantDocument(
            user_id=admin_user.id,
            document_name="Passport scan",
            requires_password_for_download=requires_password,
            download_password_hash=hash_password(password) if password else None,
        )
        db.add(document)
        await db.commit()
        await db.refresh(document)
        return document

    return _make


@pytest.fixture
async def locked_note(db, admin_user) -> Note:
    note = Note(
        user_id=admin_user.id,
        title="Safe combination",
        requires_password_for_view=True,
        view_password_hash=hash_password("open-sesame"),
    )
    db.add(note)
    await db.commit()
    await db.refresh(note)
    return note


class TestDocumentPassword:
    """Tests for POST /tools/important-documents/verify-password."""

    path = "/api/v1/tools/important-documents/verify-password"

    async def test_correct_password(self, client, user_headers, make_document):
        document = await make_document(True, "hunter22")
        resp = await client.post(
            self.path,
            headers=user_headers,
            json={"documentId": str(document.id), "password": "hunter22"},
        )
        assert resp.status_code == 200
        assert resp.json() == {"valid": True}

    async def test_wrong_password_is_not_an_error(self, client, user_headers, make_document):
        document = await make_document(True, "hunter22")
        resp = await client.post(
            self.path,
            headers=user_headers,
            json={"documentId": str(document.id), "password": "guess"},
        )
        assert resp.status_code == 200
        assert resp.json() == {"valid": False}

    async def test_unprotected_document_rejected(self, client, user_headers, make_document):
        document = await make_document(False, "hunter22")
        resp = await client.post(
            self.path,
            headers=user_headers,
            json={"documentId": str(document.id), "password": "hunter22"},
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "Document does not require a password"

    async def test_protected_without_hash_rejected(self, client, user_headers, make_document):
        document = await make_document(True)
        resp = await client.post(
            self.path,
            headers=user_headers,
            json={"documentId": str(document.id), "password": "anything"},
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "Password not set for this document"

    async def test_other_users_document_is_not_found(
        self, client, other_user_headers, make_document
    ):
        document = await make_document(True, "hunter22")
        resp = await client.post(
            self.path,
            headers=other_user_headers,
            json={"documentId": str(document.id), "password": "hunter22"},
        )
        assert resp.status_code == 404
        assert resp.json()["error"] == "Document not found"

    async def test_requires_session(self, client):
        resp = await client.post(
            self.path, json={"documentId": str(uuid.uuid4()), "password": "x"}
        )
        assert resp.status_code == 401

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"documentId": "not-a-uuid"},
            {"documentId": str(uuid.uuid4()), "password": ""},
        ],
    )
    async def test_session_checked_before_body(self, client, body):
        resp = await client.post(self.path, json=body)
        assert resp.status_code == 401
        assert resp.json() == {"success": False, "error": "Unauthorized"}

    async def test_unreadable_stored_hash_is_persistence_error(
        self, client, user_headers, db, admin_user
    ):
        document = ImportantDocument(
            user_id=admin_user.id,
            document_name="Birth certificate",
            requires_password_for_download=True,
            download_password_hash="not-a-bcrypt-hash",
        )
        db.add(document)
        await db.commit()

        resp = await client.post(
            self.path,
            headers=user_headers,
            json={"documentId": str(document.id), "password": "anything"},
        )
        assert resp.status_code == 500
        body = resp.json()
        assert body["success"] is False
        assert body["error"] == "Failed to verify password"

    @pytest.mark.parametrize(
        "body", [{"password": "x"}, {"documentId": "not-a-uuid", "password": "x"}]
    )
    async def test_malformed_body_rejected(self, client, user_headers, body):
        resp = await client.post(self.path, headers=user_headers, json=body)
        assert resp.status_code == 400


class TestNotePassword:
    """Tests for POST /tools/notes/verify-password."""

    path = "/api/v1/tools/notes/verify-password"

    @pytest.mark.parametrize("password,valid", [("open-sesame", True), ("close", False)])
    async def test_check(self, client, user_headers, locked_note, password, valid):
        resp = await client.post(
            self.path,
            headers=user_headers,
            json={"noteId": str(locked_note.id), "password": password},
        )
        assert resp.status_code == 200
        assert resp.json() == {"valid": valid}

    async def test_unknown_note(self, client, user_headers):
        resp = await client.post(
            self.path,
            headers=user_headers,
            json={"noteId": str(uuid.uuid4()), "password": "open-sesame"},
        )
        assert resp.status_code == 404
        assert resp.json()["error"] == "Note not found"


class TestIconServing:
    """Tests for GET /tools/icons/{id}."""

    async def _icon(self, db, tool, **fields) -> ToolIcon:
        icon = ToolIcon(tool_id=tool.id, icon_type="available", **fields)
        db.add(icon)
        await db.commit()
        await db.refresh(icon)
        return icon

    async def test_icon_name(self, client, user_headers, db, tool):
        icon = await self._icon(db, tool, icon_url="Utensils")
        resp = await client.get(f"/api/v1/tools/icons/{icon.id}", headers=user_headers)
        assert resp.status_code == 200
        assert resp.json() == {"iconName": "Utensils"}

    async def test_icon_url_redirects(self, client, user_headers, db, tool):
        icon = await self._icon(db, tool, icon_url="https://cdn.example.com/meals.svg")
        resp = await client.get(f"/api/v1/tools/icons/{icon.id}", headers=user_headers)
        assert resp.status_code == 307
        assert resp.headers["location"] == "https://cdn.example.com/meals.svg"

    async def test_uploaded_image(self, client, user_headers, db, tool):
        data = b"\x89PNG\r\n\x1a\nrest-of-image"
        icon = await self._icon(db, tool, icon_data=data)
        resp = await client.get(f"/api/v1/tools/icons/{icon.id}", headers=user_headers)
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "image/png"
        assert resp.content == data

    async def test_missing_icon_serves_placeholder(self, client, user_headers):
        resp = await client.get(f"/api/v1/tools/icons/{uuid.uuid4()}", headers=user_headers)
        assert resp.status_code == 404
        assert resp.headers["content-type"] == "image/png"
        assert resp.content.startswith(b"\x89PNG")

    async def test_requires_session(self, client):
        resp = await client.get(f"/api/v1/tools/icons/{uuid.uuid4()}")
        assert resp.status_code == 401

    async def test_session_checked_before_path(self, client):
        resp = await client.get("/api/v1/tools/icons/not-a-uuid")
        assert resp.status_code == 401
