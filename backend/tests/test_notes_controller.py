"""
Notekeeper Backend — HTML Resource Controller Tests
=====================================================

What:  The seven /notes actions over HTTP, including form method spoofing,
       validation re-rendering and NotFound pages.
How:   test_client routes the repository dependency to an in-memory store.
"""

import pytest
from unittest.mock import AsyncMock
from sqlalchemy.exc import OperationalError

from app.repositories.notes import get_note_repository
from app.schemas.note import NoteCreate


async def seed_notes(repository, count):
    for i in range(count):
        await repository.add(NoteCreate(title=f"Note {i + 1}", body=f"Body {i + 1}"))


class TestIndex:

    @pytest.mark.asyncio
    async def test_root_redirects_to_listing(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 303
        assert response.headers["location"] == "/notes"

    @pytest.mark.asyncio
    async def test_empty_listing(self, test_client):
        response = await test_client.get("/notes")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "No notes yet." in response.text
        assert "Page 1 of 1" in response.text

    @pytest.mark.asyncio
    async def test_listing_pages_by_ten(self, test_client, memory_repository):
        await seed_notes(memory_repository, 23)

        first = await test_client.get("/notes")
        last = await test_client.get("/notes", params={"page": 3})

        assert first.text.count('class="note" id=') == 10
        assert 'id="note-23"' in first.text
        assert 'id="note-14"' in first.text
        assert 'id="note-13"' not in first.text
        assert 'href="/notes?page=2" rel="next"' in first.text
        assert last.text.count('class="note" id=') == 3
        assert "Page 3 of 3" in last.text
        assert 'rel="next"' not in last.text
        assert 'href="/notes?page=2" rel="prev"' in last.text

    @pytest.mark.asyncio
    async def test_invalid_page_falls_back_to_first(self, test_client, memory_repository):
        await seed_notes(memory_repository, 2)

        response = await test_client.get("/notes", params={"page": "abc"})

        assert response.status_code == 200
        assert "Page 1 of 1" in response.text


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_form_is_empty(self, test_client):
        response = await test_client.get("/notes/create")

        assert response.status_code == 200
        assert 'action="/notes"' in response.text
        assert 'value=""' in response.text
        assert "field-error" not in response.text

    @pytest.mark.asyncio
    async def test_store_redirects_to_new_note(self, test_client, memory_repository):
        response = await test_client.post(
            "/notes", data={"title": "Groceries", "body": "Milk", "user_id": "4"}
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/notes/1"
        stored = await memory_repository.get(1)
        assert (stored.title, stored.body, stored.user_id) == ("Groceries", "Milk", 4)

    @pytest.mark.asyncio
    async def test_store_rejects_invalid_input_without_persisting(self, test_client, memory_repository):
        response = await test_client.post("/notes", data={"title": "   ", "body": ""})

        assert response.status_code == 422
        assert "Title is required." in response.text
        assert "Body is required." in response.text
        assert await memory_repository.count() == 0

    @pytest.mark.asyncio
    async def test_rejected_form_keeps_submitted_values(self, test_client):
        response = await test_client.post(
            "/notes", data={"title": "Kept <b>", "body": "", "user_id": "abc"}
        )

        assert response.status_code == 422
        assert 'value="Kept &lt;b&gt;"' in response.text
        assert "Owner must be a whole number." in response.text


class TestShowAndEdit:

    @pytest.mark.asyncio
    async def test_show_renders_note(self, test_client, memory_repository):
        await memory_repository.add(NoteCreate(title="A", body="B", user_id=2))

        response = await test_client.get("/notes/1")

        assert response.status_code == 200
        assert '<h1 class="note-title">A</h1>' in response.text
        assert '<div class="note-body">B</div>' in response.text
        assert '<dd class="note-owner">2</dd>' in response.text

    @pytest.mark.asyncio
    async def test_edit_form_is_prefilled(self, test_client, memory_repository):
        await memory_repository.add(NoteCreate(title="A", body="B"))

        response = await test_client.get("/notes/1/edit")

        assert response.status_code == 200
        assert 'value="A"' in response.text
        assert ">B</textarea>" in response.text
        assert 'name="_method" value="PUT"' in response.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/notes/99", "/notes/99/edit", "/notes/abc", "/notes/0/edit"])
    async def test_missing_note_renders_not_found(self, test_client, path):
        response = await test_client.get(path)

        assert response.status_code == 404
        assert "404 Not Found" in response.text


class TestUpdate:

    @pytest.mark.asyncio
    async def test_put_replaces_attributes(self, test_client, memory_repository):
        await memory_repository.add(NoteCreate(title="A", body="B", user_id=1))

        response = await test_client.put("/notes/1", data={"title": "A2", "body": "B2"})

        assert response.status_code == 303
        assert response.headers["location"] == "/notes/1"
        stored = await memory_repository.get(1)
        assert (stored.title, stored.body, stored.user_id) == ("A2", "B2", None)

    @pytest.mark.asyncio
    async def test_spoofed_patch_from_html_form(self, test_client, memory_repository):
        await memory_repository.add(NoteCreate(title="A", body="B"))

        response = await test_client.post(
            "/notes/1", data={"_method": "patch", "title": "Edited", "body": "B"}
        )

        assert response.status_code == 303
        assert (await memory_repository.get(1)).title == "Edited"

    @pytest.mark.asyncio
    async def test_update_twice_is_idempotent(self, test_client, memory_repository):
        await memory_repository.add(NoteCreate(title="A", body="B"))
        form = {"title": "Same", "body": "Same body", "user_id": "9"}

        await test_client.put("/notes/1", data=form)
        first = (await test_client.get("/notes/1")).text
        await test_client.put("/notes/1", data=form)
        stored = await memory_repository.get(1)

        assert (stored.title, stored.body, stored.user_id) == ("Same", "Same body", 9)
        assert '<h1 class="note-title">Same</h1>' in first

    @pytest.mark.asyncio
    async def test_invalid_update_rerenders_edit_form(self, test_client, memory_repository):
        await memory_repository.add(NoteCreate(title="A", body="B"))

        response = await test_client.put("/notes/1", data={"title": "x" * 256, "body": "B"})

        assert response.status_code == 422
        assert "Title may not be longer than 255 characters." in response.text
        assert (await memory_repository.get(1)).title == "A"

    @pytest.mark.asyncio
    async def test_update_missing_note(self, test_client):
        response = await test_client.put("/notes/5", data={"title": "A", "body": "B"})

        assert response.status_code == 404


class TestDestroy:

    @pytest.mark.asyncio
    async def test_delete_renders_confirmation(self, test_client, memory_repository):
        await memory_repository.add(NoteCreate(title="Old list", body="B"))

        response = await test_client.delete("/notes/1")

        assert response.status_code == 200
        assert "Note deleted" in response.text
        assert "Old list" in response.text
        assert await memory_repository.get(1) is None

    @pytest.mark.asyncio
    async def test_spoofed_delete_from_html_form(self, test_client, memory_repository):
        await memory_repository.add(NoteCreate(title="A", body="B"))

        response = await test_client.post("/notes/1", data={"_method": "DELETE"})

        assert response.status_code == 200
        assert await memory_repository.count() == 0

    @pytest.mark.asyncio
    async def test_delete_missing_note(self, test_client):
        assert (await test_client.delete("/notes/3")).status_code == 404
        assert (await test_client.post("/notes/3", data={"_method": "DELETE"})).status_code == 404

    @pytest.mark.asyncio
    async def test_post_without_method_override_is_rejected(self, test_client, memory_repository):
        await memory_repository.add(NoteCreate(title="A", body="B"))

        response = await test_client.post("/notes/1", data={"title": "x"})

        assert response.status_code == 405
        assert (await memory_repository.get(1)).title == "A"


class TestScenario:

    @pytest.mark.asyncio
    async def test_create_show_delete_show(self, test_client):
        created = await test_client.post("/notes", data={"title": "A", "body": "B"})
        assert created.headers["location"] == "/notes/1"

        shown = await test_client.get("/notes/1")
        assert '<h1 class="note-title">A</h1>' in shown.text

        deleted = await test_client.delete("/notes/1")
        assert deleted.status_code == 200

        assert (await test_client.get("/notes/1")).status_code == 404


class TestErrors:

    @pytest.mark.asyncio
    async def test_unknown_path_renders_html_404(self, test_client):
        response = await test_client.get("/no-such-page")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/html")

    @pytest.mark.asyncio
    async def test_database_failure_renders_error_page(self, test_client):
        from app.main import app

        broken = AsyncMock()
        broken.count.side_effect = OperationalError("SELECT", {}, Exception("down"))
        app.dependency_overrides[get_note_repository] = lambda: broken

        response = await test_client.get("/notes")

        assert response.status_code == 500
        assert "Could not retrieve notes" in response.text
        assert "down" not in response.text

    @pytest.mark.asyncio
    async def test_request_id_header_is_returned(self, test_client):
        response = await test_client.get("/notes", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_escaped_validation_error_is_answered_as_json(self):
        from httpx import ASGITransport, AsyncClient

        from app.exceptions import ValidationError
        from app.main import create_app

        app = create_app()

        @app.get("/notes-check")
        async def failing():
            raise ValidationError("bad input", field_errors={"title": "Title is required."})

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/notes-check")

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestOutOfRangeIdentifiers:
    """Ids and pages larger than the integer column are answered without a database error."""

    TOO_LARGE = "2147483648"
    HUGE = "99999999999999999999"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("note_id", [TOO_LARGE, HUGE])
    async def test_show_and_edit_are_not_found(self, sqlite_client, note_id):
        shown = await sqlite_client.get(f"/notes/{note_id}")
        edit = await sqlite_client.get(f"/notes/{note_id}/edit")

        assert shown.status_code == 404
        assert edit.status_code == 404
        assert "404 Not Found" in shown.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("note_id", [TOO_LARGE, HUGE])
    async def test_delete_is_not_found(self, sqlite_client, note_id):
        deleted = await sqlite_client.delete(f"/notes/{note_id}")
        spoofed = await sqlite_client.post(f"/notes/{note_id}", data={"_method": "DELETE"})

        assert deleted.status_code == 404
        assert spoofed.status_code == 404

    @pytest.mark.asyncio
    async def test_update_is_not_found(self, sqlite_client):
        response = await sqlite_client.put(
            f"/notes/{self.HUGE}", data={"title": "A", "body": "B", "user_id": ""}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page", [str(10**20), HUGE])
    async def test_huge_page_is_empty_listing(self, sqlite_client, page):
        await sqlite_client.post("/notes", data={"title": "A", "body": "B", "user_id": ""})

        response = await sqlite_client.get("/notes", params={"page": page})

        assert response.status_code == 200
        assert 'class="note" id=' not in response.text
