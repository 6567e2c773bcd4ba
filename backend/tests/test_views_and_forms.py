"""
Notekeeper Backend — View and Form Parsing Tests
==================================================

What:  Pure render functions and parse_note_form(), without HTTP.
"""

from datetime import datetime, timezone

import pytest

from app.exceptions import ValidationError
from app.schemas.note import NoteListResponse, NoteResponse, NoteUpdate, parse_note_form
from app.views.rendering import (
    render_create_form,
    render_destroyed,
    render_edit_form,
    render_index,
    render_not_found,
)


@pytest.fixture
def note():
    now = datetime(2026, 1, 2, 3, 4, tzinfo=timezone.utc)
    return NoteResponse(
        id=3, title="<script>x</script>", body="Body", user_id=None,
        created_at=now, updated_at=now,
    )


class TestRendering:

    def test_index_escapes_user_content(self, note):
        page = NoteListResponse(items=[note], page=1, per_page=10, total=1, last_page=1, has_more=False)

        html = render_index(page)

        assert "<script>x</script>" not in html
        assert "&lt;script&gt;x&lt;/script&gt;" in html
        assert 'href="/notes/3/edit"' in html

    def test_create_form_shows_field_errors(self):
        html = render_create_form({"title": "t"}, {"body": "Body is required."})

        assert 'value="t"' in html
        assert 'data-field="body">Body is required.' in html
        assert 'data-field="title"' not in html

    def test_edit_form_prefers_submitted_values(self, note):
        html = render_edit_form(note, {"title": "typed", "body": "", "user_id": ""}, {"body": "Body is required."})

        assert 'value="typed"' in html
        assert 'action="/notes/3"' in html

    def test_destroyed_and_not_found(self, note):
        assert "permanently deleted" in render_destroyed(note)
        assert "Nothing here" in render_not_found("Nothing here")


class TestParseNoteForm:

    def test_valid_form(self):
        data = parse_note_form({"title": " A ", "body": "B", "user_id": " 5 ", "_method": "PUT"}, NoteUpdate)

        assert isinstance(data, NoteUpdate)
        assert (data.title, data.body, data.user_id) == ("A", "B", 5)

    def test_blank_owner_means_none(self):
        assert parse_note_form({"title": "A", "body": "B", "user_id": ""}).user_id is None

    def test_collects_every_field_error(self):
        with pytest.raises(ValidationError) as excinfo:
            parse_note_form({"user_id": "0"})

        assert excinfo.value.field_errors == {
            "title": "Title is required.",
            "body": "Body is required.",
            "user_id": "Owner must be at least 1.",
        }
        assert excinfo.value.context["field_errors"] == excinfo.value.field_errors
