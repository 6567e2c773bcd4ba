"""
Notekeeper Backend — Note Resource Controller (HTML)
======================================================

What:  The seven resource actions for notes, rendered as HTML.
How:   Each action resolves its note (or NotFound) first, delegates to
       NoteService, and hands a data context to a pure view function.
       NotFound and form validation failures are recovered inside the action:
       a 404 page or the re-rendered form with per-field messages.
Who:   Browsers. HTML forms can only send GET and POST, so update and delete
       are also reachable as POST /notes/{id} with a hidden `_method` field.

Routes:
    GET        /notes               list (?page=N, 10 per page)
    GET        /notes/create        showCreateForm
    POST       /notes               create → 303 /notes/{id}
    GET        /notes/{id}          show
    GET        /notes/{id}/edit     showEditForm
    PUT|PATCH  /notes/{id}          update → 303 /notes/{id}
    DELETE     /notes/{id}          delete → confirmation page
    POST       /notes/{id}          update or delete, chosen by `_method`
"""

import logging
from typing import Any, Mapping

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from app.exceptions import NotFoundError, ValidationError
from app.models.note import MAX_NOTE_ID
from app.schemas.note import NoteCreate, NoteUpdate, form_values, parse_note_form
from app.services.note_service import NoteService, get_note_service
from app.views.rendering import (
    render_create_form,
    render_destroyed,
    render_edit_form,
    render_error,
    render_index,
    render_not_found,
    render_show,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"], default_response_class=HTMLResponse)

UPDATE_METHODS = {"PUT", "PATCH"}


# ── Helpers ───────────────────────────────────────────────────────────────

def parse_note_id(raw: str) -> int:
    """Path identifier as an int; anything else cannot name a note."""
    try:
        note_id = int(raw)
    except ValueError:
        raise NotFoundError(resource="note", resource_id=raw)
    if not 1 <= note_id <= MAX_NOTE_ID:
        raise NotFoundError(resource="note", resource_id=raw)
    return note_id


def parse_page(raw: str | None) -> int:
    try:
        page = int(raw) if raw else 1
    except ValueError:
        return 1
    return max(page, 1)


def not_found_page(exc: NotFoundError) -> HTMLResponse:
    return HTMLResponse(render_not_found(exc.message), status_code=404)


def redirect_to_note(note_id: int) -> RedirectResponse:
    # 303 makes the browser follow up with GET
    return RedirectResponse(url=f"/notes/{note_id}", status_code=303)


# ── Actions ───────────────────────────────────────────────────────────────

@router.get("/", include_in_schema=False)
async def home() -> RedirectResponse:
    return RedirectResponse(url="/notes", status_code=303)


@router.get("/notes", summary="List notes")
async def list_notes(
    page: str | None = None,
    service: NoteService = Depends(get_note_service),
) -> HTMLResponse:
    """Ten notes per page, newest first."""
    result = await service.list_notes(page=parse_page(page))
    return HTMLResponse(render_index(result))


@router.get("/notes/create", summary="Show the note creation form")
async def show_create_form() -> HTMLResponse:
    return HTMLResponse(render_create_form())


@router.post("/notes", summary="Store a new note")
async def create_note(
    request: Request,
    service: NoteService = Depends(get_note_service),
):
    """
    Validate the submitted form and store the note.

    Invalid input re-renders the form (422) with the submitted values and a
    message per field; nothing is written.
    """
    form = await request.form()
    try:
        data = parse_note_form(form, NoteCreate)
    except ValidationError as exc:
        logger.info("Rejected note creation: %s", exc.field_errors)
        return HTMLResponse(
            render_create_form(form_values(form), exc.field_errors),
            status_code=422,
        )

    note = await service.create_note(data)
    return redirect_to_note(note.id)


@router.get("/notes/{note_id}", summary="Show a note")
async def show_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> HTMLResponse:
    try:
        note = await service.get_note(parse_note_id(note_id))
    except NotFoundError as exc:
        return not_found_page(exc)
    return HTMLResponse(render_show(note))


@router.get("/notes/{note_id}/edit", summary="Show the note edit form")
async def show_edit_form(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> HTMLResponse:
    try:
        note = await service.get_note(parse_note_id(note_id))
    except NotFoundError as exc:
        return not_found_page(exc)
    return HTMLResponse(render_edit_form(note))


async def _update(note_id: str, form: Mapping[str, Any], service: NoteService):
    try:
        note = await service.get_note(parse_note_id(note_id))
    except NotFoundError as exc:
        return not_found_page(exc)

    try:
        data = parse_note_form(form, NoteUpdate)
    except ValidationError as exc:
        logger.info("Rejected update of note %s: %s", note.id, exc.field_errors)
        return HTMLResponse(
            render_edit_form(note, form_values(form), exc.field_errors),
            status_code=422,
        )

    updated = await service.update_note(note.id, data)
    return redirect_to_note(updated.id)


async def _destroy(note_id: str, service: NoteService) -> HTMLResponse:
    try:
        deleted = await service.delete_note(parse_note_id(note_id))
    except NotFoundError as exc:
        return not_found_page(exc)
    return HTMLResponse(render_destroyed(deleted))


@router.api_route("/notes/{note_id}", methods=["PUT", "PATCH"], summary="Update a note")
async def update_note(
    note_id: str,
    request: Request,
    service: NoteService = Depends(get_note_service),
):
    """Replace title, body and owner; same validation as creation."""
    form = await request.form()
    return await _update(note_id, form, service)


@router.delete("/notes/{note_id}", summary="Delete a note")
async def delete_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> HTMLResponse:
    return await _destroy(note_id, service)


@router.post("/notes/{note_id}", summary="Update or delete a note from an HTML form")
async def spoofed_method(
    note_id: str,
    request: Request,
    service: NoteService = Depends(get_note_service),
):
    """Dispatch on the hidden `_method` field (PUT, PATCH or DELETE)."""
    form = await request.form()
    method = str(form.get("_method") or "").upper()

    if method in UPDATE_METHODS:
        return await _update(note_id, form, service)
    if method == "DELETE":
        return await _destroy(note_id, service)
    return HTMLResponse(
        render_error(f"Unsupported form method '{method or 'POST'}'."),
        status_code=405,
    )
