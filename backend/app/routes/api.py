"""
Notekeeper Backend — Notes JSON API
=====================================

What:  The note resource actions for programmatic clients, as JSON.
How:   Same NoteService as the HTML controller. Errors propagate to the
       global exception handlers, which answer with the ErrorResponse
       envelope. Bodies failing schema validation get FastAPI's 422.
Who:   Scripts and frontends that prefer JSON over HTML.
"""

import logging

from fastapi import APIRouter, Depends, Query, Response

from app.schemas.note import (
    ErrorResponse,
    NoteCreate,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
)
from app.services.note_service import NoteService, get_note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes API"])


@router.get(
    "/notes",
    response_model=NoteListResponse,
    responses={
        200: {"description": "One page of notes, newest first", "model": NoteListResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List notes (10 per page)",
)
async def list_notes(
    response: Response,
    page: int = Query(default=1, ge=1, description="Page number (1-based)"),
    service: NoteService = Depends(get_note_service),
) -> NoteListResponse:
    result = await service.list_notes(page=page)
    response.headers["X-Total-Count"] = str(result.total)
    return result


@router.post(
    "/notes",
    status_code=201,
    response_model=NoteResponse,
    responses={
        201: {"description": "Note created", "model": NoteResponse},
        422: {"description": "Invalid note attributes"},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return await service.create_note(payload)


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: int,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return await service.get_note(note_id)


@router.api_route(
    "/notes/{note_id}",
    methods=["PUT", "PATCH"],
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        422: {"description": "Invalid note attributes"},
    },
    summary="Replace a note's attributes",
)
async def update_note(
    note_id: int,
    payload: NoteUpdate,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return await service.update_note(note_id, payload)


@router.delete(
    "/notes/{note_id}",
    status_code=204,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: int,
    service: NoteService = Depends(get_note_service),
) -> Response:
    await service.delete_note(note_id)
    return Response(status_code=204)
