"""
Notekeeper Backend — Note Service (Business Logic)
====================================================

What:  The CRUD operations behind both the HTML controller and the JSON API.
How:   Works through an injected NoteRepository; every operation that takes
       an identifier resolves it first and raises NotFoundError when it does
       not exist.
Who:   Called by route handlers; calls the repository.
When:  Once per request, inside the session-per-request transaction.

Error Handling Strategy:
    NotFoundError propagates as-is. SQLAlchemy failures are logged with
    detail and re-raised as DatabaseError with a generic message.
"""

import logging
import math

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import DatabaseError, NotFoundError
from app.models.note import MAX_NOTE_ID, Note
from app.repositories.notes import NoteRepository, get_note_repository
from app.schemas.note import (
    NoteCreate,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
)

logger = logging.getLogger(__name__)

# Fixed listing page size
PER_PAGE = 10


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes(): one page of notes, newest first
        - get_note(): single note retrieval with not-found handling
        - create_note() / update_note() / delete_note(): mutations
    """

    def __init__(self, repository: NoteRepository) -> None:
        self.repository = repository

    async def _require(self, note_id: int) -> Note:
        # Out-of-range ids cannot be stored and must not reach the driver
        if not 1 <= note_id <= MAX_NOTE_ID:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        note = await self.repository.get(note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return note

    async def list_notes(self, page: int = 1) -> NoteListResponse:
        """
        Return page `page` (1-based) of notes ordered by creation time, newest first.

        Pages below 1 are treated as page 1. A page past the end is empty
        rather than an error.
        """
        page = max(page, 1)
        offset = (page - 1) * PER_PAGE
        try:
            total = await self.repository.count()
            # No table holds more rows than ids, so larger offsets are empty
            if offset >= min(total, MAX_NOTE_ID):
                notes = []
            else:
                notes = await self.repository.list_page(offset=offset, limit=PER_PAGE)
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"page": page},
            )

        last_page = max(1, math.ceil(total / PER_PAGE))
        return NoteListResponse(
            items=[NoteResponse.model_validate(note) for note in notes],
            page=page,
            per_page=PER_PAGE,
            total=total,
            last_page=last_page,
            has_more=page < last_page,
        )

    async def get_note(self, note_id: int) -> NoteResponse:
        """
        Retrieve a single note by ID.

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            note = await self._require(note_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": note_id},
            )
        return NoteResponse.model_validate(note)

    async def create_note(self, data: NoteCreate) -> NoteResponse:
        """Persist a new note from already-validated input."""
        try:
            note = await self.repository.add(data)
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Note %s created", note.id)
        return NoteResponse.model_validate(note)

    async def update_note(self, note_id: int, data: NoteUpdate) -> NoteResponse:
        """
        Replace the attributes of an existing note.

        Raises:
            NotFoundError: Note with given ID does not exist
            DatabaseError: Write failed
        """
        try:
            note = await self._require(note_id)
            note = await self.repository.update(note, data)
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": note_id},
            )
        logger.info("Note %s updated", note_id)
        return NoteResponse.model_validate(note)

    async def delete_note(self, note_id: int) -> NoteResponse:
        """
        Permanently remove a note and return what was deleted.

        Raises:
            NotFoundError: Note with given ID does not exist
            DatabaseError: Delete failed
        """
        try:
            note = await self._require(note_id)
            deleted = NoteResponse.model_validate(note)
            await self.repository.delete(note)
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id},
            )
        logger.info("Note %s deleted", note_id)
        return deleted


def get_note_service(
    repository: NoteRepository = Depends(get_note_repository),
) -> NoteService:
    """FastAPI dependency: a NoteService over the request's repository."""
    return NoteService(repository)
