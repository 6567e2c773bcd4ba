"""
Notekeeper Backend — Note Repositories
========================================

What:  Storage primitives for notes: query by id, ordered page, count,
       insert, update, delete.
How:   NoteRepository defines the async contract. SQLAlchemyNoteRepository
       works on the request-scoped AsyncSession from get_db_session (which
       commits or rolls back); it only flushes so ids and timestamps are
       assigned before the response is built.
Who:   Used by NoteService; provided to routes by get_note_repository().

Ordering:
    Listing is newest first. Notes created in the same instant are ordered
    by id (descending), so consecutive pages never overlap.
"""

from abc import ABC, abstractmethod
from itertools import count as counter
from typing import Dict, List, Optional

from fastapi import Depends
from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.models.note import Note, utcnow
from app.schemas.note import NoteCreate, NoteUpdate


class NoteRepository(ABC):
    """Abstract repository contract for note storage backends."""

    @abstractmethod
    async def get(self, note_id: int) -> Optional[Note]:
        """Return the note with `note_id`, or None if it does not exist."""

    @abstractmethod
    async def list_page(self, offset: int, limit: int) -> List[Note]:
        """Return up to `limit` notes, newest first, skipping `offset`."""

    @abstractmethod
    async def count(self) -> int:
        """Return the total number of stored notes."""

    @abstractmethod
    async def add(self, data: NoteCreate) -> Note:
        """Persist a new note and return it with id and timestamps assigned."""

    @abstractmethod
    async def update(self, note: Note, data: NoteUpdate) -> Note:
        """Replace the attributes of an existing note and refresh updated_at."""

    @abstractmethod
    async def delete(self, note: Note) -> None:
        """Permanently remove an existing note."""


class SQLAlchemyNoteRepository(NoteRepository):
    """
    Note storage backed by an async SQLAlchemy session.

    Query plans:
        get:       SELECT ... WHERE id = :id (primary key lookup)
        list_page: SELECT ... ORDER BY created_at DESC, id DESC LIMIT :n OFFSET :m
                   (served by idx_notes_created_at)
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, note_id: int) -> Optional[Note]:
        result = await self.session.execute(select(Note).where(Note.id == note_id))
        return result.scalar_one_or_none()

    async def list_page(self, offset: int, limit: int) -> List[Note]:
        query = (
            select(Note)
            .order_by(desc(Note.created_at), desc(Note.id))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(Note.id)))
        return result.scalar() or 0

    async def add(self, data: NoteCreate) -> Note:
        note = Note(**data.model_dump())
        self.session.add(note)
        await self.session.flush()  # assigns id without committing
        return note

    async def update(self, note: Note, data: NoteUpdate) -> Note:
        for field, value in data.model_dump().items():
            setattr(note, field, value)
        # Set explicitly: onupdate does not fire when no column value changed
        note.updated_at = utcnow()
        await self.session.flush()
        return note

    async def delete(self, note: Note) -> None:
        await self.session.delete(note)
        await self.session.flush()


class InMemoryNoteRepository(NoteRepository):
    """
    Dict-backed note storage with the same ordering rules as the database.

    Used by the controller tests in place of SQLAlchemyNoteRepository.
    Ids start at 1 and are never reused.
    """

    def __init__(self) -> None:
        self._items: Dict[int, Note] = {}
        self._ids = counter(1)

    async def get(self, note_id: int) -> Optional[Note]:
        return self._items.get(note_id)

    async def list_page(self, offset: int, limit: int) -> List[Note]:
        ordered = sorted(
            self._items.values(),
            key=lambda n: (n.created_at, n.id),
            reverse=True,
        )
        return ordered[offset:offset + limit]

    async def count(self) -> int:
        return len(self._items)

    async def add(self, data: NoteCreate) -> Note:
        now = utcnow()
        note = Note(id=next(self._ids), created_at=now, updated_at=now, **data.model_dump())
        self._items[note.id] = note
        return note

    async def update(self, note: Note, data: NoteUpdate) -> Note:
        for field, value in data.model_dump().items():
            setattr(note, field, value)
        note.updated_at = utcnow()
        return note

    async def delete(self, note: Note) -> None:
        self._items.pop(note.id, None)


async def get_note_repository(
    session: AsyncSession = Depends(get_db_session),
) -> NoteRepository:
    """FastAPI dependency: a repository bound to the request's session."""
    return SQLAlchemyNoteRepository(session)
