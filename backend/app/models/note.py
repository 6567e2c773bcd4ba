"""
Notekeeper Backend — Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by SQLAlchemyNoteRepository for CRUD operations and by Alembic.

Table Design:
    - Integer primary key assigned by the database on insert
    - title / body: the canonical note attributes
    - user_id: optional owner reference (no users table; authentication is
      out of scope, so there is no foreign key constraint)
    - created_at / updated_at: UTC, set by the persistence layer only

    Index on created_at DESC serves the listing query (newest first).
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


# Largest value an Integer (int4) id column can hold
MAX_NOTE_ID = 2**31 - 1


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A user-authored text note.

    Lifecycle:
        1. Created by the store action (id and timestamps assigned here)
        2. Read by the index (paginated) and show actions
        3. Attributes replaced by the update action (updated_at refreshed)
        4. Permanently removed by the destroy action

    Query Patterns:
        - List page: SELECT ... ORDER BY created_at DESC, id DESC LIMIT 10 OFFSET :n
        - Get single note: SELECT ... WHERE id = :id
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Unique identifier assigned on insert",
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Short note title",
    )

    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Full note text",
    )

    user_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        index=True,
        comment="Owner reference; NULL for notes without an owner",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was last modified (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, created_at='{self.created_at}')>"
