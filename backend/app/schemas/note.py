"""
Notekeeper Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the note schema, the API contract, and the
       translation of submitted HTML forms into validated input.
How:   FastAPI validates JSON bodies against NoteCreate/NoteUpdate directly;
       HTML forms go through parse_note_form(), which raises the application
       ValidationError with per-field messages instead of a 422 JSON body.
Who:   Used by NoteService, both controllers, and the views.
"""

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

import pydantic
from pydantic import BaseModel, Field

from app.exceptions import ValidationError

TITLE_MAX_LENGTH = 255
BODY_MAX_LENGTH = 10_000


# ══════════════════════════════════════════════════════════════════════════
# Input Models: what the client submits
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    What:  Attributes accepted when storing a new note.
    Who:   POST /notes (form) and POST /api/notes (JSON).

    Surrounding whitespace is stripped before length checks, so a title made
    only of spaces is rejected as missing. Timestamps and id are never accepted.
    """
    title: str = Field(
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Short note title",
    )
    body: str = Field(
        min_length=1,
        max_length=BODY_MAX_LENGTH,
        description="Full note text",
    )
    user_id: Optional[int] = Field(
        default=None,
        ge=1,
        description="Owner reference (optional)",
    )

    model_config = {"str_strip_whitespace": True, "extra": "ignore"}


class NoteUpdate(NoteCreate):
    """
    Attributes accepted when updating a note.

    Updates replace every attribute, so the same input applied twice leaves
    the stored note unchanged apart from its modification timestamp.
    """


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a stored note."""
    id: int = Field(description="Unique note identifier")
    title: str = Field(description="Short note title")
    body: str = Field(description="Full note text")
    user_id: Optional[int] = Field(default=None, description="Owner reference")
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="When the note was last modified (UTC ISO 8601)")

    model_config = {"from_attributes": True}


class NoteListResponse(BaseModel):
    """
    What:  One page of notes, newest first.
    Who:   Returned by NoteService.list_notes(); rendered by the index view
           and serialized by GET /api/notes.

    Page-number pagination with a fixed page size: `page` is 1-based and
    `last_page` is at least 1 even when there are no notes.
    """
    items: List[NoteResponse] = Field(description="Notes on this page")
    page: int = Field(description="Current page number (1-based)")
    per_page: int = Field(description="Page size")
    total: int = Field(description="Total number of notes")
    last_page: int = Field(description="Number of the last page")
    has_more: bool = Field(description="Whether a next page exists")

    @property
    def has_previous(self) -> bool:
        return self.page > 1


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for the JSON API.

    Example:
        {
            "error": "not_found",
            "message": "Note with ID '7' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


# ══════════════════════════════════════════════════════════════════════════
# Form Parsing
# ══════════════════════════════════════════════════════════════════════════

FIELD_LABELS = {"title": "Title", "body": "Body", "user_id": "Owner"}

NOTE_FORM_FIELDS = ("title", "body", "user_id")

SchemaT = TypeVar("SchemaT", bound=NoteCreate)


def _friendly_message(error: Dict[str, Any]) -> str:
    """Turn one pydantic error entry into a message fit for a form."""
    field = str(error["loc"][0]) if error.get("loc") else ""
    label = FIELD_LABELS.get(field, field.capitalize() or "Value")
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind in ("missing", "string_too_short"):
        return f"{label} is required."
    if kind == "string_too_long":
        return f"{label} may not be longer than {ctx.get('max_length')} characters."
    if kind in ("int_parsing", "int_from_float", "int_type"):
        return f"{label} must be a whole number."
    if kind == "greater_than_equal":
        return f"{label} must be at least {ctx.get('ge')}."
    return str(error.get("msg", "Invalid value."))


def form_values(form: Mapping[str, Any]) -> Dict[str, str]:
    """Submitted note fields as strings, for re-rendering a rejected form."""
    return {name: str(form.get(name) or "") for name in NOTE_FORM_FIELDS}


def parse_note_form(form: Mapping[str, Any], schema: Type[SchemaT] = NoteCreate) -> SchemaT:
    """
    Validate submitted form fields against the note schema.

    An empty owner field means "no owner". Extra fields (`_method`, etc.) are
    ignored.

    Raises:
        ValidationError: with `field_errors` naming every invalid field.
    """
    data: Dict[str, Any] = {
        name: form.get(name)
        for name in ("title", "body")
        if form.get(name) is not None
    }
    raw_user_id = form.get("user_id")
    if raw_user_id is not None and str(raw_user_id).strip():
        data["user_id"] = str(raw_user_id).strip()

    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as exc:
        field_errors: Dict[str, str] = {}
        for error in exc.errors():
            field = str(error["loc"][0]) if error.get("loc") else "__all__"
            field_errors.setdefault(field, _friendly_message(error))
        raise ValidationError(
            message="The submitted note is invalid",
            field_errors=field_errors,
        ) from exc
