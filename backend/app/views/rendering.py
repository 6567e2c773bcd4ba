"""
Notekeeper Backend — HTML Views
=================================

What:  Pure rendering functions: data context in, HTML string out.
How:   A module-level Jinja2 Environment loads templates from
       app/templates with HTML autoescaping. No request object, response
       class, or database session is involved, so every view can be rendered
       and asserted on directly.
Who:   Called by the HTML controller (app.routes.notes) and the global
       exception handlers in app.main.

View Inventory:
    render_index        notes/index.html    paginated listing
    render_create_form  notes/create.html   empty or rejected create form
    render_show         notes/show.html     note detail
    render_edit_form    notes/edit.html     pre-filled or rejected edit form
    render_destroyed    notes/destroy.html  deletion confirmation
    render_not_found    errors/404.html
    render_error        errors/500.html
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from app.config import settings
from app.schemas.note import NoteListResponse, NoteResponse

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def _format_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d %H:%M")


def _build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["timestamp"] = _format_timestamp
    env.globals["app_name"] = settings.app_name
    return env


environment = _build_environment()


def render(template_name: str, context: Mapping[str, Any]) -> str:
    """Render `template_name` with `context` and return the HTML."""
    return environment.get_template(template_name).render(**context)


def _form_context(
    values: Optional[Mapping[str, str]],
    errors: Optional[Mapping[str, str]],
) -> Dict[str, Any]:
    merged = {"title": "", "body": "", "user_id": ""}
    merged.update(values or {})
    return {"values": merged, "errors": dict(errors or {})}


def render_index(page: NoteListResponse) -> str:
    """Listing page with previous/next links."""
    return render("notes/index.html", {"page": page, "notes": page.items})


def render_create_form(
    values: Optional[Mapping[str, str]] = None,
    errors: Optional[Mapping[str, str]] = None,
) -> str:
    """Creation form; `values`/`errors` are set when re-rendering a rejected submission."""
    return render("notes/create.html", _form_context(values, errors))


def render_show(note: NoteResponse) -> str:
    return render("notes/show.html", {"note": note})


def render_edit_form(
    note: NoteResponse,
    values: Optional[Mapping[str, str]] = None,
    errors: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Edit form for `note`.

    Without `values` the inputs are pre-filled from the stored note; after a
    rejected submission they show what the user typed.
    """
    if values is None:
        values = {
            "title": note.title,
            "body": note.body,
            "user_id": "" if note.user_id is None else str(note.user_id),
        }
    context = _form_context(values, errors)
    context["note"] = note
    return render("notes/edit.html", context)


def render_destroyed(note: NoteResponse) -> str:
    return render("notes/destroy.html", {"note": note})


def render_not_found(message: str = "The requested page was not found") -> str:
    return render("errors/404.html", {"message": message})


def render_error(message: str = "An unexpected error occurred. Please try again later.") -> str:
    return render("errors/500.html", {"message": message})
