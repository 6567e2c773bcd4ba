# Routes package init
"""
Notekeeper Backend — Routes Package
=====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - notes.py:   /notes...        HTML resource controller (7 actions)
    - api.py:     /api/notes...    JSON mirror of the same actions
    - health.py:  GET /health      service health check

Routes stay thin: parse the request, call NoteService, pick a view or
response model. Business rules live in app.services.
"""
