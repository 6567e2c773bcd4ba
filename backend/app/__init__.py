"""
Notekeeper Backend — Application Package Initializer
=====================================================

Architecture Note:
    ┌─────────────────────────────────────┐
    │   Routes (HTML controller, JSON)    │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Views (pure render functions)     │  ← context in, HTML out
    ├─────────────────────────────────────┤
    │   Services (NoteService)            │  ← CRUD rules, NotFound
    ├─────────────────────────────────────┤
    │   Repositories (NoteRepository)     │  ← injected data access
    ├─────────────────────────────────────┤
    │   Models & Schemas                  │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (async sessions)         │
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
