# Repositories package init
"""
Notekeeper Backend — Data Access Layer
========================================

What:  Repository interfaces the services depend on instead of querying the
       ORM directly.
How:   Routes receive a repository through FastAPI's Depends(); tests swap it
       with `app.dependency_overrides`.

Repository Inventory:
    - NoteRepository (abstract): contract for note storage backends
    - SQLAlchemyNoteRepository: async SQLAlchemy implementation
    - InMemoryNoteRepository: dict-backed implementation for tests
"""
