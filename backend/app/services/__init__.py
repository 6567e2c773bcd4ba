# Services package init
"""
Notekeeper Backend — Services Layer
=====================================

What:  Business logic between routes (HTTP) and repositories (persistence).

Service Inventory:
    - NoteService: list / get / create / update / delete notes
"""
