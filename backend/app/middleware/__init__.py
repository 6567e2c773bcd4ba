# Middleware package init
"""
Notekeeper Backend — Middleware Package
=========================================

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → Route Handler

    The request ID is set before the logging middleware reads it, and is
    added to every response as X-Request-ID.
"""
