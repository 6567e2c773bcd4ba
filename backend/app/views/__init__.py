# Views package init
"""
Notekeeper Backend — HTML Views
=================================

Pure functions that turn a data context into an HTML string.
See app.views.rendering.
"""
