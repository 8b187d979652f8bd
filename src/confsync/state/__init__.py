"""State/store layer.

This package is the single source of truth for the application state tree:
the events that request changes, the pure rules that derive one change from
another, the reducers and the store that applies them.
"""
