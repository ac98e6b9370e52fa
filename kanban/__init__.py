"""Single-board kanban tracker: REST backend and ordering client."""

__version__ = "1.0.0"
