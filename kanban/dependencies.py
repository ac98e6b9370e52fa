"""FastAPI dependencies resolving the per-application state."""
from fastapi import Request

from kanban.config import Settings
from kanban.database import Database


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database
