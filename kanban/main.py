"""Application factory for the kanban board service."""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import structlog
from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, RedirectResponse

from kanban.api.v1 import board, cards, columns, members
from kanban.config import Settings, settings as default_settings
from kanban.database import Database
from kanban.exceptions import register_exception_handlers

logger = structlog.get_logger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the app with its own storage handle.

    The database is opened when the app starts serving and disposed when it
    shuts down.
    """
    app_settings = app_settings or default_settings
    database = Database(app_settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.init_schema()
        logger.info("server_started", app=app_settings.APP_NAME, version=app_settings.APP_VERSION)
        yield
        database.dispose()

    app = FastAPI(title=app_settings.APP_NAME, version=app_settings.APP_VERSION, lifespan=lifespan)
    app.state.settings = app_settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(board.router, prefix="/api/board", tags=["board"])
    app.include_router(columns.router, prefix="/api/columns", tags=["columns"])
    app.include_router(cards.router, prefix="/api/cards", tags=["cards"])
    app.include_router(members.router, prefix="/api/members", tags=["members"])

    @app.get("/api/export", include_in_schema=False)
    def export_alias():
        return RedirectResponse(url="/api/board/export")

    @app.get("/health")
    def health():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    frontend_dir = Path(app_settings.FRONTEND_DIR).resolve() if app_settings.FRONTEND_DIR else None

    @app.get("/{full_path:path}", include_in_schema=False)
    def serve_frontend(full_path: str):
        if full_path == "api" or full_path.startswith("api/"):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
        if frontend_dir is None or not (frontend_dir / "index.html").is_file():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Frontend not built")

        candidate = (frontend_dir / full_path).resolve()
        if full_path and frontend_dir in candidate.parents and candidate.is_file():
            return FileResponse(candidate)
        # SPA fallback
        return FileResponse(frontend_dir / "index.html")

    return app
