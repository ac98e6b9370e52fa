"""SQLite storage handle for the board."""
from pathlib import Path
from typing import Iterator, Optional

import structlog
from fastapi import Request
from sqlalchemy import create_engine, event, func, select
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = structlog.get_logger(__name__)

# Base class for the models
Base = declarative_base()

BOARD_ID = 1
DEFAULT_BOARD_NAME = "My Board"
DEFAULT_COLUMNS = ("Backlog", "Today", "In Progress", "Done")


def _is_memory_url(url) -> bool:
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def _build_engine(database_url: str):
    """Create the SQLAlchemy engine for ``database_url``."""
    url = make_url(database_url)

    if _is_memory_url(url):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    elif url.get_backend_name() == "sqlite":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(url, connect_args={"check_same_thread": False})
    else:
        engine = create_engine(url)

    if url.get_backend_name() == "sqlite":
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):  # pragma: no cover - SQLAlchemy callback
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


class Database:
    """Owns the engine and session factory for one running application.

    Created when the app starts and disposed when it stops; request handlers
    receive sessions from it through :func:`get_db`.
    """

    def __init__(self, database_url: str):
        self.url = make_url(database_url)
        self.engine = _build_engine(database_url)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @property
    def path(self) -> Optional[Path]:
        """Filesystem path of the database file, ``None`` for in-memory databases."""
        if self.url.get_backend_name() != "sqlite" or _is_memory_url(self.url):
            return None
        return Path(self.url.database)

    def session(self) -> Session:
        return self.SessionLocal()

    def init_schema(self) -> None:
        """Create missing tables and seed the board row and default columns."""
        from kanban.models import Board, BoardColumn

        Base.metadata.create_all(bind=self.engine)

        with self.session() as db:
            if db.get(Board, BOARD_ID) is None:
                db.add(Board(id=BOARD_ID, name=DEFAULT_BOARD_NAME, theme="light"))
                db.flush()
                column_count = db.execute(select(func.count(BoardColumn.id))).scalar_one()
                if column_count == 0:
                    for index, title in enumerate(DEFAULT_COLUMNS):
                        db.add(BoardColumn(board_id=BOARD_ID, title=title, order_index=index))
                db.commit()
                logger.info("database_seeded", columns=len(DEFAULT_COLUMNS))

        logger.info("database_initialized", url=self.url.render_as_string(hide_password=True))

    def checkpoint(self) -> None:
        """Merge the WAL into the main database file."""
        with self.engine.connect() as connection:
            connection.exec_driver_sql("PRAGMA wal_checkpoint(TRUNCATE)")

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("database_closed")


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
