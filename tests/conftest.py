import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from kanban.config import Settings
from kanban.database import Database
from kanban.main import create_app

TEST_DATABASE_URL = "sqlite://"


@pytest.fixture
def database() -> Database:
    database = Database(TEST_DATABASE_URL)
    database.init_schema()
    try:
        yield database
    finally:
        database.dispose()


@pytest.fixture
def db_session(database: Database) -> Session:
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app_settings() -> Settings:
    return Settings(DATABASE_URL=TEST_DATABASE_URL, STRICT_REORDER=False, _env_file=None)


@pytest.fixture
def strict_settings() -> Settings:
    return Settings(DATABASE_URL=TEST_DATABASE_URL, STRICT_REORDER=True, _env_file=None)


@pytest.fixture
def client(app_settings: Settings) -> TestClient:
    app = create_app(app_settings)
    with TestClient(app) as test_client:
        yield test_client
