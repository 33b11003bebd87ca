from __future__ import annotations

# ruff: noqa: E402
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
BACKEND_DIR = PROJECT_ROOT / "backend"
for path in (PROJECT_ROOT, BACKEND_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import pytest
from repokit.core.db import dispose_engine, get_engine, get_session
from repokit.core.settings import settings
from repokit.models import Base
from sqlalchemy.orm import Session

from backend.tests.entities import Widget  # noqa: F401  registers test entities

TEST_DATABASE_URL = "sqlite://"


@pytest.fixture(scope="session", autouse=True)
def configure_test_database() -> str:
    """Point settings.database_url to an in-memory SQLite database for tests."""

    original_url = settings.database_url
    original_log_to_file = settings.log_to_file
    settings.database_url = TEST_DATABASE_URL
    settings.log_to_file = False
    dispose_engine()
    yield settings.database_url
    dispose_engine()
    settings.database_url = original_url
    settings.log_to_file = original_log_to_file


@pytest.fixture(autouse=True)
def schema(configure_test_database: str) -> None:
    """Recreate every table so each test starts from an empty store."""

    engine = get_engine()
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture()
def session(schema: None) -> Session:
    db_session = get_session()
    try:
        yield db_session
    finally:
        db_session.rollback()
        db_session.close()
