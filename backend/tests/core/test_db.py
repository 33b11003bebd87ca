from __future__ import annotations

import pytest
from repokit.core import db
from repokit.core.db import _engine_options, get_engine, get_session, session_scope
from sqlalchemy.pool import StaticPool

from backend.tests.entities import Widget


def test_in_memory_sqlite_shares_one_connection():
    options = _engine_options("sqlite://")
    assert options["poolclass"] is StaticPool
    assert options["connect_args"] == {"check_same_thread": False}


def test_postgres_gets_connect_timeout():
    options = _engine_options("postgresql+psycopg://u:p@localhost/db")
    assert "poolclass" not in options
    assert options["connect_args"] == {"connect_timeout": 1}


def test_engine_is_reused():
    assert get_engine() is get_engine()


def test_session_scope_commits_on_success():
    with session_scope() as session:
        session.add(Widget(name="kept"))

    session = get_session()
    try:
        assert [w.name for w in session.query(Widget).all()] == ["kept"]
    finally:
        session.close()


def test_session_scope_rolls_back_on_error():
    with pytest.raises(RuntimeError):
        with session_scope() as session:
            session.add(Widget(name="lost"))
            session.flush()
            raise RuntimeError("abort")

    session = get_session()
    try:
        assert session.query(Widget).count() == 0
    finally:
        session.close()


def test_dispose_engine_resets_factory():
    get_session().close()
    db.dispose_engine()
    assert db._engine is None
    assert db._session_factory is None
