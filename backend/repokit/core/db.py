from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator

from repokit.core.logging import get_logger
from repokit.core.settings import settings
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = get_logger(__name__)

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _engine_options(database_url: str) -> dict[str, Any]:
    url = make_url(database_url)
    options: dict[str, Any] = {
        "echo": settings.database_echo,
        "pool_pre_ping": settings.database_pool_pre_ping,
        "future": True,
    }
    connect_args: dict[str, Any] = {}
    if url.get_backend_name() == "postgresql":
        connect_args["connect_timeout"] = settings.database_connect_timeout
    elif url.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
        if url.database in (None, "", ":memory:"):
            # every session must see the same in-memory database
            options["poolclass"] = StaticPool
    options["connect_args"] = connect_args
    return options


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = create_engine(
            settings.database_url, **_engine_options(settings.database_url)
        )
        logger.info("Created engine for %s", _engine.url.render_as_string())
    return _engine


def _get_session_factory() -> sessionmaker[Session]:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(
            bind=get_engine(),
            autocommit=False,
            autoflush=settings.session_autoflush,
            expire_on_commit=settings.session_expire_on_commit,
            future=True,
        )
    return _session_factory


def get_session() -> Session:
    """Return a new SQLAlchemy session bound to the shared engine."""

    factory = _get_session_factory()
    return factory()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Provide transactional scope for DB interactions."""

    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
        _engine = None
    _session_factory = None
