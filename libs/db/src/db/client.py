"""Process-wide SQLAlchemy engine/session helpers for the ledger database.

Usage
-----
from db.client import session_scope

with session_scope() as s:
    s.execute(...)

The URL comes from the ``database_url`` argument or ``DATABASE_URL``.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

_ENGINE: Engine | None = None
_SESSION_MAKER: sessionmaker[Session] | None = None
_DB_URL: str | None = None


def resolve_database_url(override: str | None = None) -> str | None:
    """Return the explicit URL, else ``DATABASE_URL``, else ``None``."""

    return override or os.getenv("DATABASE_URL") or None


def _database_url(override: str | None = None) -> str:
    url = resolve_database_url(override)
    if not url:
        raise RuntimeError("DATABASE_URL is not set; cannot initialize database client")
    return url


def get_engine(*, database_url: str | None = None) -> Engine:
    """Return the shared engine, creating it on first use.

    Asking for a different URL than the one already bound is an error; call
    :func:`reset_engine` first when switching databases (tests do).
    """

    global _ENGINE, _SESSION_MAKER, _DB_URL
    url = _database_url(database_url)
    if _ENGINE is None:
        engine = create_engine(url, pool_pre_ping=True)
        _SESSION_MAKER = sessionmaker(bind=engine, expire_on_commit=False, class_=Session)
        _ENGINE = engine
        _DB_URL = url
        return engine
    if _DB_URL is not None and url != _DB_URL:
        raise RuntimeError(
            "get_engine() already initialized with a different DATABASE_URL; "
            "call reset_engine() before switching databases"
        )
    return _ENGINE


def reset_engine() -> None:
    """Dispose the shared engine so the next call can bind a new URL."""

    global _ENGINE, _SESSION_MAKER, _DB_URL
    if _ENGINE is not None:
        _ENGINE.dispose()
    _ENGINE = None
    _SESSION_MAKER = None
    _DB_URL = None


def get_session(*, database_url: str | None = None) -> Session:
    get_engine(database_url=database_url)
    assert _SESSION_MAKER is not None  # bound by get_engine
    return _SESSION_MAKER()


@contextmanager
def session_scope(*, database_url: str | None = None) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    session = get_session(database_url=database_url)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = [
    "resolve_database_url",
    "get_engine",
    "reset_engine",
    "get_session",
    "session_scope",
]
