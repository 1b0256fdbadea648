"""
Database engine, declarative base, and the per-request session dependency.

The engine and session factory are not module globals: ``main.lifespan``
creates them from ``Settings.DATABASE_URL``, stores them on ``app.state``
and disposes the engine on shutdown.  ``get_db`` reads the factory from the
state of the application serving the current request.
"""

from __future__ import annotations

import logging
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Build an engine for ``database_url``.

    SQLite URLs get ``check_same_thread=False`` so the session can cross
    the threadpool boundary FastAPI runs sync endpoints in.  In-memory SQLite
    additionally uses a ``StaticPool`` so every session sees the same database.
    Other backends use a pre-pinged connection pool.

    Args:
        database_url: SQLAlchemy connection URL.
        echo: Log every SQL statement when True.

    Returns:
        A configured ``Engine``.
    """
    if database_url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, echo=echo, **kwargs)
    else:
        engine = create_engine(database_url, echo=echo, pool_pre_ping=True)

    logger.info("Database engine created for dialect '%s'", engine.dialect.name)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create every table registered on ``Base.metadata`` (no-op if present)."""
    import budget_ledger.models  # noqa: F401  populate the mapper registry

    Base.metadata.create_all(bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency yielding a session bound to the app's engine.

    The session is always closed after the response; uncommitted work is
    discarded.
    """
    factory: sessionmaker[Session] = request.app.state.session_factory
    db = factory()
    try:
        yield db
    finally:
        db.close()
