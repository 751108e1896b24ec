"""
Module: payment_kernel.db.engine
Responsibility: SQLAlchemy engine initialization, session factory management
    and transactional scope.  Single point of database configuration.
Architecture position: Kernel > DB.

Failure modes:
    - RuntimeError if get_engine/get_session/session_scope is called before
      init_engine_from_url().
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from payment_kernel.db.base import Base
from payment_kernel.logging_config import get_logger

logger = get_logger("db.engine")

_engine: Engine | None = None
_SessionFactory: sessionmaker[Session] | None = None


def init_engine_from_url(database_url: str, echo: bool = False) -> Engine:
    """
    Initialize the engine from a database URL.

    Both PostgreSQL and SQLite URLs are accepted; a second call replaces the
    previous engine.
    """
    global _engine, _SessionFactory

    if _engine is not None:
        _engine.dispose()

    url = make_url(database_url)
    kwargs: dict = {"echo": echo}
    if url.get_backend_name() != "sqlite":
        kwargs["pool_pre_ping"] = True

    _engine = create_engine(url, **kwargs)
    _SessionFactory = sessionmaker(bind=_engine, expire_on_commit=False)

    logger.info(
        "engine_initialized",
        extra={"dialect": url.get_backend_name(), "echo": echo},
    )
    return _engine


def get_engine() -> Engine:
    """Get the current engine instance."""
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _engine


def get_session() -> Session:
    """Get a new session instance."""
    if _SessionFactory is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _SessionFactory()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Provide a transactional scope: commit on success, rollback on error."""
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_tables() -> None:
    """Create all payment tables on the current engine."""
    import payment_kernel.models  # noqa: F401  registers mappers

    Base.metadata.create_all(get_engine())
    logger.info("tables_created")


def reset_engine() -> None:
    """Dispose the engine and forget the session factory. FOR TESTING ONLY."""
    global _engine, _SessionFactory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionFactory = None
