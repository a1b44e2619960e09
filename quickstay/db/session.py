"""Database engine and session factory."""

import logging
from collections.abc import Generator

from sqlalchemy import create_engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from quickstay.config import settings
from quickstay.db.models import Base

logger = logging.getLogger(__name__)

POSTGRES_SCHEMES = ("postgresql", "postgres")


def get_engine(db_url=None, db_path=None):
    """Create a SQLAlchemy engine for the configured database.

    Args:
        db_url: Optional database URL (PostgreSQL, SQLite URL, etc.)
        db_path: Optional SQLite database path

    Returns:
        SQLAlchemy engine

    Note:
        If db_url is provided, it takes precedence over db_path.
        If neither is provided, uses settings.db_url or settings.db_path.
    """
    url = db_url or settings.db_url
    path = db_path or settings.db_path

    # PostgreSQL: pooled connections, optional TLS mode
    scheme = url.split("://", 1)[0] if url else ""
    backend, _, driver = scheme.partition("+")
    if backend in POSTGRES_SCHEMES:
        # Bare schemes resolve to whichever driver SQLAlchemy prefers; pin psycopg2
        pg_url = make_url(url).set(drivername=f"postgresql+{driver or 'psycopg2'}")
        connect_args = {"sslmode": settings.db_ssl_mode} if settings.db_ssl_mode else {}
        return create_engine(pg_url, echo=False, pool_pre_ping=True, connect_args=connect_args)

    # Explicit SQLite URL (tests use sqlite:///:memory:)
    if url and url.startswith("sqlite"):
        return create_engine(url, echo=False, connect_args={"check_same_thread": False})

    # Otherwise use SQLite with the provided or configured path
    if path:
        path.parent.mkdir(parents=True, exist_ok=True)
        return create_engine(f"sqlite:///{path}", echo=False, connect_args={"check_same_thread": False})

    return create_engine("sqlite:///:memory:", echo=False)


_engine = None
_SessionLocal = None


def _get_default_engine():
    """Return the lazily-initialised default engine (singleton)."""
    global _engine
    if _engine is None:
        _engine = get_engine()
        logger.info(f"Database engine created for {_engine.url.render_as_string(hide_password=True)}")
    return _engine


def _get_session_factory():
    """Return the lazily-initialised session factory (singleton)."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=_get_default_engine())
    return _SessionLocal


def reset_engine() -> None:
    """Dispose the cached engine so the next access reconnects."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None


def init_db() -> None:
    """Create all tables (useful for quick bootstrapping without migrations)."""
    Base.metadata.create_all(bind=_get_default_engine())


def get_db() -> Generator[Session, None, None]:
    """Yield a database session, closing it when done.

    Intended for use as a FastAPI dependency.
    """
    db = _get_session_factory()()
    try:
        yield db
    finally:
        db.close()
