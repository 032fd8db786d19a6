"""
Database configuration and session management.

The connection is an explicit handle (`Database`) opened by the application
lifespan and stored on `app.state`, instead of a module-level engine.
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from shared.config.logging import get_logger

logger = get_logger(__name__)


class Database:
    """
    Owns the SQLAlchemy engine and session factory.

    Usage:
        database = Database(settings.database_url)
        with database.session() as db:
            db.scalar(select(Dish))
        database.close()
    """

    def __init__(self, url: str, *, echo: bool = False):
        self._url = url
        self._engine = create_engine(url, echo=echo, **self._engine_options(url))
        self._session_factory = sessionmaker(
            bind=self._engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )
        logger.info("Database engine created", dialect=self._engine.dialect.name)

    @staticmethod
    def _engine_options(url: str) -> dict:
        """Pool settings per backend. In-memory SQLite must share one connection."""
        if url.startswith("sqlite"):
            options: dict = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
                options["poolclass"] = StaticPool
            return options
        return {
            "pool_pre_ping": True,  # Verify connections before using
            "pool_size": 5,
            "max_overflow": 10,
            "pool_timeout": 30,
            "pool_recycle": 1800,
        }

    @property
    def engine(self) -> Engine:
        """SQLAlchemy engine."""
        return self._engine

    @property
    def session_factory(self) -> sessionmaker:
        """Session factory bound to the engine."""
        return self._session_factory

    def new_session(self) -> Session:
        """Create a new session. The caller closes it."""
        return self._session_factory()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Context manager for sessions outside of FastAPI.

        Usage:
            with database.session() as db:
                ...
        """
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def close(self) -> None:
        """Dispose of all pooled connections."""
        self._engine.dispose()
        logger.info("Database engine disposed")


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...

    The session is automatically closed after the request completes.
    """
    database: Database = request.app.state.database
    db = database.new_session()
    try:
        yield db
    finally:
        db.close()


def safe_commit(db: Session) -> None:
    """
    Commit with automatic rollback on failure.

    Raises the original exception after rolling back.
    """
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
