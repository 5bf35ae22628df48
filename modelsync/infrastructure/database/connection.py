"""Database connection and session management for the reference entity store."""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from modelsync.config import Settings, get_settings
from modelsync.infrastructure.database.hooks import SessionSyncHooks

# Global engine and session factory
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine(settings: Settings | None = None) -> Engine:
    """Get or create the database engine."""
    global _engine

    if _engine is None:
        if settings is None:
            settings = get_settings()

        _engine = create_engine(
            settings.database_url,
            pool_pre_ping=True,
        )

    return _engine


def get_session_factory(settings: Settings | None = None) -> sessionmaker[Session]:
    """Get or create the session factory."""
    global _session_factory

    if _session_factory is None:
        engine = get_engine(settings)
        _session_factory = sessionmaker(
            bind=engine,
            class_=Session,
            expire_on_commit=False,
            autoflush=False,
        )

    return _session_factory


def init_db(settings: Settings | None = None, hooks: SessionSyncHooks | None = None) -> None:
    """Initialize the database connection and wire sync hooks (call on startup)."""
    factory = get_session_factory(settings)
    if hooks is not None:
        hooks.install(factory)


def close_db() -> None:
    """Close database connections (call on shutdown)."""
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()
        _engine = None
        _session_factory = None


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """Get a database session as context manager; commits on success."""
    factory = get_session_factory()
    with factory() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
