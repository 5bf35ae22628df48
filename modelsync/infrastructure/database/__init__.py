"""Database infrastructure - SQLAlchemy entity store and lifecycle wiring."""

from modelsync.infrastructure.database.connection import (
    close_db,
    get_db_session,
    get_engine,
    get_session_factory,
    init_db,
)
from modelsync.infrastructure.database.hooks import SessionSyncHooks
from modelsync.infrastructure.database.models import Base, SyncModelMixin

__all__ = [
    "Base",
    "SyncModelMixin",
    "SessionSyncHooks",
    "init_db",
    "close_db",
    "get_engine",
    "get_session_factory",
    "get_db_session",
]
