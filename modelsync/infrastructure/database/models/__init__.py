"""SQLAlchemy model base classes."""

from modelsync.infrastructure.database.models.base import Base, SyncModelMixin

__all__ = [
    "Base",
    "SyncModelMixin",
]
