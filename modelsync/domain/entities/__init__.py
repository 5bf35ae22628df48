"""Domain entities - transient values produced while syncing one unit of work."""

from modelsync.domain.entities.action import Action, ActionKind
from modelsync.domain.entities.detached import DetachedRecord
from modelsync.domain.entities.snapshot import ScopeSnapshot, SyncSnapshot

__all__ = [
    "Action",
    "ActionKind",
    "DetachedRecord",
    "ScopeSnapshot",
    "SyncSnapshot",
]
