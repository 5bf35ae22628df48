"""Application layer - context, snapshot capture, diff engine and publishing."""

from modelsync.application.context import (
    SyncContext,
    current_context,
    current_render_context,
    disable,
    enable,
    is_enabled,
    reset,
    sync_disabled,
    sync_enabled,
)
from modelsync.application.diff import SyncDiffEngine
from modelsync.application.lifecycle import SyncUnitOfWork, unit_of_work
from modelsync.application.publisher import ActionQueue, Publisher
from modelsync.application.snapshot import capture_snapshot

__all__ = [
    # Context
    "SyncContext",
    "current_context",
    "current_render_context",
    "is_enabled",
    "enable",
    "disable",
    "reset",
    "sync_enabled",
    "sync_disabled",
    # Engine
    "capture_snapshot",
    "SyncDiffEngine",
    # Publishing
    "ActionQueue",
    "Publisher",
    # Lifecycle
    "SyncUnitOfWork",
    "unit_of_work",
]
