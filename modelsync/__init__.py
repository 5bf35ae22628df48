"""modelsync - scope membership diffing and fan-out notifications for record mutations."""

from modelsync.application import (
    ActionQueue,
    Publisher,
    SyncDiffEngine,
    SyncUnitOfWork,
    is_enabled,
    sync_disabled,
    sync_enabled,
    unit_of_work,
)
from modelsync.domain.entities import Action, ActionKind
from modelsync.domain.errors import (
    AppError,
    DuplicateScopeNameError,
    InvalidScopeParameterError,
    UnknownScopeError,
)
from modelsync.domain.scopes import (
    And,
    Eq,
    In,
    Range,
    ScopeDefinition,
    ScopeInstance,
    ScopeRegistry,
    default_registry,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Declaration
    "ScopeRegistry",
    "default_registry",
    "ScopeDefinition",
    "ScopeInstance",
    "Eq",
    "In",
    "Range",
    "And",
    # Engine
    "Action",
    "ActionKind",
    "SyncDiffEngine",
    "SyncUnitOfWork",
    "unit_of_work",
    "ActionQueue",
    "Publisher",
    # Context
    "is_enabled",
    "sync_enabled",
    "sync_disabled",
    # Errors
    "AppError",
    "DuplicateScopeNameError",
    "InvalidScopeParameterError",
    "UnknownScopeError",
]
