"""Typed error hierarchy for modelsync.

All errors inherit from AppError and provide:
- code: Machine-readable error code
- message: Human-readable description
- details: Additional context as dict
- retryable: Whether the operation can be retried

Declaration errors surface immediately at setup time. Scope arguments that
cannot be resolved at runtime are never raised; they make the scope invalid.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass
class AppError(Exception):
    """Base error with full context."""

    code: str
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)
    retryable: bool = False
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def to_dict(self) -> dict[str, Any]:
        """Serialize error for logging and transport payloads."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
            "timestamp": self.timestamp.isoformat(),
        }


# --- Declaration Errors ---


@dataclass
class ScopeDeclarationError(AppError):
    """A scope or synced model could not be declared."""

    code: str = "SCOPE_DECLARATION_ERROR"
    retryable: bool = False
    owner: str = ""
    scope_name: str = ""


@dataclass
class DuplicateScopeNameError(ScopeDeclarationError):
    """Scope name collides with an existing scope or owner capability."""

    code: str = "DUPLICATE_SCOPE_NAME"


@dataclass
class InvalidScopeParameterError(ScopeDeclarationError):
    """Parameter is neither an attribute nor a relation of the owner."""

    code: str = "INVALID_SCOPE_PARAMETER"
    parameter: str = ""


@dataclass
class InvalidSyncActionError(ScopeDeclarationError):
    """Sync action name is not one of create, update or destroy."""

    code: str = "INVALID_SYNC_ACTION"
    actions: list[str] = field(default_factory=list)


@dataclass
class RegistryFrozenError(ScopeDeclarationError):
    """Registry no longer accepts declarations."""

    code: str = "REGISTRY_FROZEN"


# --- Lookup Errors ---


@dataclass
class ScopeLookupError(AppError):
    """A scope could not be constructed from the registry."""

    code: str = "SCOPE_LOOKUP_ERROR"
    retryable: bool = False
    owner: str = ""
    scope_name: str = ""


@dataclass
class UnknownScopeError(ScopeLookupError):
    """No scope with this name is declared for the owner."""

    code: str = "UNKNOWN_SCOPE"


@dataclass
class ScopeArgumentError(ScopeLookupError):
    """Explicit arguments do not match the scope's parameters."""

    code: str = "SCOPE_ARGUMENT_ERROR"
    expected: int = 0
    received: int = 0


@dataclass
class ModelNotSyncedError(ScopeLookupError):
    """The entity type was never registered for syncing."""

    code: str = "MODEL_NOT_SYNCED"


# --- Publishing Errors ---


@dataclass
class ActionQueueClosedError(AppError):
    """Action queue was already drained or discarded."""

    code: str = "ACTION_QUEUE_CLOSED"
    retryable: bool = False


@dataclass
class TransportDeliveryError(AppError):
    """Transport failed to deliver an action to a channel."""

    code: str = "TRANSPORT_DELIVERY_FAILED"
    retryable: bool = True
    channel: str = ""
