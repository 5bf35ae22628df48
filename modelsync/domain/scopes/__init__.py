"""Scopes - named, parameterized filters that map to publish/subscribe channels."""

from modelsync.domain.scopes.definition import Predicate, ScopeDefinition
from modelsync.domain.scopes.filters import (
    And,
    BoundFilter,
    Eq,
    FilterExpression,
    In,
    Range,
)
from modelsync.domain.scopes.instance import ScopeInstance
from modelsync.domain.scopes.registry import (
    ALL_ACTIONS,
    ModelSyncOptions,
    ScopeRegistry,
    default_registry,
    get_registry,
)
from modelsync.domain.scopes.resolver import (
    UNRESOLVED,
    ParameterKind,
    ScopeParameter,
    resolve,
)

__all__ = [
    # Filters
    "FilterExpression",
    "Eq",
    "In",
    "Range",
    "And",
    "BoundFilter",
    # Definitions
    "Predicate",
    "ScopeDefinition",
    "ScopeInstance",
    "ParameterKind",
    "ScopeParameter",
    "UNRESOLVED",
    "resolve",
    # Registry
    "ALL_ACTIONS",
    "ModelSyncOptions",
    "ScopeRegistry",
    "default_registry",
    "get_registry",
]
