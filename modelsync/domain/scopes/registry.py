"""Per-type registry of synced models and their scope definitions.

The registry is built once at startup:

    registry.sync_model(Todo, default_scope="project")
    registry.declare_scope(Todo, "completed", [], lambda: Eq("complete", True))
    registry.declare_scope(Todo, "by_project", predicate=lambda project_id: Eq("project_id", project_id))
    registry.freeze()

Subscribers then address the same channels the engine publishes on:

    registry.scope(Todo, "by_project", project.id)
"""

import inspect
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Literal

from modelsync.domain.errors import (
    DuplicateScopeNameError,
    InvalidScopeParameterError,
    InvalidSyncActionError,
    ModelNotSyncedError,
    RegistryFrozenError,
    UnknownScopeError,
)
from modelsync.domain.scopes.definition import Predicate, ScopeDefinition
from modelsync.domain.scopes.instance import ScopeInstance
from modelsync.domain.scopes.resolver import (
    ParameterKind,
    ScopeParameter,
    classify_parameter,
    is_resolved,
    resolve,
)

SyncActionName = Literal["create", "update", "destroy"]
ALL_ACTIONS: frozenset[str] = frozenset({"create", "update", "destroy"})


@dataclass(frozen=True)
class ModelSyncOptions:
    """Which mutations of a type are synced, and its default scope relation."""

    owner_type: type
    actions: frozenset[str]
    default_scope: str | None = None

    def syncs(self, action: str) -> bool:
        return action in self.actions

    def default_scope_for(self, entity: Any) -> Any | None:
        """Related record acting as the default scope, or None."""
        if self.default_scope is None:
            return None
        value = resolve(entity, ScopeParameter(self.default_scope, ParameterKind.RELATION))
        return value if is_resolved(value) else None


class ScopeRegistry:
    """Map from record type to its sync options and scope definitions."""

    def __init__(self) -> None:
        self._models: dict[type, ModelSyncOptions] = {}
        self._definitions: dict[type, dict[str, ScopeDefinition]] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Reject any further declaration."""
        self._frozen = True

    def sync_model(
        self,
        owner_type: type,
        actions: str | Iterable[str] = "all",
        default_scope: str | None = None,
    ) -> ModelSyncOptions:
        """Register a record type for syncing.

        Args:
            owner_type: The record type
            actions: "all" or any of "create", "update", "destroy"
            default_scope: Name of the relation holding the parent record

        Raises:
            InvalidSyncActionError: an action name is not recognised
            InvalidScopeParameterError: default_scope is not a relation of the owner
        """
        self._ensure_writable(owner_type, "")
        if isinstance(actions, str):
            actions = [actions]
        selected = set(actions)
        if "all" in selected:
            selected = set(ALL_ACTIONS)
        unknown = selected - ALL_ACTIONS
        if unknown:
            raise InvalidSyncActionError(
                message=f"Unknown sync actions: {sorted(unknown)}",
                owner=owner_type.__name__,
                actions=sorted(unknown),
            )

        if default_scope is not None and default_scope not in owner_type.sync_relation_names():
            raise InvalidScopeParameterError(
                message=(
                    f"Default scope '{default_scope}' is not a relation of "
                    f"{owner_type.__name__}"
                ),
                owner=owner_type.__name__,
                parameter=default_scope,
            )

        options = ModelSyncOptions(owner_type, frozenset(selected), default_scope)
        self._models[owner_type] = options
        self._definitions.setdefault(owner_type, {})
        return options

    def declare_scope(
        self,
        owner_type: type,
        name: str,
        parameters: Sequence[str | ScopeParameter] | None = None,
        predicate: Predicate | None = None,
    ) -> ScopeDefinition:
        """Declare a named scope on a record type.

        When ``parameters`` is omitted the names are read once from the
        predicate's signature. Each name must be an attribute or a relation
        of the owner type.

        Raises:
            DuplicateScopeNameError: name already declared or defined on the owner
            InvalidScopeParameterError: a parameter cannot be resolved on the owner
            RegistryFrozenError: registry was frozen
        """
        if predicate is None:
            raise TypeError("declare_scope() requires a predicate")
        self._ensure_writable(owner_type, name)

        declared = self._definitions.setdefault(owner_type, {})
        if name in declared or self._is_capability(owner_type, name):
            raise DuplicateScopeNameError(
                message=(
                    f"Invalid scope name '{name}'. Already defined on "
                    f"{owner_type.__name__}"
                ),
                owner=owner_type.__name__,
                scope_name=name,
            )

        if parameters is None:
            parameters = list(inspect.signature(predicate).parameters)

        schema = tuple(self._parameter(owner_type, name, p) for p in parameters)
        definition = ScopeDefinition(owner_type, name, schema, predicate)
        declared[name] = definition
        return definition

    def options_for(self, owner_type: type) -> ModelSyncOptions | None:
        return self._models.get(owner_type)

    def options(self, owner_type: type) -> ModelSyncOptions:
        """Sync options of a type that must have been registered."""
        options = self._models.get(owner_type)
        if options is None:
            raise ModelNotSyncedError(
                message=f"{owner_type.__name__} is not registered for syncing",
                owner=owner_type.__name__,
            )
        return options

    def definitions_for(self, owner_type: type) -> list[ScopeDefinition]:
        """Scope definitions of a type, in declaration order."""
        return list(self._definitions.get(owner_type, {}).values())

    def definition(self, owner_type: type, name: str) -> ScopeDefinition:
        definition = self._definitions.get(owner_type, {}).get(name)
        if definition is None:
            raise UnknownScopeError(
                message=f"No sync scope '{name}' declared on {owner_type.__name__}",
                owner=owner_type.__name__,
                scope_name=name,
            )
        return definition

    def scope(self, owner_type: type, name: str, *args: Any) -> ScopeInstance:
        """Subscriber-side constructor: bind a declared scope to explicit arguments."""
        return self.definition(owner_type, name).bind(*args)

    def _ensure_writable(self, owner_type: type, name: str) -> None:
        if self._frozen:
            raise RegistryFrozenError(
                message="Scope registry is frozen; declare scopes at startup",
                owner=owner_type.__name__,
                scope_name=name,
            )

    @staticmethod
    def _is_capability(owner_type: type, name: str) -> bool:
        return (
            hasattr(owner_type, name)
            or name in owner_type.sync_attribute_names()
            or name in owner_type.sync_relation_names()
        )

    @staticmethod
    def _parameter(
        owner_type: type,
        scope_name: str,
        parameter: str | ScopeParameter,
    ) -> ScopeParameter:
        if isinstance(parameter, ScopeParameter):
            known = (
                owner_type.sync_attribute_names()
                if parameter.kind is ParameterKind.ATTRIBUTE
                else owner_type.sync_relation_names()
            )
            resolved = parameter if parameter.name in known else None
            name = parameter.name
        else:
            resolved = classify_parameter(owner_type, parameter)
            name = parameter

        if resolved is None:
            raise InvalidScopeParameterError(
                message=(
                    f"Parameter '{name}' of scope '{scope_name}' is neither an "
                    f"attribute nor a relation of {owner_type.__name__}"
                ),
                owner=owner_type.__name__,
                scope_name=scope_name,
                parameter=name,
            )
        return resolved


# Registry used when none is passed explicitly
default_registry = ScopeRegistry()


def get_registry() -> ScopeRegistry:
    """Get the process-wide default registry."""
    return default_registry
