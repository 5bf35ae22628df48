"""Scope definition - a named, parameterized predicate over one record type."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from modelsync.domain.errors import ScopeArgumentError
from modelsync.domain.scopes.channels import scope_channel
from modelsync.domain.scopes.filters import BoundFilter, FilterExpression
from modelsync.domain.scopes.instance import ScopeInstance
from modelsync.domain.scopes.resolver import ScopeParameter, is_resolved, resolve

logger = logging.getLogger("modelsync.scopes")

Predicate = Callable[..., FilterExpression]


@dataclass(frozen=True)
class ScopeDefinition:
    """Immutable scope declaration.

    Attributes:
        owner_type: Record type the scope selects from
        name: Scope name, unique per owner type
        parameters: Ordered parameter schema built at declaration
        predicate: Called with the bound arguments, returns a FilterExpression
    """

    owner_type: type
    name: str
    parameters: tuple[ScopeParameter, ...]
    predicate: Predicate

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return tuple(parameter.name for parameter in self.parameters)

    @property
    def resource(self) -> str:
        return self.owner_type.sync_resource_name()

    def derive(self, entity: Any) -> ScopeInstance:
        """Build the instance a record belongs to by resolving each parameter on it."""
        args = tuple(resolve(entity, parameter) for parameter in self.parameters)
        return self._instance(args)

    def bind(self, *args: Any) -> ScopeInstance:
        """Build an instance from explicit arguments (subscriber side)."""
        if len(args) != len(self.parameters):
            raise ScopeArgumentError(
                message=(
                    f"Scope '{self.name}' of {self.owner_type.__name__} takes "
                    f"{len(self.parameters)} argument(s), got {len(args)}"
                ),
                owner=self.owner_type.__name__,
                scope_name=self.name,
                expected=len(self.parameters),
                received=len(args),
            )
        return self._instance(tuple(args))

    def _instance(self, args: tuple[Any, ...]) -> ScopeInstance:
        channel = scope_channel(self.resource, self.name, self.parameter_names, args)
        return ScopeInstance(self, args, BoundFilter(self._expression(args), channel))

    def _expression(self, args: tuple[Any, ...]) -> FilterExpression | None:
        if not all(is_resolved(arg) for arg in args):
            return None
        try:
            return self.predicate(*args)
        except Exception:
            logger.warning(
                "Scope predicate failed, treating scope as invalid",
                extra={"owner": self.owner_type.__name__, "scope": self.name},
                exc_info=True,
            )
            return None
