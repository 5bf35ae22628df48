"""Scope instance - a scope definition bound to concrete argument values."""

from typing import TYPE_CHECKING, Any

from modelsync.domain.scopes.filters import BoundFilter

if TYPE_CHECKING:
    from modelsync.domain.scopes.definition import ScopeDefinition


class ScopeInstance:
    """One channel of a scope: definition + bound arguments + filter.

    Instances built from explicit arguments (subscriber side) and instances
    derived from a record (publisher side) compare equal when they address
    the same channel.
    """

    __slots__ = ("definition", "bound_args", "filter")

    def __init__(
        self,
        definition: "ScopeDefinition",
        bound_args: tuple[Any, ...],
        filter: BoundFilter,
    ) -> None:
        self.definition = definition
        self.bound_args = bound_args
        self.filter = filter

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def owner_type(self) -> type:
        return self.definition.owner_type

    @property
    def arguments(self) -> dict[str, Any]:
        """Bound arguments keyed by parameter name."""
        return dict(zip(self.definition.parameter_names, self.bound_args, strict=True))

    @property
    def channel_identity(self) -> str:
        return self.filter.channel_identity

    @property
    def valid(self) -> bool:
        return self.filter.valid

    def contains(self, entity: Any) -> bool:
        """Membership test; always False for an invalid scope."""
        return self.filter.contains(entity)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScopeInstance):
            return NotImplemented
        return (
            self.owner_type is other.owner_type
            and self.channel_identity == other.channel_identity
        )

    def __hash__(self) -> int:
        return hash((self.owner_type, self.channel_identity))

    def __repr__(self) -> str:
        return f"ScopeInstance({self.channel_identity!r}, valid={self.valid})"
