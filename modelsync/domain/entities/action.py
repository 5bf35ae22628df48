"""Action entity - one notification for one channel."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from modelsync.domain.scopes.channels import collection_channel, record_channel
from modelsync.domain.scopes.instance import ScopeInstance


class ActionKind(StrEnum):
    """What subscribers should do with the record's fragment."""

    NEW = "new"
    UPDATE = "update"
    DESTROY = "destroy"


@dataclass(frozen=True)
class Action:
    """A notification generated during one unit of work.

    Attributes:
        record: The record, or a (record, parent) pair for nested rendering
        kind: new, update or destroy
        scope: Scope instance, or the default-scope parent record, or None
        default_scope: Parent record the record is rendered under, if any
        render_context: Rendering context active when the action was built
    """

    record: Any
    kind: ActionKind
    scope: Any | None = None
    default_scope: Any | None = None
    render_context: Any | None = None

    @property
    def is_pair(self) -> bool:
        return isinstance(self.record, tuple)

    @property
    def entity(self) -> Any:
        """The record the action is about."""
        return self.record[0] if self.is_pair else self.record

    @property
    def parent(self) -> Any | None:
        """Parent record the channel is nested under, if any."""
        if self.is_pair:
            return self.record[1]
        if isinstance(self.scope, ScopeInstance):
            return None
        return self.scope

    @property
    def channel_identity(self) -> str:
        if isinstance(self.scope, ScopeInstance):
            return self.scope.channel_identity
        entity = self.entity
        parent = self.parent
        if self.kind is ActionKind.NEW:
            return collection_channel(entity.sync_resource_name(), parent)
        if parent is None:
            return record_channel(entity)
        return f"{record_channel(parent)}{record_channel(entity)}"

    def to_dict(self) -> dict[str, Any]:
        """Summary for logging and transport envelopes."""
        return {
            "kind": str(self.kind),
            "channel": self.channel_identity,
            "resource": self.entity.sync_resource_name(),
            "id": self.entity.sync_identity(),
            "scope": self.scope.name if isinstance(self.scope, ScopeInstance) else None,
        }
