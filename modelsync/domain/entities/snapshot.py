"""Sync snapshot - pre-mutation state consumed by the update diff."""

from dataclasses import dataclass, field

from modelsync.domain.entities.detached import DetachedRecord
from modelsync.domain.scopes.instance import ScopeInstance


@dataclass(frozen=True)
class ScopeSnapshot:
    """A scope derived from the pre-mutation record, and whether it held the record."""

    scope: ScopeInstance
    contains_record: bool


@dataclass
class SyncSnapshot:
    """State of one record immediately before an update."""

    record_before_update: DetachedRecord
    scopes: dict[str, ScopeSnapshot] = field(default_factory=dict)

    def scope_before_update(self, name: str) -> ScopeSnapshot | None:
        return self.scopes.get(name)
