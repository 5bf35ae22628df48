"""Snapshot capture - record and scope membership immediately before an update."""

from collections.abc import Iterable
from typing import Any

from modelsync.domain.entities import DetachedRecord, ScopeSnapshot, SyncSnapshot
from modelsync.domain.scopes import ScopeDefinition
from modelsync.infrastructure.telemetry import get_logger, record_snapshot

logger = get_logger(__name__)


def capture_snapshot(entity: Any, definitions: Iterable[ScopeDefinition]) -> SyncSnapshot:
    """Capture the pre-mutation state of a record.

    Must run before the store applies the mutation. The before-record is the
    entity's attributes with the changing ones reset to their old values;
    each scope is derived from that record and its membership cached.
    """
    record = DetachedRecord.from_entity(entity)
    snapshot = SyncSnapshot(record_before_update=record)

    for definition in definitions:
        scope = definition.derive(record)
        snapshot.scopes[definition.name] = ScopeSnapshot(
            scope=scope,
            contains_record=scope.contains(record),
        )

    record_snapshot(entity.sync_resource_name())
    logger.debug(
        "Captured pre-update snapshot",
        extra={
            "resource": entity.sync_resource_name(),
            "record_id": entity.sync_identity(),
            "scopes": {name: s.contains_record for name, s in snapshot.scopes.items()},
        },
    )
    return snapshot
