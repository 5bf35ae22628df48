"""Unit-of-work lifecycle - the hook handlers an entity store calls.

A store calls ``before_*`` before applying a mutation, ``after_*`` once it
is applied, and ``after_commit`` or ``after_rollback`` when the transaction
ends. Every hook is gated by the sync context; a record whose ``before_*``
hook was skipped is ignored by the matching ``after_*`` hook.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any
from uuid import uuid4

from modelsync.application.context import is_enabled
from modelsync.application.diff import SyncDiffEngine
from modelsync.application.publisher import ActionQueue, Publisher
from modelsync.domain.entities import SyncSnapshot
from modelsync.infrastructure.telemetry import (
    get_logger,
    record_queue_discarded,
    unit_of_work_id_var,
)

logger = get_logger(__name__)


class SyncUnitOfWork:
    """Sync state of one transaction: pending records, snapshots and the action queue."""

    def __init__(self, engine: SyncDiffEngine, publisher: Publisher) -> None:
        self.id = uuid4().hex
        self.engine = engine
        self.publisher = publisher
        self.queue = ActionQueue()
        self._pending: dict[int, str] = {}
        self._snapshots: dict[int, SyncSnapshot] = {}

    def before_create(self, entity: Any) -> bool:
        return self._track(entity, "create")

    def after_create(self, entity: Any) -> None:
        if self._untrack(entity, "create"):
            self.queue.extend(self.engine.prepare_create(entity))

    def before_update(self, entity: Any) -> bool:
        if not self._track(entity, "update"):
            return False
        self._snapshots[id(entity)] = self.engine.capture(entity)
        return True

    def after_update(self, entity: Any) -> None:
        snapshot = self._snapshots.pop(id(entity), None)
        if self._untrack(entity, "update") and snapshot is not None:
            self.queue.extend(self.engine.prepare_update(entity, snapshot))

    def before_destroy(self, entity: Any) -> bool:
        return self._track(entity, "destroy")

    def after_destroy(self, entity: Any) -> None:
        if self._untrack(entity, "destroy"):
            self.queue.extend(self.engine.prepare_destroy(entity))

    def after_commit(self) -> int:
        """Publish the queue once. Returns the number of delivered actions."""
        if self.queue.closed:
            return 0
        if not is_enabled():
            dropped = self.queue.discard()
            record_queue_discarded("disabled")
            logger.info(
                "Sync disabled at commit, dropping actions",
                extra={"unit_of_work_id": self.id, "dropped": dropped},
            )
            return 0
        token = unit_of_work_id_var.set(self.id)
        try:
            return self.publisher.flush(self.queue)
        finally:
            unit_of_work_id_var.reset(token)

    def after_rollback(self) -> None:
        """Drop every queued action; nothing from this unit of work is published."""
        self._pending.clear()
        self._snapshots.clear()
        if self.queue.closed:
            return
        dropped = self.queue.discard()
        record_queue_discarded("rollback")
        logger.info(
            "Transaction rolled back, dropping sync actions",
            extra={"unit_of_work_id": self.id, "dropped": dropped},
        )

    def _track(self, entity: Any, action: str) -> bool:
        if not is_enabled():
            return False
        options = self.engine.registry.options_for(type(entity))
        if options is None or not options.syncs(action):
            return False
        self._pending[id(entity)] = action
        return True

    def _untrack(self, entity: Any, action: str) -> bool:
        if not is_enabled():
            self._pending.pop(id(entity), None)
            return False
        return self._pending.pop(id(entity), None) == action


@contextmanager
def unit_of_work(
    engine: SyncDiffEngine,
    publisher: Publisher,
) -> Generator[SyncUnitOfWork, None, None]:
    """Run a block as one unit of work: publish on success, discard on error."""
    uow = SyncUnitOfWork(engine, publisher)
    try:
        yield uow
    except BaseException:
        uow.after_rollback()
        raise
    uow.after_commit()
