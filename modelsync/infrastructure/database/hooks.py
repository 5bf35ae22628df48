"""SQLAlchemy session events wired to the sync unit of work.

    hooks = SessionSyncHooks(SyncDiffEngine(registry), Publisher(transport))
    hooks.install(session_factory)

The unit of work lives in ``session.info`` for the duration of one root
transaction. Objects are classified and snapshotted in ``before_flush``,
diffed once the flush has been executed, published on commit and dropped
when the transaction ends any other way.
"""

from collections.abc import Callable
from typing import Any

from sqlalchemy import event
from sqlalchemy.orm import Session, SessionTransaction

from modelsync.application.context import is_enabled
from modelsync.application.diff import SyncDiffEngine
from modelsync.application.lifecycle import SyncUnitOfWork
from modelsync.application.publisher import Publisher
from modelsync.infrastructure.telemetry import get_logger

logger = get_logger(__name__)

UNIT_OF_WORK_KEY = "modelsync.unit_of_work"
PENDING_KEY = "modelsync.pending"


class SessionSyncHooks:
    """Session event listeners driving SyncUnitOfWork."""

    def __init__(self, engine: SyncDiffEngine, publisher: Publisher) -> None:
        self.engine = engine
        self.publisher = publisher
        # event.remove() matches listeners by identity, so bind them once
        self._listeners: dict[str, Callable[..., None]] = {
            "before_flush": self._before_flush,
            "after_flush_postexec": self._after_flush_postexec,
            "after_commit": self._after_commit,
            "after_transaction_end": self._after_transaction_end,
        }

    def install(self, target: Any) -> None:
        """Listen on a Session class, sessionmaker or Session instance."""
        for identifier, listener in self._listeners.items():
            event.listen(target, identifier, listener)
        logger.debug("Sync session hooks installed", extra={"target": repr(target)})

    def uninstall(self, target: Any) -> None:
        for identifier, listener in self._listeners.items():
            event.remove(target, identifier, listener)

    def unit_of_work(self, session: Session) -> SyncUnitOfWork:
        """The session's current unit of work, created on first use."""
        uow = session.info.get(UNIT_OF_WORK_KEY)
        if uow is None:
            uow = SyncUnitOfWork(self.engine, self.publisher)
            session.info[UNIT_OF_WORK_KEY] = uow
        return uow

    def _before_flush(self, session: Session, flush_context: Any, instances: Any) -> None:
        if not is_enabled():
            return
        uow = self.unit_of_work(session)
        pending: list[tuple[str, Any]] = session.info.setdefault(PENDING_KEY, [])

        for obj in list(session.new):
            if uow.before_create(obj):
                pending.append(("create", obj))
        for obj in list(session.dirty):
            if session.is_modified(obj, include_collections=False) and uow.before_update(obj):
                pending.append(("update", obj))
        for obj in list(session.deleted):
            if uow.before_destroy(obj):
                pending.append(("destroy", obj))

    def _after_flush_postexec(self, session: Session, flush_context: Any) -> None:
        pending = session.info.pop(PENDING_KEY, [])
        uow = session.info.get(UNIT_OF_WORK_KEY)
        if uow is None:
            return
        for action, obj in pending:
            if action == "create":
                uow.after_create(obj)
            elif action == "update":
                uow.after_update(obj)
            else:
                uow.after_destroy(obj)

    def _after_commit(self, session: Session) -> None:
        # Savepoint releases also fire after_commit; publish on the root commit only
        if session.in_nested_transaction():
            return
        uow = session.info.pop(UNIT_OF_WORK_KEY, None)
        session.info.pop(PENDING_KEY, None)
        if uow is not None:
            uow.after_commit()

    def _after_transaction_end(self, session: Session, transaction: SessionTransaction) -> None:
        if transaction.nested or transaction.parent is not None:
            return
        uow = session.info.pop(UNIT_OF_WORK_KEY, None)
        session.info.pop(PENDING_KEY, None)
        if uow is not None:
            uow.after_rollback()
