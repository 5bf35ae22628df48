"""Action queue and publisher.

The queue collects the actions of one unit of work. After the enclosing
transaction commits, the publisher drains it exactly once and hands every
action, in order, to the transport. If the transaction aborts the queue is
discarded and nothing is published.
"""

import time
from collections.abc import Iterable, Iterator

from modelsync.domain.entities import Action
from modelsync.domain.errors import ActionQueueClosedError
from modelsync.domain.protocols import Transport
from modelsync.infrastructure.telemetry import (
    create_span,
    get_logger,
    record_delivery,
    record_flush,
)

logger = get_logger(__name__)


class ActionQueue:
    """Append-only queue of actions, drained or discarded once."""

    def __init__(self) -> None:
        self._actions: list[Action] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, action: Action) -> None:
        self._ensure_open()
        self._actions.append(action)

    def extend(self, actions: Iterable[Action]) -> None:
        self._ensure_open()
        self._actions.extend(actions)

    def drain(self) -> list[Action]:
        """Take every queued action and close the queue."""
        self._ensure_open()
        actions, self._actions = self._actions, []
        self._closed = True
        return actions

    def discard(self) -> int:
        """Drop every queued action and close the queue. Returns how many were dropped."""
        dropped = len(self._actions)
        self._actions = []
        self._closed = True
        return dropped

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[Action]:
        return iter(list(self._actions))

    def _ensure_open(self) -> None:
        if self._closed:
            raise ActionQueueClosedError(
                message="Action queue was already published or discarded",
            )


class Publisher:
    """Delivers drained actions to a transport.

    Deliveries are independent: a failing one is logged and does not stop
    the others. Nothing is retried.
    """

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def flush(self, queue: ActionQueue) -> int:
        """Publish a queue's actions in enqueue order. Returns the number delivered."""
        actions = queue.drain()
        if not actions:
            return 0

        start = time.perf_counter()
        delivered = 0
        with create_span("modelsync.publish", {"modelsync.actions": len(actions)}):
            for action in actions:
                if self._deliver(action):
                    delivered += 1
        record_flush(time.perf_counter() - start)

        logger.info(
            "Published sync actions",
            extra={"delivered": delivered, "failed": len(actions) - delivered},
        )
        return delivered

    def _deliver(self, action: Action) -> bool:
        channel = action.channel_identity
        try:
            self.transport.publish(channel, action)
        except Exception:
            logger.error(
                "Failed to deliver sync action",
                extra={"channel": channel, "kind": str(action.kind)},
                exc_info=True,
            )
            record_delivery(False)
            return False
        record_delivery(True)
        return True
