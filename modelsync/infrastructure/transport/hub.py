"""In-process subscription hub.

A transport that fans published actions out to handlers registered per
channel. Subscribers address channels with the same scope instances the
engine publishes on:

    hub = SubscriptionHub(renderer=TodoRenderer())

    @hub.on(registry.scope(Todo, "by_project", project.id))
    def handle(delivery):
        push_to_browser(delivery.channel, delivery.payload)

Handler errors are logged and do not stop other handlers.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from modelsync.domain.entities import Action
from modelsync.domain.errors import TransportDeliveryError
from modelsync.domain.protocols import FragmentRenderer
from modelsync.domain.scopes import ScopeInstance
from modelsync.infrastructure.telemetry import get_logger

logger = get_logger(__name__)


@dataclass
class Delivery:
    """One action delivered to one channel.

    Attributes:
        channel: Channel identity the action was published on
        action: The published action
        payload: Rendered fragment, or None without a renderer
        timestamp: When the action was published
    """

    channel: str
    action: Action
    payload: Any | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


DeliveryHandler = Callable[[Delivery], Any]
ChannelKey = str | ScopeInstance


def _channel(key: ChannelKey) -> str:
    if isinstance(key, ScopeInstance):
        return key.channel_identity
    return key


class SubscriptionHub:
    """Transport delivering actions to in-process subscribers.

    Attributes:
        renderer: Optional fragment renderer invoked once per action
        published: Every delivery, in publish order
    """

    def __init__(self, renderer: FragmentRenderer | None = None) -> None:
        self.renderer = renderer
        self.published: list[Delivery] = []
        self._handlers: dict[str, list[DeliveryHandler]] = {}

    def subscribe(self, key: ChannelKey, handler: DeliveryHandler) -> Callable[[], None]:
        """Register a handler for a channel. Returns a callable that unsubscribes it."""
        channel = _channel(key)
        self._handlers.setdefault(channel, []).append(handler)
        return lambda: self.unsubscribe(channel, handler)

    def on(self, key: ChannelKey) -> Callable[[DeliveryHandler], DeliveryHandler]:
        """Decorator form of subscribe()."""
        def decorator(handler: DeliveryHandler) -> DeliveryHandler:
            self.subscribe(key, handler)
            return handler
        return decorator

    def unsubscribe(self, key: ChannelKey, handler: DeliveryHandler | None = None) -> None:
        """Remove one handler, or every handler of the channel."""
        channel = _channel(key)
        if handler is None:
            self._handlers.pop(channel, None)
            return
        handlers = [h for h in self._handlers.get(channel, []) if h is not handler]
        if handlers:
            self._handlers[channel] = handlers
        else:
            self._handlers.pop(channel, None)

    def subscriber_count(self, key: ChannelKey) -> int:
        return len(self._handlers.get(_channel(key), []))

    def publish(self, channel_identity: str, action: Action) -> None:
        payload = self._render(channel_identity, action)
        delivery = Delivery(channel=channel_identity, action=action, payload=payload)
        self.published.append(delivery)

        for handler in self._handlers.get(channel_identity, [])[:]:
            try:
                handler(delivery)
            except Exception:
                logger.error(
                    "Subscription handler failed",
                    extra={"channel": channel_identity, "kind": str(action.kind)},
                    exc_info=True,
                )

    def deliveries_for(self, key: ChannelKey) -> list[Delivery]:
        """Deliveries published on one channel, in order."""
        channel = _channel(key)
        return [delivery for delivery in self.published if delivery.channel == channel]

    def clear(self) -> None:
        """Forget published deliveries (subscriptions are kept)."""
        self.published.clear()

    def _render(self, channel_identity: str, action: Action) -> Any | None:
        if self.renderer is None:
            return None
        try:
            return self.renderer.render(action, action.render_context)
        except Exception as exc:
            raise TransportDeliveryError(
                message=f"Failed to render fragment for {channel_identity}",
                channel=channel_identity,
                details={"kind": str(action.kind)},
            ) from exc
