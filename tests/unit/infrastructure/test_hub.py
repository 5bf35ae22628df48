"""Tests for the in-process subscription hub."""

from unittest.mock import MagicMock

import pytest

from modelsync.domain.entities import Action, ActionKind
from modelsync.domain.errors import TransportDeliveryError
from modelsync.domain.scopes import Eq, ScopeRegistry
from modelsync.infrastructure.transport import Delivery, SubscriptionHub
from tests.fakes import Todo


@pytest.fixture
def open_scope(registry: ScopeRegistry):
    registry.declare_scope(Todo, "open", [], lambda: Eq("status", "open"))
    return registry.scope(Todo, "open")


class TestSubscriptions:
    """Test subscribing and receiving deliveries."""

    def test_handler_receives_delivery(self, hub: SubscriptionHub):
        received: list[Delivery] = []
        hub.subscribe("/todos", received.append)
        action = Action(Todo(id=1), ActionKind.NEW)

        hub.publish("/todos", action)

        assert len(received) == 1
        assert received[0].channel == "/todos"
        assert received[0].action is action
        assert received[0].payload is None

    def test_subscribe_with_scope_instance(self, hub: SubscriptionHub, open_scope):
        received: list[Delivery] = []

        @hub.on(open_scope)
        def handler(delivery):
            received.append(delivery)

        hub.publish("/todos/open", Action(Todo(id=1), ActionKind.NEW, scope=open_scope))

        assert len(received) == 1
        assert hub.subscriber_count(open_scope) == 1

    def test_other_channels_not_delivered(self, hub: SubscriptionHub):
        handler = MagicMock()
        hub.subscribe("/todos/1", handler)

        hub.publish("/todos/2", Action(Todo(id=2), ActionKind.UPDATE))

        handler.assert_not_called()

    def test_unsubscribe_callable(self, hub: SubscriptionHub):
        handler = MagicMock()
        unsubscribe = hub.subscribe("/todos", handler)

        unsubscribe()
        hub.publish("/todos", Action(Todo(), ActionKind.NEW))

        handler.assert_not_called()
        assert hub.subscriber_count("/todos") == 0

    def test_unsubscribe_all_handlers(self, hub: SubscriptionHub):
        hub.subscribe("/todos", MagicMock())
        hub.subscribe("/todos", MagicMock())

        hub.unsubscribe("/todos")

        assert hub.subscriber_count("/todos") == 0

    def test_failing_handler_does_not_stop_others(self, hub: SubscriptionHub, caplog):
        second = MagicMock()
        hub.subscribe("/todos", MagicMock(side_effect=RuntimeError("boom")))
        hub.subscribe("/todos", second)

        hub.publish("/todos", Action(Todo(), ActionKind.NEW))

        second.assert_called_once()
        assert "Subscription handler failed" in caplog.text


class TestPublishedLog:
    """Test the record of published deliveries."""

    def test_deliveries_for_channel(self, hub: SubscriptionHub, open_scope):
        hub.publish("/todos", Action(Todo(id=1), ActionKind.NEW))
        hub.publish("/todos/open", Action(Todo(id=1), ActionKind.NEW, scope=open_scope))

        assert len(hub.published) == 2
        assert [d.channel for d in hub.deliveries_for(open_scope)] == ["/todos/open"]

    def test_clear(self, hub: SubscriptionHub):
        hub.publish("/todos", Action(Todo(), ActionKind.NEW))
        hub.clear()
        assert hub.published == []


class TestRendering:
    """Test fragment rendering."""

    def test_renderer_output_is_payload(self):
        renderer = MagicMock()
        renderer.render.return_value = "<li>Ship</li>"
        hub = SubscriptionHub(renderer=renderer)
        action = Action(Todo(id=1), ActionKind.NEW, render_context={"viewer": 1})

        hub.publish("/todos", action)

        renderer.render.assert_called_once_with(action, {"viewer": 1})
        assert hub.published[0].payload == "<li>Ship</li>"

    def test_renderer_failure_raises_delivery_error(self):
        renderer = MagicMock()
        renderer.render.side_effect = ValueError("template missing")
        hub = SubscriptionHub(renderer=renderer)

        with pytest.raises(TransportDeliveryError) as exc_info:
            hub.publish("/todos", Action(Todo(), ActionKind.NEW))

        assert exc_info.value.channel == "/todos"
        assert isinstance(exc_info.value.__cause__, ValueError)
        assert hub.published == []
