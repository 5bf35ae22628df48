"""Tests for the action queue and publisher."""

from unittest.mock import MagicMock

import pytest

from modelsync.application import ActionQueue, Publisher
from modelsync.domain.entities import Action, ActionKind
from modelsync.domain.errors import ActionQueueClosedError
from tests.fakes import Todo


def make_actions(count: int) -> list[Action]:
    return [Action(Todo(id=i), ActionKind.UPDATE) for i in range(1, count + 1)]


class TestActionQueue:
    """Test queue lifecycle."""

    def test_push_and_extend_keep_order(self):
        queue = ActionQueue()
        first, second, third = make_actions(3)

        queue.push(first)
        queue.extend([second, third])

        assert len(queue) == 3
        assert list(queue) == [first, second, third]

    def test_drain_closes_queue(self):
        queue = ActionQueue()
        queue.extend(make_actions(2))

        drained = queue.drain()

        assert len(drained) == 2
        assert queue.closed
        assert len(queue) == 0

    def test_drained_at_most_once(self):
        queue = ActionQueue()
        queue.drain()

        with pytest.raises(ActionQueueClosedError):
            queue.drain()

    def test_closed_queue_rejects_actions(self):
        queue = ActionQueue()
        queue.discard()

        with pytest.raises(ActionQueueClosedError):
            queue.push(make_actions(1)[0])

    def test_discard_reports_dropped(self):
        queue = ActionQueue()
        queue.extend(make_actions(4))

        assert queue.discard() == 4
        assert queue.closed


class TestPublisher:
    """Test delivery to the transport."""

    def test_delivers_in_enqueue_order(self, mock_transport: MagicMock):
        queue = ActionQueue()
        actions = make_actions(3)
        queue.extend(actions)

        delivered = Publisher(mock_transport).flush(queue)

        assert delivered == 3
        assert [call.args for call in mock_transport.publish.call_args_list] == [
            ("/todos/1", actions[0]),
            ("/todos/2", actions[1]),
            ("/todos/3", actions[2]),
        ]

    def test_failed_delivery_does_not_stop_others(self, mock_transport: MagicMock, caplog):
        mock_transport.publish.side_effect = [None, ConnectionError("down"), None]
        queue = ActionQueue()
        queue.extend(make_actions(3))

        delivered = Publisher(mock_transport).flush(queue)

        assert delivered == 2
        assert mock_transport.publish.call_count == 3
        assert "Failed to deliver sync action" in caplog.text

    def test_empty_queue(self, mock_transport: MagicMock):
        queue = ActionQueue()

        assert Publisher(mock_transport).flush(queue) == 0
        assert queue.closed
        mock_transport.publish.assert_not_called()

    def test_queue_published_once(self, mock_transport: MagicMock):
        queue = ActionQueue()
        queue.extend(make_actions(1))
        publisher = Publisher(mock_transport)
        publisher.flush(queue)

        with pytest.raises(ActionQueueClosedError):
            publisher.flush(queue)
        assert mock_transport.publish.call_count == 1
