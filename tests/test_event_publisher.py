"""
Tests for EventPublisher (best-effort publish through celery)
"""
from datetime import datetime
from unittest.mock import patch

from kombu.exceptions import OperationalError

from cartstore.services.event_publisher import (
    ITEM_ADDED,
    EventPublisher,
    handle_cart_event_task,
)


class TestPublish:
    """Tests for EventPublisher.publish."""

    def test_envelope(self):
        """Test the task gets the event envelope."""
        with patch.object(handle_cart_event_task, "delay") as delay:
            assert EventPublisher().publish(ITEM_ADDED, {"user_id": 1}) is True

        event = delay.call_args.args[0]
        assert event["event_type"] == "cart.item.added"
        assert event["payload"] == {"user_id": 1}
        assert isinstance(datetime.fromisoformat(event["timestamp"].replace("Z", "+00:00")), datetime)

    def test_broker_failure_is_swallowed(self):
        """Test broker failure does not propagate."""
        with patch.object(handle_cart_event_task, "delay", side_effect=OperationalError("no broker")):
            assert EventPublisher().publish(ITEM_ADDED, {"user_id": 1}) is False

    def test_unexpected_failure_is_swallowed(self):
        """Test unexpected publish errors do not propagate."""
        with patch.object(handle_cart_event_task, "delay", side_effect=RuntimeError("boom")):
            assert EventPublisher().publish(ITEM_ADDED, {}) is False


def test_consumer_task_returns_event():
    """Test the consumer task returns the parsed event."""
    event = {"event_type": ITEM_ADDED, "timestamp": "2026-01-15T12:00:00Z", "payload": {}}

    assert handle_cart_event_task(event) == event
