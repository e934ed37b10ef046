"""Unit tests for event channels."""

from unittest.mock import Mock

import pytest
from json_monitor.monitoring import EventChannel


class TestEventChannel:
    """Test cases for EventChannel."""

    @pytest.fixture
    def channel(self):
        return EventChannel("data_loaded")

    def test_initialization(self, channel):
        """Test a new channel has no listeners."""
        assert channel.name == "data_loaded"
        assert channel.listener_count == 0
        assert repr(channel) == "EventChannel(data_loaded, listeners=0)"

    def test_emit_without_listeners(self, channel):
        """Test emitting with no listeners does nothing."""
        channel.emit("payload")

    def test_emit_reaches_all_listeners_in_order(self, channel):
        """Test delivery order matches subscription order."""
        received = []
        channel.subscribe(lambda payload: received.append(("first", payload)))
        channel.subscribe(lambda payload: received.append(("second", payload)))

        channel.emit("a")
        channel.emit("b")

        assert received == [("first", "a"), ("second", "a"), ("first", "b"), ("second", "b")]

    def test_unsubscribe_callable(self, channel):
        """Test the returned function removes the listener."""
        listener = Mock()
        unsubscribe = channel.subscribe(listener)

        unsubscribe()
        channel.emit("payload")

        listener.assert_not_called()
        assert channel.listener_count == 0

    def test_unsubscribe_unknown_listener(self, channel):
        """Test removing a listener that was never added."""
        assert channel.unsubscribe(Mock()) is False

    def test_duplicate_registration(self, channel):
        """Test a listener registered twice is called twice."""
        listener = Mock()
        channel.subscribe(listener)
        channel.subscribe(listener)

        channel.emit("payload")

        assert listener.call_count == 2

    def test_listener_may_unsubscribe_during_emit(self, channel):
        """Test unsubscribing from inside a listener is safe."""
        later = Mock()
        holder = {}

        def once(payload):
            holder["unsubscribe"]()

        holder["unsubscribe"] = channel.subscribe(once)
        channel.subscribe(later)

        channel.emit("first")
        channel.emit("second")

        assert later.call_count == 2
        assert channel.listener_count == 1

    def test_listener_error_propagates(self, channel):
        """Test an exception in a listener reaches the emitter."""
        after = Mock()
        channel.subscribe(Mock(side_effect=RuntimeError("listener failed")))
        channel.subscribe(after)

        with pytest.raises(RuntimeError):
            channel.emit("payload")

        after.assert_not_called()

    def test_clear(self, channel):
        """Test removing every listener."""
        channel.subscribe(Mock())
        channel.subscribe(Mock())

        channel.clear()

        assert channel.listener_count == 0
