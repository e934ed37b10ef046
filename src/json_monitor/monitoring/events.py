"""
Multi-subscriber notification channels.

Each channel keeps an ordered list of listeners and calls them synchronously,
in subscription order, every time a payload is emitted. A listener that
raises stops the fan-out and the exception reaches the emitter.
"""

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E")

Listener = Callable[[E], None]


class EventChannel(Generic[E]):
    """A named publish/subscribe channel for one payload type."""

    def __init__(self, name: str):
        self.name = name
        self._listeners: list[Callable[[E], None]] = []

    def subscribe(self, listener: Callable[[E], None]) -> Callable[[], None]:
        """
        Register a listener.

        The same callable may be registered more than once and is then
        called once per registration.

        Returns:
            A function that removes this registration
        """
        self._listeners.append(listener)
        logger.debug("Listener added to %s (%d total)", self.name, len(self._listeners))

        def unsubscribe() -> None:
            self.unsubscribe(listener)

        return unsubscribe

    def unsubscribe(self, listener: Callable[[E], None]) -> bool:
        """Remove one registration of a listener; returns False if it was not registered."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def emit(self, payload: E) -> None:
        """Deliver a payload to every listener in subscription order."""
        # Copy so listeners may unsubscribe while being called
        for listener in list(self._listeners):
            listener(payload)

    def clear(self) -> None:
        self._listeners.clear()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def __repr__(self) -> str:
        return f"EventChannel({self.name}, listeners={len(self._listeners)})"
