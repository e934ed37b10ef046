"""
Observable fields with equality-gated change notification.

Fields exposed to a presentation layer are wrapped so that assigning a new,
unequal value notifies subscribers with ``(name, old_value, new_value)``.
Assigning an equal value is silent.
"""

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

PropertyChangedCallback = Callable[[str, Any, Any], None]


class ObservableField(Generic[T]):
    """A single named value that publishes changes."""

    def __init__(self, name: str, initial: T, on_change: PropertyChangedCallback | None = None):
        self.name = name
        self._value = initial
        self._on_change = on_change

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> bool:
        """
        Assign a value and publish if it differs from the current one.

        Returns:
            True if the value changed
        """
        if self._value == value:
            return False
        old = self._value
        self._value = value
        if self._on_change:
            self._on_change(self.name, old, value)
        return True

    def __repr__(self) -> str:
        return f"ObservableField({self.name}={self._value!r})"


class ObservableProperties:
    """
    Registry of observable fields sharing one subscriber list.

    Subscribers are called synchronously in subscription order.
    """

    def __init__(self):
        self._fields: dict[str, ObservableField[Any]] = {}
        self._subscribers: list[PropertyChangedCallback] = []

    def define(self, name: str, initial: Any = None) -> ObservableField[Any]:
        """Register a field and return it."""
        if name in self._fields:
            raise KeyError(f"Property already defined: {name}")
        observable = ObservableField(name, initial, on_change=self._publish)
        self._fields[name] = observable
        return observable

    def get(self, name: str) -> Any:
        return self._fields[name].value

    def set(self, name: str, value: Any) -> bool:
        return self._fields[name].set(value)

    def subscribe(self, callback: PropertyChangedCallback) -> Callable[[], None]:
        """
        Register a change callback.

        Returns:
            A function that removes the callback again
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def snapshot(self) -> dict[str, Any]:
        """Get the current value of every field."""
        return {name: field.value for name, field in self._fields.items()}

    def _publish(self, name: str, old: Any, new: Any) -> None:
        logger.debug("Property %s changed: %r -> %r", name, old, new)
        for callback in list(self._subscribers):
            callback(name, old, new)

    def __contains__(self, name: str) -> bool:
        return name in self._fields
