"""Synchronous event bus carrying table edit and restyle notifications."""

from typing import Any, Callable


class EventBus:
    """Synchronous publish-subscribe bus.

    Hosts emit edit events (row/column insertion and deletion, realignment)
    and stylers emit restyle outcomes.  Callbacks run in registration order
    before :meth:`emit` returns; a callback may unsubscribe itself while an
    event is being dispatched.
    """

    def __init__(self) -> None:
        self._listeners: dict[type, list[Callable]] = {}
        self._global_listeners: list[Callable] = []

    def subscribe(self, event_type: type, callback: Callable) -> None:
        """Call *callback* for every event of exactly *event_type*."""
        self._listeners.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type: type, callback: Callable) -> None:
        """Remove a callback registered with :meth:`subscribe`, if present."""
        callbacks = self._listeners.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def on_all(self, callback: Callable) -> None:
        """Call *callback* for every event regardless of type."""
        self._global_listeners.append(callback)

    def off_all(self, callback: Callable) -> None:
        if callback in self._global_listeners:
            self._global_listeners.remove(callback)

    def emit(self, event: Any) -> None:
        for callback in list(self._global_listeners):
            callback(event)
        for callback in list(self._listeners.get(type(event), [])):
            callback(event)
