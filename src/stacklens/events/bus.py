"""Synchronous event bus carrying analysis events out to the integration layer."""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class EventBus:
    """Synchronous publish-subscribe event bus.

    Listeners subscribe to one event type or to every event. Events are
    delivered in registration order, global listeners first. A listener that
    raises is logged and skipped so the remaining listeners still run.
    """

    def __init__(self) -> None:
        self._listeners: dict[type, list[Listener]] = {}
        self._global_listeners: list[Listener] = []

    def subscribe(self, event_type: type, callback: Listener) -> None:
        """Register a callback for a specific event type."""
        self._listeners.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type: type, callback: Listener) -> None:
        listeners = self._listeners.get(event_type, [])
        if callback in listeners:
            listeners.remove(callback)

    def on_all(self, callback: Listener) -> None:
        """Register a callback that receives every event."""
        self._global_listeners.append(callback)

    def emit(self, event: Any) -> None:
        """Dispatch an event to all matching listeners."""
        for cb in [*self._global_listeners, *self._listeners.get(type(event), [])]:
            try:
                cb(event)
            except Exception:
                logger.exception("Listener %r failed on %s", cb, type(event).__name__)
