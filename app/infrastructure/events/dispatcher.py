"""Event dispatcher owned by the translation service.

Each dispatcher keeps its own handler registry, so separate service
instances (and tests) never share subscribers. Handlers are called
synchronously in registration order.
"""

from threading import Lock
from typing import Any, Callable, Dict, List

from infrastructure.events.models import Event
from infrastructure.logging import get_module_logger

logger = get_module_logger()

EventHandler = Callable[[Event], Any]


class EventDispatcher:
    """Bounded in-process handler registry.

    Attributes:
        max_listeners: Maximum handlers allowed per event type.
    """

    def __init__(self, max_listeners: int = 100):
        self.max_listeners = max_listeners
        self._handlers: Dict[str, List[EventHandler]] = {}
        self._lock = Lock()

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """Register a handler for an event type.

        Raises:
            ValueError: If the event type already has max_listeners handlers.
        """
        with self._lock:
            handlers = self._handlers.setdefault(event_type, [])
            if len(handlers) >= self.max_listeners:
                raise ValueError(
                    f"Too many listeners for {event_type}: limit is {self.max_listeners}"
                )
            handlers.append(handler)
            total = len(handlers)
        logger.debug(
            "registered_event_handler",
            handler=getattr(handler, "__name__", type(handler).__name__),
            event_type=event_type,
            total_handlers=total,
        )

    def register_handler(self, event_type: str) -> Callable[[EventHandler], EventHandler]:
        """Decorator form of subscribe().

        Usage:
            @dispatcher.register_handler("translation:upserted")
            def on_upsert(event):
                ...
        """

        def decorator(handler: EventHandler) -> EventHandler:
            self.subscribe(event_type, handler)
            return handler

        return decorator

    def unsubscribe(self, event_type: str, handler: EventHandler) -> bool:
        """Remove a handler. Returns False if it was not registered."""
        with self._lock:
            handlers = self._handlers.get(event_type, [])
            if handler not in handlers:
                return False
            handlers.remove(handler)
            return True

    def dispatch(self, event: Event) -> List[Any]:
        """Dispatch event to all registered handlers.

        A failing handler is logged and skipped; remaining handlers still run.

        Returns:
            List of return values from the handlers that succeeded.
        """
        with self._lock:
            handlers = list(self._handlers.get(event.event_type, []))

        results = []
        for handler in handlers:
            try:
                results.append(handler(event))
            except Exception as e:
                logger.error(
                    "event_handler_failed",
                    handler=getattr(handler, "__name__", type(handler).__name__),
                    event_type=event.event_type,
                    error=str(e),
                    correlation_id=str(event.correlation_id),
                )
        return results

    def get_registered_events(self) -> List[str]:
        """List event types that have at least one handler."""
        with self._lock:
            return [name for name, handlers in self._handlers.items() if handlers]

    def get_handlers_for_event(self, event_type: str) -> List[EventHandler]:
        """Return a copy of the handlers registered for an event type."""
        with self._lock:
            return list(self._handlers.get(event_type, []))

    def clear(self) -> None:
        """Remove every handler."""
        with self._lock:
            self._handlers.clear()
