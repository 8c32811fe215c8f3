"""Translation notification channel.

Usage:

    from infrastructure.events import EventDispatcher, TRANSLATION_UPSERTED

    dispatcher = EventDispatcher(max_listeners=100)

    @dispatcher.register_handler(TRANSLATION_UPSERTED)
    def on_upsert(event):
        print(event.payload["translation"].key)
"""

from infrastructure.events.dispatcher import EventDispatcher
from infrastructure.events.handlers import AuditLogHandler
from infrastructure.events.models import (
    EVENT_TYPES,
    TRANSLATION_DELETED,
    TRANSLATION_UPSERTED,
    TRANSLATIONS_RELOADED,
    Event,
)

__all__ = [
    "Event",
    "EventDispatcher",
    "AuditLogHandler",
    "EVENT_TYPES",
    "TRANSLATION_UPSERTED",
    "TRANSLATION_DELETED",
    "TRANSLATIONS_RELOADED",
]
