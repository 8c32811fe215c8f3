"""Audit handler for translation events.

Writes user-initiated translation changes to the structured log as audit
records. The persistent audit store lives outside this engine.
"""

from typing import Any, Dict, Optional

from infrastructure.events.models import (
    TRANSLATION_DELETED,
    TRANSLATION_UPSERTED,
    Event,
)
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def _audit_action(event: Event) -> Optional[str]:
    if event.event_type == TRANSLATION_UPSERTED:
        return "translation.create" if event.payload.get("is_new") else "translation.update"
    if event.event_type == TRANSLATION_DELETED:
        return "translation.delete"
    return None


class AuditLogHandler:
    """Turns upsert/delete events into audit log entries.

    Only events carrying a user_id are audited, matching what the admin
    surfaces expose.
    """

    def __init__(self):
        self.log = logger.bind(handler="audit")

    def build_record(self, event: Event) -> Optional[Dict[str, Any]]:
        """Build the audit record for an event, or None if not auditable."""
        action = _audit_action(event)
        if action is None or not event.user_id:
            return None

        translation = event.payload.get("translation")
        return {
            "action": action,
            "entity_type": "Translation",
            "entity_id": getattr(translation, "id", None),
            "user_id": event.user_id,
            "tenant_id": event.tenant_id,
            "details": {
                "key": getattr(translation, "key", None),
                "locale": getattr(translation, "locale", None),
                "namespace": getattr(translation, "namespace", None),
                "is_plural": getattr(translation, "is_plural", None),
            },
            "correlation_id": str(event.correlation_id),
            "timestamp": event.timestamp.isoformat(),
        }

    def handle(self, event: Event) -> Optional[Dict[str, Any]]:
        """Log the audit record for an event and return it."""
        record = self.build_record(event)
        if record is not None:
            self.log.info("translation_audit", **record)
        return record

    __call__ = handle
