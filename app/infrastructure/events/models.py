"""Event models for the translation notification channel."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

TRANSLATION_UPSERTED = "translation:upserted"
TRANSLATION_DELETED = "translation:deleted"
TRANSLATIONS_RELOADED = "translations:reloaded"

EVENT_TYPES = (TRANSLATION_UPSERTED, TRANSLATION_DELETED, TRANSLATIONS_RELOADED)


@dataclass
class Event:
    """Record of something that happened to a translation set.

    Events are fire-and-forget notifications; nothing waits on subscribers.
    """

    event_type: str
    """The type of event (e.g., 'translation:upserted')."""

    timestamp: datetime = field(default_factory=datetime.now)
    """When the event occurred."""

    correlation_id: UUID = field(default_factory=uuid4)
    """Unique ID to track related events across the system."""

    user_id: Optional[str] = None
    """User who triggered the change, if known."""

    tenant_id: Optional[str] = None
    """Tenant owning the affected translations."""

    payload: Dict[str, Any] = field(default_factory=dict)
    """Event-specific data (translation record, flags, file name)."""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize event to a dictionary with ISO timestamp and string UUID."""
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        data["correlation_id"] = str(self.correlation_id)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        """Deserialize event from dictionary.

        Raises:
            ValueError: If required fields are missing or invalid.
        """
        try:
            timestamp = data.get("timestamp", datetime.now())
            if isinstance(timestamp, str):
                timestamp = datetime.fromisoformat(timestamp)

            correlation_id = data.get("correlation_id")
            if isinstance(correlation_id, str):
                correlation_id = UUID(correlation_id)
            elif correlation_id is None:
                correlation_id = uuid4()

            return cls(
                event_type=data["event_type"],
                timestamp=timestamp,
                correlation_id=correlation_id,
                user_id=data.get("user_id"),
                tenant_id=data.get("tenant_id"),
                payload=data.get("payload", {}),
            )
        except (KeyError, ValueError) as e:
            raise ValueError(f"Invalid event data: {e}") from e
