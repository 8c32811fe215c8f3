"""Unit tests for translation event models."""

from datetime import datetime
from uuid import uuid4

import pytest

from infrastructure.events.models import EVENT_TYPES, Event

pytestmark = pytest.mark.unit


class TestEvent:
    """Tests for Event."""

    def test_event_creation_with_all_fields(self, event_factory):
        event = event_factory(
            event_type="translation:deleted",
            user_id="user-9",
            tenant_id="acme",
            payload={"key": "value"},
        )

        assert event.event_type == "translation:deleted"
        assert event.user_id == "user-9"
        assert event.tenant_id == "acme"
        assert event.payload == {"key": "value"}
        assert isinstance(event.timestamp, datetime)
        assert event.correlation_id is not None

    def test_event_creation_with_defaults(self):
        event = Event(event_type="translations:reloaded")

        assert event.user_id is None
        assert event.tenant_id is None
        assert event.payload == {}
        assert isinstance(event.timestamp, datetime)

    def test_event_types(self):
        assert EVENT_TYPES == (
            "translation:upserted",
            "translation:deleted",
            "translations:reloaded",
        )

    def test_event_to_dict_serialization(self, event_factory):
        event_dict = event_factory().to_dict()

        assert set(event_dict) == {
            "event_type",
            "timestamp",
            "correlation_id",
            "user_id",
            "tenant_id",
            "payload",
        }
        assert isinstance(event_dict["timestamp"], str)
        assert isinstance(event_dict["correlation_id"], str)

    def test_event_from_dict_round_trip(self, event_factory):
        original = event_factory(payload={"locale": "fr"}, tenant_id="acme")

        restored = Event.from_dict(original.to_dict())

        assert restored == original

    def test_event_from_dict_with_string_timestamp(self):
        data = {
            "event_type": "translation:upserted",
            "timestamp": "2025-12-04T10:30:00",
            "correlation_id": str(uuid4()),
        }

        event = Event.from_dict(data)

        assert event.timestamp == datetime(2025, 12, 4, 10, 30)
        assert event.payload == {}

    def test_event_from_dict_generates_correlation_id(self):
        event = Event.from_dict({"event_type": "translation:upserted"})
        assert event.correlation_id is not None

    def test_event_from_dict_missing_required_field(self):
        with pytest.raises(ValueError, match="Invalid event data"):
            Event.from_dict({"timestamp": datetime.now(), "user_id": "u"})

    def test_event_from_dict_invalid_correlation_id(self):
        with pytest.raises(ValueError):
            Event.from_dict({"event_type": "x", "correlation_id": "not-a-uuid"})
