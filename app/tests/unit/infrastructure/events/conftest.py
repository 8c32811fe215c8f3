"""Fixtures for translation event tests."""

from datetime import datetime
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from infrastructure.events import TRANSLATION_UPSERTED, EventDispatcher
from infrastructure.events.models import Event


@pytest.fixture
def event_factory():
    """Factory for creating test events."""

    def _factory(
        event_type: str = TRANSLATION_UPSERTED,
        timestamp: datetime = None,
        correlation_id=None,
        user_id: str = "user-1",
        tenant_id: str = None,
        payload: dict = None,
    ):
        return Event(
            event_type=event_type,
            timestamp=timestamp or datetime.now(),
            correlation_id=correlation_id or uuid4(),
            user_id=user_id,
            tenant_id=tenant_id,
            payload=payload or {},
        )

    return _factory


@pytest.fixture
def dispatcher():
    """A fresh dispatcher per test."""
    return EventDispatcher(max_listeners=3)


@pytest.fixture
def mock_event_handler():
    """Mock event handler function."""
    return MagicMock()
