"""Root test fixtures shared by every test package."""

import pytest
import structlog

from infrastructure.configuration import Settings


@pytest.fixture(autouse=True)
def reset_structlog_context():
    """Keep context variables bound in one test out of the next."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def app_settings():
    """Settings built from defaults only, ignoring the environment file."""
    return Settings(_env_file=None)
