"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Settings are read on first use, so the test environment must be set before any app imports
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-only-secret-key-with-at-least-32-chars")
os.environ.setdefault("CORS_ORIGINS", '["http://testserver"]')

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import Generator
from uuid import uuid4

import pytest
import structlog
from structlog.testing import CapturingLogger

from src.taskboard.core.config import get_settings
from src.taskboard.core.logging import clear_request_context
from src.taskboard.policies import Caller

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def capturing_logger() -> Generator[CapturingLogger]:
    """Route structlog output to an in-memory logger for assertions."""
    cap_logger = CapturingLogger()
    old_config = structlog.get_config()

    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=lambda *args, **kwargs: cap_logger,
        cache_logger_on_first_use=False,
    )

    clear_request_context()
    yield cap_logger
    clear_request_context()
    structlog.configure(**old_config)


@pytest.fixture
def admin() -> Caller:
    """An admin caller that is not tied to any project."""
    return Caller(user_id=uuid4(), is_admin=True)


@pytest.fixture
def anonymous() -> Caller:
    return Caller.anonymous()
