"""
Global test configuration and fixtures.

Shared by unit and integration tests:
- tests/unit/conftest.py        - Fake transaction client, isolated accessors
- tests/integration/conftest.py - SQLite through SQLAlchemy, sandbox fixture installed

All async tests share one session-wide event loop, so the engine created
by the first integration test stays usable for the rest of the run.
"""

import pytest
from pytest_asyncio import is_async_test
from structlog.testing import capture_logs

pytest_plugins = ["pytester"]


def pytest_collection_modifyitems(items):
    session_scope_marker = pytest.mark.asyncio(loop_scope="session")
    for async_test in (item for item in items if is_async_test(item)):
        async_test.add_marker(session_scope_marker, append=False)


# ============================================================================
# Sample Data Fixtures (No Database Dependencies)
# ============================================================================


@pytest.fixture
def sample_user_data():
    """Standard user fields for override tests."""
    return {"name": "Custom Name", "email": "custom@example.com"}


@pytest.fixture
def sample_users_data():
    """Three distinct users for array override tests."""
    return [
        {"name": "Alice", "email": "alice@example.com"},
        {"name": "Bob", "email": "bob@example.com"},
        {"name": "Charlie", "email": "charlie@example.com"},
    ]


# ============================================================================
# Logging
# ============================================================================


@pytest.fixture
def captured_logs():
    """Collect structlog events emitted during the test."""
    with capture_logs() as logs:
        yield logs
