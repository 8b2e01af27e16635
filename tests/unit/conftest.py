"""
Unit test fixtures with in-memory test doubles.

Unit tests should be:
- Fast (no database)
- Isolated (fresh context and accessor per test)
- Deterministic (no flakiness)
"""

import pytest

from txsandbox.core.accessor import SandboxAccessor
from txsandbox.core.config import EnvironmentOptions
from txsandbox.core.transaction_context import TransactionContext

from tests.fixtures import FakeTransactionClient


@pytest.fixture
def fake_client():
    """Transaction client that keeps rows in memory."""
    return FakeTransactionClient()


@pytest.fixture
def context(fake_client):
    """Uninitialized context whose client factory returns fake_client."""
    return TransactionContext(EnvironmentOptions(client=lambda: fake_client))


@pytest.fixture
async def active_context(context):
    """Context with an open transaction; rolled back after the test if still open."""
    await context.setup()
    await context.begin_transaction()
    yield context
    if context.get_current_transaction() is not None:
        await context.rollback_transaction()


@pytest.fixture
async def fake_transaction(active_context):
    """The open transaction of active_context."""
    return active_context.get_current_transaction()


@pytest.fixture
def accessor():
    """Accessor independent of the process-wide one."""
    return SandboxAccessor()
