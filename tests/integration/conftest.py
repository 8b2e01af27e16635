"""
Integration test fixtures with SQLite through async SQLAlchemy.

Every test in this directory runs inside its own transaction: the
``sandbox_transaction`` fixture installed below begins it before the test
and rolls it back afterwards. Nothing is committed, so tests never clean up.

Scope Strategy:
- Engine: created on first use, shared by the whole session (StaticPool in-memory SQLite)
- Transaction: one per test, always rolled back
"""

import pytest_asyncio

from txsandbox import create_sandbox_engine, sandbox, setup_environment

from tests.fixtures import metadata


async def create_test_database():
    """Client factory: build the engine and the schema once."""
    engine = create_sandbox_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    return engine


sandbox_transaction = setup_environment(client=create_test_database)


@pytest_asyncio.fixture(scope="session", loop_scope="session", autouse=True)
async def dispose_database():
    """Dispose the engine once the last test has rolled back."""
    yield
    await sandbox.context.teardown()
