"""
End-to-end tests for setup_environment() in a separate pytest run.

The inner run has its own conftest calling setup_environment(), so it runs
in a subprocess where the process-wide accessor is still free.
"""

import pytest

INNER_INI = """
[pytest]
asyncio_mode = auto
asyncio_default_fixture_loop_scope = session
"""

INNER_SCHEMA = """
from sqlalchemy import Column, Integer, MetaData, Table

metadata = MetaData()
items = Table("items", metadata, Column("id", Integer, primary_key=True))
"""

INNER_CONFTEST = """
from txsandbox import create_sandbox_engine, setup_environment

from inner_schema import metadata


async def create_database():
    engine = create_sandbox_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    return engine


sandbox_transaction = setup_environment(client=create_database)
"""

INNER_TESTS = """
import pytest
from sqlalchemy import func, insert, select

from txsandbox import sandbox

from inner_schema import items

pytestmark = pytest.mark.asyncio(loop_scope="session")


async def count_items():
    return await sandbox.client.scalar(select(func.count()).select_from(items))


async def test_writes_then_fails():
    await sandbox.client.execute(insert(items).values(id=1))
    assert await count_items() == 1
    raise AssertionError("deliberate failure")


async def test_previous_write_was_rolled_back():
    assert await count_items() == 0


async def test_writes_again_with_same_id():
    await sandbox.client.execute(insert(items).values(id=1))
    assert await count_items() == 1
"""


@pytest.mark.e2e
class TestSetupEnvironmentPlugin:
    def test_rollback_runs_after_failing_test(self, pytester):
        """Test writes of a failing test are rolled back before the next test."""
        pytester.makeini(INNER_INI)
        pytester.makepyfile(inner_schema=INNER_SCHEMA, conftest=INNER_CONFTEST, test_inner=INNER_TESTS)

        result = pytester.runpytest_subprocess("-p", "no:cacheprovider")

        result.assert_outcomes(passed=2, failed=1)
        result.stdout.fnmatch_lines(["*deliberate failure*"])

    def test_missing_client_fails_every_test(self, pytester):
        """Test a missing client surfaces as a configuration error, not a silent pass."""
        pytester.makeini(INNER_INI)
        pytester.makepyfile(
            conftest="from txsandbox import setup_environment\n\nsandbox_transaction = setup_environment()\n",
            test_inner=(
                "import pytest\n\n"
                "pytestmark = pytest.mark.asyncio(loop_scope=\"session\")\n\n\n"
                "async def test_anything():\n    pass\n"
            ),
        )

        result = pytester.runpytest_subprocess("-p", "no:cacheprovider")

        result.assert_outcomes(errors=1)
        result.stdout.fnmatch_lines(["*MissingClientException*"])
