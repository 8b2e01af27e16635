"""
pytest wiring for the transaction sandbox.

Usage in ``conftest.py``::

    from txsandbox import setup_environment

    sandbox_transaction = setup_environment(client=lambda: engine)

Every test then runs inside its own transaction, rolled back when the test
ends, and ``sandbox.client`` resolves to that transaction.
"""

from collections.abc import Mapping
from typing import Any, Callable

import pytest_asyncio
import structlog
from pydantic import ValidationError

from txsandbox.core.accessor import SandboxAccessor, sandbox
from txsandbox.core.config import EnvironmentOptions, settings
from txsandbox.core.exceptions import ConfigurationException
from txsandbox.core.logging_config import configure_logging
from txsandbox.core.transaction_context import TransactionContext

logger = structlog.get_logger(__name__)


def _build_options(options: EnvironmentOptions | Mapping[str, Any] | None, client: Callable[[], Any] | None):
    if options is None:
        options = {"client": client}
    elif client is not None:
        raise ConfigurationException("Pass the client either in options or as client=, not both")

    if isinstance(options, EnvironmentOptions):
        return options
    if not isinstance(options, Mapping):
        raise ConfigurationException(
            f"Options must be EnvironmentOptions or a mapping, got {type(options).__name__}; "
            "pass the client factory as client=..."
        )
    try:
        return EnvironmentOptions.model_validate(dict(options))
    except ValidationError as e:
        raise ConfigurationException(f"Invalid environment options: {e}") from e


def create_environment(
    options: EnvironmentOptions | Mapping[str, Any] | None = None,
    *,
    client: Callable[[], Any] | None = None,
    accessor: SandboxAccessor = sandbox,
) -> TransactionContext:
    """
    Build a TransactionContext and install it into ``accessor``.

    Runner-neutral: call ``before_each()`` / ``after_each()`` on the result
    from whatever per-test hooks the runner provides.
    """
    if settings.configure_logging:
        configure_logging()

    context = TransactionContext(_build_options(options, client))
    accessor.install(context)
    logger.info("environment_configured", has_client=context.options.client is not None)
    return context


def setup_environment(
    options: EnvironmentOptions | Mapping[str, Any] | None = None,
    *,
    client: Callable[[], Any] | None = None,
    accessor: SandboxAccessor = sandbox,
):
    """
    Configure the sandbox and return an autouse pytest fixture.

    Assign the result to a module-level name in a ``conftest.py``. The fixture
    sets the environment up on first use, begins a transaction before each
    test and rolls it back afterwards, also when the test fails. Requesting
    ``sandbox_transaction`` explicitly yields the open transaction.

    :param options: EnvironmentOptions or a mapping with the ``client`` option
    :param client: Shortcut for ``options={"client": client}``
    :param accessor: Accessor to install the context into
    :return: pytest fixture function
    """
    context = create_environment(options, client=client, accessor=accessor)

    @pytest_asyncio.fixture(autouse=True, name="sandbox_transaction")
    async def sandbox_transaction():
        async with context.isolated() as transaction:
            yield transaction

    return sandbox_transaction
