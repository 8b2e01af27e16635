"""Per-test transaction lifecycle."""

import enum
from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog

from txsandbox.core.config import EnvironmentOptions
from txsandbox.core.database import DatabaseHolder
from txsandbox.core.exceptions import (
    EnvironmentNotInitializedException,
    NoActiveTransactionException,
    TransactionAlreadyActiveException,
)
from txsandbox.interfaces.transaction_client import TransactionClientInterface, TransactionInterface

logger = structlog.get_logger(__name__)


class ContextState(enum.Enum):
    """Lifecycle state of a TransactionContext"""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    ACTIVE = "active"


class TransactionContext:
    """
    Owns the database handle and the transaction of the running test.

    Uninitialized -> Initialized (setup, once) -> Active (begin) -> Initialized (rollback) -> ...

    Out-of-order calls raise instead of being ignored, so a misconfigured
    runner fails on the first test rather than leaking data between tests.
    Not safe for tests running concurrently against the same context.
    """

    def __init__(self, options: EnvironmentOptions):
        self.options = options
        self.database = DatabaseHolder(options.client)
        self._transaction: TransactionInterface | None = None

    @property
    def state(self) -> ContextState:
        if not self.database.is_initialized:
            return ContextState.UNINITIALIZED
        if self._transaction is None:
            return ContextState.INITIALIZED
        return ContextState.ACTIVE

    def get_database(self) -> TransactionClientInterface | None:
        return self.database.client

    def get_current_transaction(self) -> TransactionInterface | None:
        return self._transaction

    async def setup(self) -> None:
        """Obtain the database handle; later calls are no-ops."""
        if self.database.is_initialized:
            return
        await self.database.get()

    async def begin_transaction(self) -> TransactionInterface:
        """
        Open the transaction for the next test.

        :return: The new current transaction
        :raises EnvironmentNotInitializedException: If setup() has not run
        :raises TransactionAlreadyActiveException: If the previous transaction was never rolled back
        """
        client = self.database.client
        if client is None:
            raise EnvironmentNotInitializedException()
        if self._transaction is not None:
            raise TransactionAlreadyActiveException()

        self._transaction = await client.begin_transaction()
        logger.debug("transaction_begun", transaction=repr(self._transaction))
        return self._transaction

    async def rollback_transaction(self) -> None:
        """
        Roll back the current transaction and clear it.

        The transaction is cleared even when the rollback fails, then the
        driver error is re-raised.
        :raises NoActiveTransactionException: If no transaction is open
        """
        transaction = self._transaction
        if transaction is None:
            raise NoActiveTransactionException()

        self._transaction = None
        try:
            await transaction.rollback()
        except Exception as e:
            logger.error("transaction_rollback_failed", error=str(e), error_type=type(e).__name__)
            raise

        logger.debug("transaction_rolled_back")

    async def before_each(self) -> TransactionInterface:
        """Runner hook: set up on first use, then begin."""
        await self.setup()
        return await self.begin_transaction()

    async def after_each(self) -> None:
        """Runner hook: roll back."""
        await self.rollback_transaction()

    @asynccontextmanager
    async def isolated(self) -> AsyncIterator[TransactionInterface]:
        """Run the enclosed block in a transaction that is always rolled back."""
        transaction = await self.before_each()
        try:
            yield transaction
        finally:
            await self.after_each()

    async def teardown(self) -> None:
        """
        End of run: roll back a transaction left open, then dispose the database handle.

        Returns the context to Uninitialized; a later setup() reconnects.
        """
        try:
            if self._transaction is not None:
                await self.rollback_transaction()
        finally:
            await self.database.dispose()
