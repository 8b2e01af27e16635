"""
Transaction client interfaces.

These interfaces capture exactly what the sandbox needs from a database
client: open a transaction, insert a row, run a statement, roll back. The
SQLAlchemy adapter and the in-memory test doubles both implement them, so the
factory layer never depends on a concrete driver.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping


class TransactionInterface(ABC):
    """An open database transaction owned by a single test."""

    @abstractmethod
    async def insert(self, table: Any, values: Mapping[str, Any]) -> Mapping[str, Any]:
        """
        Insert one row into table.

        Implementations must not depend on the store reporting generated
        values: the returned mapping is ``values`` exactly as given.

        :param table: Table descriptor
        :param values: Column values for the new row
        :return: The values that were inserted
        """
        pass

    @abstractmethod
    async def execute(self, statement: Any, *args: Any, **kwargs: Any) -> Any:
        """
        Execute a statement inside the transaction.

        :param statement: Driver-specific statement
        :return: Driver-specific result
        """
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """
        Roll back every write made in this transaction and release it.

        The transaction is unusable afterwards.
        """
        pass

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """Whether the transaction is still open."""
        pass


class TransactionClientInterface(ABC):
    """Long-lived database handle that can open transactions."""

    @abstractmethod
    async def begin_transaction(self) -> TransactionInterface:
        """
        Open a new transaction.

        :return: The open transaction
        """
        pass

    async def dispose(self) -> None:
        """Release the underlying connections at the end of the run. No-op by default."""
        return None
