from typing import Any, Mapping

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, AsyncTransaction

from txsandbox.interfaces.transaction_client import TransactionClientInterface, TransactionInterface


class SQLAlchemyTransaction(TransactionInterface):
    """Transaction on a dedicated AsyncConnection, rolled back and closed at the end of a test."""

    def __init__(self, connection: AsyncConnection, transaction: AsyncTransaction):
        self.connection = connection
        self.transaction = transaction

    @property
    def is_active(self) -> bool:
        return self.transaction.is_active

    async def insert(self, table: Any, values: Mapping[str, Any]) -> Mapping[str, Any]:
        """Insert one row without RETURNING; the given values are the result."""
        await self.connection.execute(insert(table).values(dict(values)))
        return values

    async def execute(self, statement: Any, *args: Any, **kwargs: Any) -> Any:
        return await self.connection.execute(statement, *args, **kwargs)

    async def scalar(self, statement: Any, *args: Any, **kwargs: Any) -> Any:
        return await self.connection.scalar(statement, *args, **kwargs)

    async def scalars(self, statement: Any, *args: Any, **kwargs: Any) -> Any:
        return await self.connection.scalars(statement, *args, **kwargs)

    async def rollback(self) -> None:
        try:
            await self.transaction.rollback()
        finally:
            await self.connection.close()

    def __repr__(self):
        return f"<SQLAlchemyTransaction (active={self.is_active})>"


class SQLAlchemyTransactionClient(TransactionClientInterface):
    """Adapts an AsyncEngine to the transaction client interface."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def begin_transaction(self) -> SQLAlchemyTransaction:
        connection = await self.engine.connect()
        try:
            transaction = await connection.begin()
        except Exception:
            await connection.close()
            raise
        return SQLAlchemyTransaction(connection, transaction)

    async def dispose(self) -> None:
        """Close every pooled connection of the underlying engine."""
        await self.engine.dispose()
