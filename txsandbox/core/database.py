import inspect
from typing import Any, Callable

import structlog
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from txsandbox.core.config import settings
from txsandbox.core.constants import POSTGRES_ASYNC_PREFIX, POSTGRES_SYNC_PREFIX
from txsandbox.core.exceptions import InvalidClientException, MissingClientException
from txsandbox.implementations.sqlalchemy_client import SQLAlchemyTransactionClient
from txsandbox.interfaces.transaction_client import TransactionClientInterface

logger = structlog.get_logger(__name__)


def _is_memory_sqlite(url: str) -> bool:
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


def create_sandbox_engine(url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """
    Create the long-lived AsyncEngine tests run against.

    In-memory SQLite keeps a single connection (StaticPool) so the schema
    survives between tests; every SQLite connection enforces foreign keys.
    """
    url = url or settings.database_url
    echo = settings.echo if echo is None else echo

    if url.startswith(POSTGRES_SYNC_PREFIX):
        url = url.replace(POSTGRES_SYNC_PREFIX, POSTGRES_ASYNC_PREFIX, 1)

    if _is_memory_sqlite(url):
        engine = create_async_engine(
            url,
            poolclass=StaticPool,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(url, echo=echo, pool_pre_ping=True)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def adapt_client(handle: Any) -> TransactionClientInterface:
    """Wrap a raw AsyncEngine; pass interface implementations through."""
    if isinstance(handle, TransactionClientInterface):
        return handle
    if isinstance(handle, AsyncEngine):
        return SQLAlchemyTransactionClient(handle)
    raise InvalidClientException(handle)


class DatabaseHolder:
    """Obtains the database handle on first request and caches it for the run."""

    def __init__(self, client_factory: Callable[[], Any] | None):
        self._client_factory = client_factory
        self._client: TransactionClientInterface | None = None

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> TransactionClientInterface | None:
        return self._client

    async def get(self) -> TransactionClientInterface:
        """
        Return the cached handle, creating it on the first call.

        Connection errors raised by the client factory propagate unchanged.
        :return: Transaction-capable client
        :raises MissingClientException: If no client factory was configured
        """
        if self._client is not None:
            return self._client

        if self._client_factory is None:
            raise MissingClientException()
        if not callable(self._client_factory):
            raise InvalidClientException(self._client_factory)

        handle = self._client_factory()
        if inspect.isawaitable(handle):
            handle = await handle

        self._client = adapt_client(handle)
        logger.info("database_handle_initialized", client=type(self._client).__name__)
        return self._client

    async def dispose(self) -> None:
        """Dispose the cached handle; the next get() calls the client factory again."""
        client, self._client = self._client, None
        if client is not None:
            await client.dispose()
            logger.info("database_handle_disposed", client=type(client).__name__)
