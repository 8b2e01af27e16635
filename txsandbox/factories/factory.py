from collections.abc import Mapping
from typing import Any

import structlog
from sqlalchemy import MetaData

from txsandbox.core.config import settings
from txsandbox.core.exceptions import ConfigurationException, DependencyDepthException, UnknownTableException
from txsandbox.factories.resolver import Override, Resolver, ResolverContext, parse_override, resolve_row
from txsandbox.factories.sequence import Sequence
from txsandbox.interfaces.transaction_client import TransactionInterface

logger = structlog.get_logger(__name__)


def _tables_of(schema: Any) -> Mapping[str, Any]:
    if isinstance(schema, MetaData):
        return schema.tables
    if isinstance(schema, Mapping):
        return schema
    raise ConfigurationException(f"Schema must be a MetaData or a mapping of tables, got {type(schema).__name__}")


class Factory:
    """
    Unbound factory for one table.

    Holds the resolver and the table's sequence. Call it with a transaction to
    get a :class:`BoundFactory` that can insert rows.
    """

    def __init__(self, schema: Any, table: str, resolver: Resolver, sequence: Sequence | None = None):
        tables = _tables_of(schema)
        if table not in tables:
            raise UnknownTableException(table, list(tables))
        if not callable(resolver):
            raise ConfigurationException(f"Resolver for table '{table}' must be callable")

        self.name = table
        self.table = tables[table]
        self.resolver = resolver
        self.sequence = sequence or Sequence()

    def __call__(self, transaction: TransactionInterface) -> "BoundFactory":
        return BoundFactory(self, transaction)

    def __repr__(self):
        return f"<Factory (table='{self.name}')>"


class BoundFactory:
    """Factory bound to one transaction; every row it creates is rolled back with it."""

    def __init__(
        self,
        factory: Factory,
        transaction: TransactionInterface,
        parents: tuple[Factory, ...] = (),
    ):
        self.factory = factory
        self.transaction = transaction
        self.parents = parents

    def use(self, dependency: Factory) -> "BoundFactory":
        """
        Bind a dependency factory to the same transaction.

        :param dependency: Factory of the referenced table
        :return: Bound dependency, tracked as a child of this factory
        :raises DependencyDepthException: If the chain of nested factories grows past the limit
        """
        chain = self.parents + (self.factory,)
        if len(chain) >= settings.max_dependency_depth:
            raise DependencyDepthException(
                tuple(f.name for f in chain) + (dependency.name,), settings.max_dependency_depth
            )
        return BoundFactory(dependency, self.transaction, chain)

    async def create(self, override: Override = None) -> dict[str, Any] | list[dict[str, Any]]:
        """
        Insert rows and return them.

        - ``create()``: one row with resolver defaults
        - ``create({...})``: one row with overrides
        - ``create(n)``: list of ``n`` rows
        - ``create([{...}, ...])``: one row per mapping, same order

        Returned rows are the values given to the insert, not re-read from the database.
        """
        overrides, many = parse_override(override)
        rows = [await self._create_one(row_override) for row_override in overrides]
        return rows if many else rows[0]

    async def _create_one(self, override: Mapping[str, Any]) -> dict[str, Any]:
        sequence = self.factory.sequence.next()
        context = ResolverContext(sequence=sequence, use=self.use)

        row = await resolve_row(self.factory.resolver, context, override)
        await self.transaction.insert(self.factory.table, row)

        logger.debug("factory_row_created", table=self.factory.name, sequence=sequence, depth=len(self.parents))
        return row

    def __repr__(self):
        return f"<BoundFactory (table='{self.factory.name}')>"


def define_factory(*, schema: Any, table: str, resolver: Resolver, sequence: Sequence | None = None) -> Factory:
    """
    Define a factory for ``table`` in ``schema``.

    :param schema: MetaData or mapping of table name to table
    :param table: Name of the table rows are inserted into
    :param resolver: Function ``(context) -> fields``; assign ``id`` explicitly, usually ``context.sequence``
    :param sequence: Counter to share with other factories (one per factory if omitted)
    :return: Unbound factory
    """
    return Factory(schema=schema, table=table, resolver=resolver, sequence=sequence)
