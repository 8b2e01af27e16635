"""
Row factories bound to the sandbox transaction.

Define one factory per table, compose them, and bind the set to the running
test's transaction::

    users = define_factory(
        schema=metadata,
        table="users",
        resolver=lambda ctx: {"id": ctx.sequence, "name": f"Test User {ctx.sequence}"},
    )
    factories = compose_factory({"users": users})
    user = await factories(sandbox.client).users.create()
"""

from .compose import FactorySet, compose_factory
from .deferred import Deferred, deferred
from .factory import BoundFactory, Factory, define_factory
from .resolver import ResolverContext
from .sequence import Sequence

__all__ = [
    "BoundFactory",
    "Deferred",
    "Factory",
    "FactorySet",
    "ResolverContext",
    "Sequence",
    "compose_factory",
    "deferred",
    "define_factory",
]
