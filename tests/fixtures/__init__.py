"""
Test fixtures and utilities for the txsandbox test suite.

- schema: SQLAlchemy tables used by integration tests
- factories: users/posts factories bound through ``sandbox.client``
- fakes: in-memory transaction client for unit tests
"""

from .factories import composed_factory, factories, posts_factory, users_factory
from .fakes import FakeTransaction, FakeTransactionClient
from .schema import metadata, posts, schema, users

__all__ = [
    "composed_factory",
    "factories",
    "posts_factory",
    "users_factory",
    "FakeTransaction",
    "FakeTransactionClient",
    "metadata",
    "posts",
    "schema",
    "users",
]
