"""
Client interfaces for dependency injection.

The sandbox talks to the database only through these interfaces, so the
SQLAlchemy adapter and in-memory test doubles are interchangeable.
"""

from txsandbox.interfaces.transaction_client import TransactionClientInterface, TransactionInterface

__all__ = [
    "TransactionClientInterface",
    "TransactionInterface",
]
