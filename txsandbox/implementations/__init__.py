"""
Concrete implementations of the client interfaces.
"""

from .sqlalchemy_client import SQLAlchemyTransaction, SQLAlchemyTransactionClient

__all__ = [
    "SQLAlchemyTransaction",
    "SQLAlchemyTransactionClient",
]
