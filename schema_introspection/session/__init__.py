"""Session providers for catalog introspection."""

from .base import SessionProvider, Connection, Transaction
from .postgresql import PostgreSQLSessionProvider

__all__ = [
    "SessionProvider",
    "Connection",
    "Transaction",
    "PostgreSQLSessionProvider",
]
