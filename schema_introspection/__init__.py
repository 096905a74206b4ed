"""Build an immutable model of a PostgreSQL database from its system catalog."""

from .catalog import build, Column, Relation, Schema, Database, Introspection
from .errors import (
    IntrospectionError,
    ConnectionError,
    TransactionError,
    CatalogQueryError,
    NotFoundError,
    CardinalityError,
)

__all__ = [
    "build",
    "Column",
    "Relation",
    "Schema",
    "Database",
    "Introspection",
    "IntrospectionError",
    "ConnectionError",
    "TransactionError",
    "CatalogQueryError",
    "NotFoundError",
    "CardinalityError",
]
